"""Trading endpoints: buy and sell outcome positions.

Mounted at /api/v1/markets in main.py.
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_clearing.application.schemas import BuyRequest, SellRequest, TradeResponse
from src.pm_common.database import get_db_session
from src.pm_common.enums import TradeSide
from src.pm_common.response import ApiResponse, success_response
from src.pm_engine.application.service import get_market_engine
from src.pm_engine.engine.engine import MarketEngine
from src.pm_gateway.auth.dependencies import get_current_account


router = APIRouter(prefix="/markets", tags=["trading"])


@router.post("/{market_id}/buy")
async def buy_shares(
    market_id: int,
    body: BuyRequest,
    request: Request,
    account: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    async with db.begin():
        split, events = await engine.buy_shares(
            db, account, market_id, body.outcome, body.shares, body.payment
        )
    data = TradeResponse.from_split(
        market_id, TradeSide.BUY, body.outcome, body.shares, split,
        refund=body.payment - split.gross,
    )
    resp = success_response(data.model_dump(), [e.to_dict() for e in events])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/{market_id}/sell")
async def sell_shares(
    market_id: int,
    body: SellRequest,
    request: Request,
    account: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    async with db.begin():
        split, events = await engine.sell_shares(
            db, account, market_id, body.outcome, body.shares
        )
    data = TradeResponse.from_split(market_id, TradeSide.SELL, body.outcome, body.shares, split)
    resp = success_response(data.model_dump(), [e.to_dict() for e in events])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
