"""Settlement and claim endpoints.

POST /settlement/markets/{market_id}  — settle one market (owner or bot)
POST /settlement/batch                — settle many, skipping ineligible ids
POST /settlement/unsettled            — filter ids ready for settlement
POST /markets/{market_id}/claim       — claim winnings after settlement
"""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response
from src.pm_common.wad import wad_to_display
from src.pm_engine.application.service import get_market_engine
from src.pm_engine.engine.engine import MarketEngine
from src.pm_gateway.auth.dependencies import get_current_account
from src.pm_settlement.application.schemas import (
    BatchSettleRequest,
    BatchSettleResponse,
    ClaimResponse,
    SettleRequest,
    SettleResponse,
    UnsettledRequest,
)

router = APIRouter(prefix="/settlement", tags=["settlement"])
claims_router = APIRouter(prefix="/markets", tags=["settlement"])


@router.post("/markets/{market_id}")
async def settle_market(
    market_id: int,
    body: SettleRequest,
    request: Request,
    account: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    async with db.begin():
        market, events = await engine.settle_market(db, account, market_id, body.final_price)
    data = SettleResponse(
        market_id=market.id,
        winning_outcome=market.winning_outcome,
        final_price=body.final_price,
    )
    resp = success_response(data.model_dump(), [e.to_dict() for e in events])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/batch")
async def batch_settle_markets(
    body: BatchSettleRequest,
    request: Request,
    account: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    async with db.begin():
        settled, events = await engine.batch_settle_markets(
            db, account, body.market_ids, body.final_prices
        )
    data = BatchSettleResponse(
        requested=len(body.market_ids),
        settled_market_ids=settled,
        success_count=len(settled),
    )
    resp = success_response(data.model_dump(), [e.to_dict() for e in events])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/unsettled")
async def get_unsettled_markets(
    body: UnsettledRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    ready = await engine.get_unsettled_markets(db, body.market_ids)
    return success_response({"market_ids": ready})


@claims_router.post("/{market_id}/claim")
async def claim_winnings(
    market_id: int,
    request: Request,
    account: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    async with db.begin():
        amount, events = await engine.claim_winnings(db, account, market_id)
    data = ClaimResponse(market_id=market_id, amount=amount, amount_display=wad_to_display(amount))
    resp = success_response(data.model_dump(), [e.to_dict() for e in events])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
