"""pm_market REST endpoints.

POST /markets                         — create a market (caller is the creator)
GET  /markets                         — list with id cursor pagination
GET  /markets/{market_id}             — full detail
GET  /markets/{market_id}/quote       — bonding-curve price for a trade size
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.enums import Outcome, TradeSide
from src.pm_common.errors import InvalidShareAmountError
from src.pm_common.response import ApiResponse, success_response
from src.pm_engine.application.service import get_market_engine
from src.pm_engine.engine.engine import MarketEngine
from src.pm_gateway.auth.dependencies import get_current_account
from src.pm_market.application.schemas import (
    CreateMarketRequest,
    MarketDetail,
    MarketListItem,
    MarketListResponse,
    QuoteResponse,
)

router = APIRouter(prefix="/markets", tags=["markets"])


@router.post("", status_code=201)
async def create_market(
    body: CreateMarketRequest,
    request: Request,
    account: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    async with db.begin():
        market, events = await engine.create_market(
            db, account, body.token_address, body.initial_price, body.payment
        )
    resp = success_response(
        MarketDetail.from_domain(market).model_dump(), [e.to_dict() for e in events]
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_markets(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
    settled: bool | None = Query(None, description="Filter by settlement state"),
    limit: int = Query(20, ge=1, le=100),
    cursor: int | None = Query(None, description="Return markets with id below this"),
) -> ApiResponse:
    markets, next_cursor = await engine.list_markets(db, settled, cursor, limit)
    result = MarketListResponse(
        items=[MarketListItem.from_domain(m) for m in markets],
        next_cursor=next_cursor,
        has_more=next_cursor is not None,
    )
    resp = success_response(result.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{market_id}")
async def get_market(
    market_id: int,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    market = await engine.get_market(db, market_id)
    resp = success_response(MarketDetail.from_domain(market).model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{market_id}/quote")
async def quote(
    market_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
    outcome: Outcome = Query(...),
    shares: int = Query(...),
    side: TradeSide = Query(TradeSide.BUY),
) -> ApiResponse:
    if shares <= 0:
        raise InvalidShareAmountError()
    split = await engine.quote(db, market_id, outcome, shares, side == TradeSide.BUY)
    return success_response(
        QuoteResponse(
            market_id=market_id,
            outcome=outcome,
            shares=shares,
            side=side.value,
            gross=split.gross,
            creator_fee=split.creator_fee,
            platform_fee=split.platform_fee,
            net=split.net,
        ).model_dump()
    )
