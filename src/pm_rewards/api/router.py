"""Reward ledger endpoints: redemption pool deposit/claim and pool state."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response
from src.pm_engine.application.service import get_market_engine
from src.pm_engine.engine.engine import MarketEngine
from src.pm_gateway.auth.dependencies import get_current_account
from src.pm_ledger.domain.constants import REWARD_LEDGER
from src.pm_rewards.application.schemas import (
    ClaimProtocolTokensRequest,
    ClaimProtocolTokensResponse,
    DepositProtocolTokensRequest,
    RewardPoolOut,
)

router = APIRouter(prefix="/rewards", tags=["rewards"])


@router.get("/pool")
async def get_pool(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    pool = await engine.get_reward_pool(db)
    return success_response(RewardPoolOut.from_domain(pool).model_dump())


@router.get("/balances/{account}")
async def get_reward_balance(
    account: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    balance = await engine.balance_of(db, REWARD_LEDGER, account)
    return success_response({"account": account, "balance": balance})


@router.post("/deposit")
async def deposit_protocol_tokens(
    body: DepositProtocolTokensRequest,
    request: Request,
    account: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    async with db.begin():
        pool, events = await engine.deposit_protocol_tokens(db, account, body.amount)
    resp = success_response(
        RewardPoolOut.from_domain(pool).model_dump(), [e.to_dict() for e in events]
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/claim")
async def claim_protocol_tokens(
    body: ClaimProtocolTokensRequest,
    request: Request,
    account: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    async with db.begin():
        received, events = await engine.claim_protocol_tokens(db, account, body.share_amount)
    data = ClaimProtocolTokensResponse(burned=body.share_amount, received=received)
    resp = success_response(data.model_dump(), [e.to_dict() for e in events])
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
