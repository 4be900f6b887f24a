# src/pm_admin/api/router.py
"""Admin REST API: settlement bots, protocol token binding, invariant checks."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response
from src.pm_engine.application.service import get_market_engine
from src.pm_engine.engine.engine import MarketEngine
from src.pm_gateway.auth.dependencies import get_current_account
from src.pm_rewards.application.schemas import RewardPoolOut

router = APIRouter(prefix="/admin", tags=["admin"])


class AuthorizeBotRequest(BaseModel):
    account: str = Field(min_length=1, max_length=128)
    authorized: bool


class ProtocolTokenRequest(BaseModel):
    asset: str = Field(min_length=1, max_length=128)


@router.post("/bots")
async def authorize_bot(
    body: AuthorizeBotRequest,
    request: Request,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    async with db.begin():
        events = await engine.authorize_bot(db, caller, body.account, body.authorized)
    resp = success_response(
        {"account": body.account, "authorized": body.authorized},
        [e.to_dict() for e in events],
    )
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/bots")
async def list_bots(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    return success_response({"accounts": await engine.list_bots(db)})


@router.get("/bots/{account}")
async def is_authorized_bot(
    account: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    authorized = await engine.is_authorized_bot(db, account)
    return success_response({"account": account, "authorized": authorized})


@router.post("/protocol-token")
async def set_protocol_token(
    body: ProtocolTokenRequest,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    async with db.begin():
        pool = await engine.set_protocol_token(db, caller, body.asset)
    return success_response(RewardPoolOut.from_domain(pool).model_dump())


@router.get("/invariants")
async def check_invariants(
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    engine.auth.require_owner(caller)
    return success_response(await engine.check_invariants(db))
