"""Balance ledger endpoints.

GET  /ledger/{ledger_id}/balances/{account}  — balance lookup
POST /ledger/deposit                         — owner-only funding hook
"""
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.database import get_db_session
from src.pm_common.response import ApiResponse, success_response
from src.pm_engine.application.service import get_market_engine
from src.pm_engine.engine.engine import MarketEngine
from src.pm_gateway.auth.dependencies import get_current_account
from src.pm_ledger.application.schemas import BalanceOut, DepositRequest

router = APIRouter(prefix="/ledger", tags=["ledger"])


@router.get("/{ledger_id}/balances/{account}")
async def get_balance(
    ledger_id: str,
    account: str,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    balance = await engine.balance_of(db, ledger_id, account)
    return success_response(
        BalanceOut(ledger_id=ledger_id, account=account, balance=balance).model_dump()
    )


@router.post("/deposit")
async def deposit(
    body: DepositRequest,
    caller: Annotated[str, Depends(get_current_account)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
) -> ApiResponse:
    engine.auth.require_owner(caller)
    async with db.begin():
        balance = await engine.deposit(db, body.ledger_id, body.account, body.amount)
    return success_response(
        BalanceOut(ledger_id=body.ledger_id, account=body.account, balance=balance).model_dump()
    )
