from pydantic import BaseModel, Field

from src.pm_common.wad import MAX_AMOUNT
from src.pm_ledger.domain.constants import NATIVE_LEDGER


class DepositRequest(BaseModel):
    account: str = Field(min_length=1, max_length=128)
    amount: int = Field(le=MAX_AMOUNT, description="Units credited to the account")
    ledger_id: str = Field(NATIVE_LEDGER, min_length=1, max_length=128)


class BalanceOut(BaseModel):
    ledger_id: str
    account: str
    balance: int
