"""Native-currency movements between callers, the engine escrow and fee recipients.

Every helper skips zero amounts. Checks (``ensure_*``) run before any state
write; transfers run after, so they cannot fail half-way through an operation.
"""
from typing import Any

from src.pm_clearing.domain.fee import FeeSplit
from src.pm_common.errors import InsufficientBalanceError, InsufficientLiquidityError
from src.pm_ledger.domain.constants import ESCROW_ACCOUNT, NATIVE_LEDGER
from src.pm_ledger.domain.repository import BalanceLedgerProtocol


async def ensure_can_pay(
    ledger: BalanceLedgerProtocol, db: Any, payer: str, amount: int
) -> None:
    available = await ledger.balance_of(db, NATIVE_LEDGER, payer)
    if available < amount:
        raise InsufficientBalanceError(NATIVE_LEDGER, amount, available)


async def ensure_escrow_covers(ledger: BalanceLedgerProtocol, db: Any, amount: int) -> None:
    available = await ledger.balance_of(db, NATIVE_LEDGER, ESCROW_ACCOUNT)
    if available < amount:
        raise InsufficientLiquidityError(amount, available)


async def collect_payment(
    ledger: BalanceLedgerProtocol, db: Any, payer: str, amount: int
) -> None:
    """Move the caller's attached payment into escrow."""
    if amount:
        await ledger.transfer(db, NATIVE_LEDGER, payer, ESCROW_ACCOUNT, amount)


async def pay_out(
    ledger: BalanceLedgerProtocol, db: Any, recipient: str, amount: int
) -> None:
    if amount:
        await ledger.transfer(db, NATIVE_LEDGER, ESCROW_ACCOUNT, recipient, amount)


async def distribute_fees(
    ledger: BalanceLedgerProtocol,
    db: Any,
    split: FeeSplit,
    creator: str,
    platform: str,
) -> None:
    """Pay creator and platform fees out of escrow immediately."""
    await pay_out(ledger, db, creator, split.creator_fee)
    await pay_out(ledger, db, platform, split.platform_fee)
