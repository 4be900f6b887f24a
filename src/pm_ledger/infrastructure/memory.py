"""In-process balance ledger. Backs unit tests and STORAGE_BACKEND=memory."""

from collections.abc import Iterable
from typing import Any

from src.pm_common.errors import InsufficientBalanceError, LedgerNotFoundError
from src.pm_ledger.domain.constants import NATIVE_LEDGER, REWARD_LEDGER


class InMemoryBalanceLedger:
    def __init__(self, ledger_ids: Iterable[str] = (NATIVE_LEDGER, REWARD_LEDGER)) -> None:
        self._balances: dict[str, dict[str, int]] = {lid: {} for lid in ledger_ids}

    def _book(self, ledger_id: str) -> dict[str, int]:
        try:
            return self._balances[ledger_id]
        except KeyError:
            raise LedgerNotFoundError(ledger_id) from None

    async def create_ledger(self, db: Any, ledger_id: str) -> None:
        self._balances.setdefault(ledger_id, {})

    async def lock_ledger(self, db: Any, ledger_id: str) -> None:
        self._book(ledger_id)

    async def balance_of(self, db: Any, ledger_id: str, account: str) -> int:
        return self._book(ledger_id).get(account, 0)

    async def total_supply(self, db: Any, ledger_id: str) -> int:
        return sum(self._book(ledger_id).values())

    async def mint(self, db: Any, ledger_id: str, account: str, amount: int) -> None:
        book = self._book(ledger_id)
        book[account] = book.get(account, 0) + amount

    async def burn(self, db: Any, ledger_id: str, account: str, amount: int) -> None:
        book = self._book(ledger_id)
        available = book.get(account, 0)
        if available < amount:
            raise InsufficientBalanceError(ledger_id, amount, available)
        book[account] = available - amount

    async def transfer(
        self, db: Any, ledger_id: str, sender: str, recipient: str, amount: int
    ) -> None:
        book = self._book(ledger_id)
        available = book.get(sender, 0)
        if available < amount:
            raise InsufficientBalanceError(ledger_id, amount, available)
        book[sender] = available - amount
        book[recipient] = book.get(recipient, 0) + amount
