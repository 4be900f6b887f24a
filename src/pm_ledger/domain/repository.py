"""Balance ledger Protocol — the fungible-token capability the engine depends on.

One implementation serves every ledger (native currency, reward token,
protocol token, and the five position tokens of each market), keyed by
ledger id. Unit tests use the in-memory adapter; production uses PostgreSQL.
"""

from typing import Any, Protocol


class BalanceLedgerProtocol(Protocol):
    async def lock_ledger(self, db: Any, ledger_id: str) -> None:
        """Block concurrent writers on this ledger until the transaction ends."""
        ...

    async def create_ledger(self, db: Any, ledger_id: str) -> None: ...

    async def balance_of(self, db: Any, ledger_id: str, account: str) -> int: ...

    async def total_supply(self, db: Any, ledger_id: str) -> int: ...

    async def mint(self, db: Any, ledger_id: str, account: str, amount: int) -> None: ...

    async def burn(self, db: Any, ledger_id: str, account: str, amount: int) -> None: ...

    async def transfer(
        self, db: Any, ledger_id: str, sender: str, recipient: str, amount: int
    ) -> None: ...
