"""SqlBalanceLedger — PostgreSQL implementation of BalanceLedgerProtocol.

All queries use raw text() SQL within the caller's transaction.
Amounts are NUMERIC(78,0); asyncpg returns Decimal, converted back to int here.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.errors import InsufficientBalanceError, LedgerNotFoundError

_CREATE_LEDGER_SQL = text("""
    INSERT INTO token_ledgers (id, total_supply)
    VALUES (:ledger_id, 0)
    ON CONFLICT (id) DO NOTHING
""")

_BALANCE_SQL = text("""
    SELECT l.id, b.balance
    FROM token_ledgers l
    LEFT JOIN token_balances b ON b.ledger_id = l.id AND b.account = :account
    WHERE l.id = :ledger_id
""")

_LOCK_LEDGER_SQL = text("SELECT id FROM token_ledgers WHERE id = :ledger_id FOR UPDATE")

_TOTAL_SUPPLY_SQL = text("SELECT total_supply FROM token_ledgers WHERE id = :ledger_id")

_ADJUST_SUPPLY_SQL = text("""
    UPDATE token_ledgers
    SET total_supply = total_supply + :delta, updated_at = NOW()
    WHERE id = :ledger_id
    RETURNING id
""")

_CREDIT_SQL = text("""
    INSERT INTO token_balances (ledger_id, account, balance)
    VALUES (:ledger_id, :account, :amount)
    ON CONFLICT (ledger_id, account) DO UPDATE
    SET balance = token_balances.balance + :amount, updated_at = NOW()
""")

_DEBIT_SQL = text("""
    UPDATE token_balances
    SET balance = balance - :amount, updated_at = NOW()
    WHERE ledger_id = :ledger_id AND account = :account AND balance >= :amount
    RETURNING balance
""")


class SqlBalanceLedger:
    async def create_ledger(self, db: AsyncSession, ledger_id: str) -> None:
        await db.execute(_CREATE_LEDGER_SQL, {"ledger_id": ledger_id})

    async def lock_ledger(self, db: AsyncSession, ledger_id: str) -> None:
        result = await db.execute(_LOCK_LEDGER_SQL, {"ledger_id": ledger_id})
        if result.fetchone() is None:
            raise LedgerNotFoundError(ledger_id)

    async def balance_of(self, db: AsyncSession, ledger_id: str, account: str) -> int:
        result = await db.execute(_BALANCE_SQL, {"ledger_id": ledger_id, "account": account})
        row = result.fetchone()
        if row is None:
            raise LedgerNotFoundError(ledger_id)
        return int(row.balance) if row.balance is not None else 0

    async def total_supply(self, db: AsyncSession, ledger_id: str) -> int:
        result = await db.execute(_TOTAL_SUPPLY_SQL, {"ledger_id": ledger_id})
        supply = result.scalar_one_or_none()
        if supply is None:
            raise LedgerNotFoundError(ledger_id)
        return int(supply)

    async def mint(self, db: AsyncSession, ledger_id: str, account: str, amount: int) -> None:
        await self._adjust_supply(db, ledger_id, amount)
        await self._credit(db, ledger_id, account, amount)

    async def burn(self, db: AsyncSession, ledger_id: str, account: str, amount: int) -> None:
        await self._debit(db, ledger_id, account, amount)
        await self._adjust_supply(db, ledger_id, -amount)

    async def transfer(
        self, db: AsyncSession, ledger_id: str, sender: str, recipient: str, amount: int
    ) -> None:
        await self._debit(db, ledger_id, sender, amount)
        await self._credit(db, ledger_id, recipient, amount)

    async def _adjust_supply(self, db: AsyncSession, ledger_id: str, delta: int) -> None:
        result = await db.execute(
            _ADJUST_SUPPLY_SQL, {"ledger_id": ledger_id, "delta": Decimal(delta)}
        )
        if result.fetchone() is None:
            raise LedgerNotFoundError(ledger_id)

    async def _credit(
        self, db: AsyncSession, ledger_id: str, account: str, amount: int
    ) -> None:
        await db.execute(
            _CREDIT_SQL,
            {"ledger_id": ledger_id, "account": account, "amount": Decimal(amount)},
        )

    async def _debit(
        self, db: AsyncSession, ledger_id: str, account: str, amount: int
    ) -> None:
        result = await db.execute(
            _DEBIT_SQL,
            {"ledger_id": ledger_id, "account": account, "amount": Decimal(amount)},
        )
        if result.fetchone() is None:
            available = await self.balance_of(db, ledger_id, account)
            raise InsufficientBalanceError(ledger_id, amount, available)
