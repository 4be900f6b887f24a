"""Unit tests for SqlBalanceLedger using AsyncMock sessions."""
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pm_common.errors import InsufficientBalanceError, LedgerNotFoundError
from src.pm_ledger.infrastructure.persistence import SqlBalanceLedger


def _result(fetchone=None, scalar=None):
    result = MagicMock()
    result.fetchone.return_value = fetchone
    result.scalar_one_or_none.return_value = scalar
    return result


def _row(balance):
    row = MagicMock()
    row.balance = balance
    return row


class TestReads:
    @pytest.mark.asyncio
    async def test_balance_converts_decimal(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(return_value=_result(fetchone=_row(Decimal(42))))
        assert await SqlBalanceLedger().balance_of(db, "NATIVE", "a") == 42

    @pytest.mark.asyncio
    async def test_missing_balance_is_zero(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(return_value=_result(fetchone=_row(None)))
        assert await SqlBalanceLedger().balance_of(db, "NATIVE", "a") == 0

    @pytest.mark.asyncio
    async def test_balance_in_unknown_ledger(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        with pytest.raises(LedgerNotFoundError):
            await SqlBalanceLedger().balance_of(db, "NOPE", "a")

    @pytest.mark.asyncio
    async def test_total_supply_of_unknown_ledger(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(return_value=_result(scalar=None))
        with pytest.raises(LedgerNotFoundError):
            await SqlBalanceLedger().total_supply(db, "NOPE")


class TestLockLedger:
    @pytest.mark.asyncio
    async def test_locks_ledger_row_for_update(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(return_value=_result(fetchone=("NATIVE",)))

        await SqlBalanceLedger().lock_ledger(db, "NATIVE")

        sql, params = db.execute.await_args[0]
        assert "FOR UPDATE" in str(sql)
        assert params == {"ledger_id": "NATIVE"}

    @pytest.mark.asyncio
    async def test_lock_unknown_ledger(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        with pytest.raises(LedgerNotFoundError):
            await SqlBalanceLedger().lock_ledger(db, "NOPE")


class TestWrites:
    @pytest.mark.asyncio
    async def test_mint_adjusts_supply_then_credits(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(return_value=_result(fetchone=("NATIVE",)))

        await SqlBalanceLedger().mint(db, "NATIVE", "a", 10**30)

        assert db.execute.await_count == 2
        supply_params = db.execute.await_args_list[0][0][1]
        credit_params = db.execute.await_args_list[1][0][1]
        assert supply_params["delta"] == Decimal(10**30)
        assert credit_params["amount"] == Decimal(10**30)

    @pytest.mark.asyncio
    async def test_mint_into_unknown_ledger(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(return_value=_result(fetchone=None))
        with pytest.raises(LedgerNotFoundError):
            await SqlBalanceLedger().mint(db, "NOPE", "a", 1)

    @pytest.mark.asyncio
    async def test_burn_decrements_supply(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(return_value=_result(fetchone=(Decimal(0),)))

        await SqlBalanceLedger().burn(db, "NATIVE", "a", 5)

        supply_params = db.execute.await_args_list[1][0][1]
        assert supply_params["delta"] == Decimal(-5)

    @pytest.mark.asyncio
    async def test_transfer_debits_then_credits(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(return_value=_result(fetchone=(Decimal(5),)))

        await SqlBalanceLedger().transfer(db, "NATIVE", "a", "b", 5)

        debit, credit = (call[0][1] for call in db.execute.await_args_list)
        assert debit["account"] == "a"
        assert credit["account"] == "b"

    @pytest.mark.asyncio
    async def test_overdraw_reports_available(self) -> None:
        db = MagicMock()
        db.execute = AsyncMock(
            side_effect=[_result(fetchone=None), _result(fetchone=_row(Decimal(3)))]
        )
        with pytest.raises(InsufficientBalanceError) as exc_info:
            await SqlBalanceLedger().transfer(db, "NATIVE", "a", "b", 5)
        assert "available 3" in exc_info.value.message
