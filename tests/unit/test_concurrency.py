"""Concurrent operations on one market serialize through the per-market lock."""
import asyncio
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock

import pytest

from src.pm_common.database import NullSession
from src.pm_common.enums import Outcome
from src.pm_common.errors import MarketNotFoundError
from src.pm_common.wad import WAD
from src.pm_ledger.domain.constants import ESCROW_ACCOUNT, NATIVE_LEDGER
from src.pm_pricing.domain.bonding_curve import buy_cost

OWNER = "PLATFORM_OWNER"


class TestConcurrentTrading:
    @pytest.mark.asyncio
    async def test_parallel_buys_price_sequentially(self, engine, db, fund, market) -> None:
        buyers = [f"buyer-{i}" for i in range(5)]
        for b in buyers:
            await fund(b, 10 * WAD)

        results = await asyncio.gather(
            *(engine.buy_shares(db, b, market.id, Outcome.RUG, 10, WAD) for b in buyers)
        )

        costs = sorted(split.gross for split, _ in results)
        assert costs == [buy_cost(10 * i, 10) for i in range(5)]
        stored = await engine.get_market(db, market.id)
        assert stored.shares_of(Outcome.RUG) == 50
        escrow = await engine.balance_of(db, NATIVE_LEDGER, ESCROW_ACCOUNT)
        assert escrow == stored.prize_pool

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_distinct_ids(self, engine, db, fund) -> None:
        creators = [f"creator-{i}" for i in range(4)]
        for c in creators:
            await fund(c, WAD)
        fee = engine.ctx.params.creation_fee

        results = await asyncio.gather(
            *(engine.create_market(db, c, "0xT", 1000, fee) for c in creators)
        )

        assert sorted(m.id for m, _ in results) == [1, 2, 3, 4]


class TestMarketLockTable:
    @pytest.mark.asyncio
    async def test_unknown_ids_leave_no_locks(self, engine, db) -> None:
        for market_id in range(1_000, 1_500):
            with pytest.raises(MarketNotFoundError):
                await engine.buy_shares(db, "alice", market_id, Outcome.PUMP, 1, WAD)
        settled, _ = await engine.batch_settle_markets(
            db, OWNER, list(range(2_000, 2_500)), [1] * 500
        )

        assert settled == []
        assert engine._market_locks == {}

    @pytest.mark.asyncio
    async def test_locks_released_after_contended_buys(self, engine, db, fund, market) -> None:
        for i in range(3):
            await fund(f"buyer-{i}", 10 * WAD)

        await asyncio.gather(
            *(engine.buy_shares(db, f"buyer-{i}", market.id, Outcome.PUMP, 1, WAD)
              for i in range(3)),
            engine.sell_shares(db, "nobody", market.id, Outcome.PUMP, 1),
            return_exceptions=True,
        )

        assert engine._market_locks == {}
        assert (await engine.get_market(db, market.id)).shares_of(Outcome.PUMP) == 3


class _RecordingSession(NullSession):
    def __init__(self, calls: list) -> None:
        self.calls = calls

    @asynccontextmanager
    async def begin_nested(self):
        self.calls.append("savepoint")
        yield


class TestLedgerWriteLock:
    @pytest.mark.asyncio
    async def test_native_ledger_locked_before_each_write(self, engine, fund, market) -> None:
        await fund("alice", 100 * WAD)
        calls: list = []
        db = _RecordingSession(calls)
        engine.ctx.ledger.lock_ledger = AsyncMock(
            side_effect=lambda _db, ledger_id: calls.append(("lock", ledger_id))
        )

        await engine.buy_shares(db, "alice", market.id, Outcome.MOON, 10, WAD)
        await engine.sell_shares(db, "alice", market.id, Outcome.MOON, 5)
        await engine.deposit(db, NATIVE_LEDGER, "bob", WAD)

        assert calls == [("lock", NATIVE_LEDGER), "savepoint"] * 3

    @pytest.mark.asyncio
    async def test_reads_take_no_lock(self, engine, db, market) -> None:
        engine.ctx.ledger.lock_ledger = AsyncMock()

        await engine.get_market(db, market.id)
        await engine.get_unsettled_markets(db, [market.id])
        await engine.balance_of(db, NATIVE_LEDGER, "alice")

        engine.ctx.ledger.lock_ledger.assert_not_awaited()
