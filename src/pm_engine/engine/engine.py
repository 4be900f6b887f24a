"""MarketEngine — stateful orchestrator serializing every state-changing operation.

One asyncio.Lock per market id covers read-check-mutate sequences on that
market; a registry lock covers id allocation, the bot allow-list and the
redemption pool. Across markets (and processes), writers serialize on the
native ledger row, since escrow balances are shared. Each operation runs
inside a savepoint so a failure leaves nothing behind, and its events are
emitted only after it succeeds.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

from src.pm_auth.application.service import AuthorizationService
from src.pm_clearing.application.service import TradingService
from src.pm_clearing.domain.fee import FeeSplit
from src.pm_common.enums import Outcome
from src.pm_common.errors import InvalidAmountError
from src.pm_engine.domain.events import DomainEvent
from src.pm_engine.domain.repository import EventSinkProtocol
from src.pm_engine.engine.context import EngineContext
from src.pm_ledger.domain.constants import ESCROW_ACCOUNT, NATIVE_LEDGER, REWARD_LEDGER
from src.pm_market.application.service import MarketRegistryService
from src.pm_market.domain.models import Market
from src.pm_rewards.application.service import RewardLedgerService
from src.pm_rewards.domain.models import RewardPool
from src.pm_settlement.application.service import SettlementService
from src.pm_settlement.domain.invariants import (
    verify_market_invariants,
    verify_reward_invariants,
)

logger = logging.getLogger(__name__)

_SCAN_PAGE = 500


@dataclass
class _MarketLock:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0  # holders plus waiters


class MarketEngine:
    def __init__(self, ctx: EngineContext, sink: EventSinkProtocol) -> None:
        self.ctx = ctx
        self._sink = sink
        # Entries live only while some operation holds or awaits them
        self._market_locks: dict[int, _MarketLock] = {}
        self._registry_lock = asyncio.Lock()

        self.auth = AuthorizationService(ctx)
        self.rewards = RewardLedgerService(ctx)
        self.markets = MarketRegistryService(ctx, self.rewards)
        self.trading = TradingService(ctx, self.rewards)
        self.settlement = SettlementService(ctx, self.auth, self.rewards)

    @asynccontextmanager
    async def _market_lock(self, market_id: int) -> AsyncGenerator[None, None]:
        entry = self._market_locks.setdefault(market_id, _MarketLock())
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._market_locks[market_id]

    @asynccontextmanager
    async def _write_scope(self, db: Any) -> AsyncGenerator[None, None]:
        # Writers across all markets serialize on the native ledger row
        await self.ctx.ledger.lock_ledger(db, NATIVE_LEDGER)
        async with db.begin_nested():
            yield

    async def _emit(self, db: Any, events: list[DomainEvent]) -> list[DomainEvent]:
        for event in events:
            await self._sink.emit(db, event)
        return events

    # ------------------------------------------------------------------
    # Market registry
    # ------------------------------------------------------------------

    async def create_market(
        self, db: Any, caller: str, token_address: str, initial_price: int, payment: int
    ) -> tuple[Market, list[DomainEvent]]:
        async with self._registry_lock:
            async with self._write_scope(db):
                market, events = await self.markets.create_market(
                    db, caller, token_address, initial_price, payment
                )
                return market, await self._emit(db, events)

    async def get_market(self, db: Any, market_id: int) -> Market:
        return await self.markets.get_market(db, market_id)

    async def list_markets(
        self, db: Any, settled: bool | None, cursor_id: int | None, limit: int
    ) -> tuple[list[Market], int | None]:
        return await self.markets.list_markets(db, settled, cursor_id, limit)

    # ------------------------------------------------------------------
    # Trading
    # ------------------------------------------------------------------

    async def buy_shares(
        self, db: Any, caller: str, market_id: int, outcome: Outcome, shares: int, payment: int
    ) -> tuple[FeeSplit, list[DomainEvent]]:
        async with self._market_lock(market_id):
            async with self._write_scope(db):
                split, events = await self.trading.buy_shares(
                    db, caller, market_id, outcome, shares, payment
                )
                return split, await self._emit(db, events)

    async def sell_shares(
        self, db: Any, caller: str, market_id: int, outcome: Outcome, shares: int
    ) -> tuple[FeeSplit, list[DomainEvent]]:
        async with self._market_lock(market_id):
            async with self._write_scope(db):
                split, events = await self.trading.sell_shares(
                    db, caller, market_id, outcome, shares
                )
                return split, await self._emit(db, events)

    async def quote(
        self, db: Any, market_id: int, outcome: Outcome, shares: int, side_is_buy: bool
    ) -> FeeSplit:
        market = await self.markets.get_market(db, market_id)
        if side_is_buy:
            return self.trading.quote_buy(market, outcome, shares)
        return self.trading.quote_sell(market, outcome, shares)

    # ------------------------------------------------------------------
    # Settlement and claims
    # ------------------------------------------------------------------

    async def settle_market(
        self, db: Any, caller: str, market_id: int, final_price: int
    ) -> tuple[Market, list[DomainEvent]]:
        async with self._market_lock(market_id):
            async with self._write_scope(db):
                market, events = await self.settlement.settle_market(
                    db, caller, market_id, final_price
                )
                return market, await self._emit(db, events)

    async def batch_settle_markets(
        self, db: Any, caller: str, market_ids: list[int], final_prices: list[int]
    ) -> tuple[list[int], list[DomainEvent]]:
        # Sorted acquisition order keeps concurrent batches deadlock-free
        async with AsyncExitStack() as stack:
            for market_id in sorted(set(market_ids)):
                await stack.enter_async_context(self._market_lock(market_id))
            async with self._write_scope(db):
                settled, events = await self.settlement.batch_settle_markets(
                    db, caller, market_ids, final_prices
                )
                return settled, await self._emit(db, events)

    async def get_unsettled_markets(self, db: Any, market_ids: list[int]) -> list[int]:
        return await self.settlement.get_unsettled_markets(db, market_ids)

    async def claim_winnings(
        self, db: Any, caller: str, market_id: int
    ) -> tuple[int, list[DomainEvent]]:
        async with self._market_lock(market_id):
            async with self._write_scope(db):
                amount, events = await self.settlement.claim_winnings(db, caller, market_id)
                return amount, await self._emit(db, events)

    # ------------------------------------------------------------------
    # Authorization
    # ------------------------------------------------------------------

    async def authorize_bot(
        self, db: Any, caller: str, account: str, flag: bool
    ) -> list[DomainEvent]:
        async with self._registry_lock:
            async with self._write_scope(db):
                events = await self.auth.authorize_bot(db, caller, account, flag)
                return await self._emit(db, events)

    async def is_authorized_bot(self, db: Any, account: str) -> bool:
        return await self.auth.is_authorized_bot(db, account)

    async def list_bots(self, db: Any) -> list[str]:
        return await self.auth.list_bots(db)

    # ------------------------------------------------------------------
    # Reward ledger
    # ------------------------------------------------------------------

    async def set_protocol_token(self, db: Any, caller: str, asset: str) -> RewardPool:
        self.auth.require_owner(caller)
        async with self._registry_lock:
            async with self._write_scope(db):
                return await self.rewards.set_protocol_token(db, asset)

    async def deposit_protocol_tokens(
        self, db: Any, caller: str, amount: int
    ) -> tuple[RewardPool, list[DomainEvent]]:
        async with self._registry_lock:
            async with self._write_scope(db):
                pool, events = await self.rewards.deposit_protocol_tokens(db, caller, amount)
                return pool, await self._emit(db, events)

    async def claim_protocol_tokens(
        self, db: Any, caller: str, share_amount: int
    ) -> tuple[int, list[DomainEvent]]:
        async with self._registry_lock:
            async with self._write_scope(db):
                received, events = await self.rewards.claim_protocol_tokens(
                    db, caller, share_amount
                )
                return received, await self._emit(db, events)

    async def get_reward_pool(self, db: Any) -> RewardPool:
        return await self.rewards.get_pool(db)

    # ------------------------------------------------------------------
    # Balance ledger access
    # ------------------------------------------------------------------

    async def balance_of(self, db: Any, ledger_id: str, account: str) -> int:
        return await self.ctx.ledger.balance_of(db, ledger_id, account)

    async def deposit(self, db: Any, ledger_id: str, account: str, amount: int) -> int:
        """Credit an account out of thin air. Funding hook for dev and test setups."""
        if amount <= 0:
            raise InvalidAmountError()
        async with self._write_scope(db):
            await self.ctx.ledger.mint(db, ledger_id, account, amount)
        logger.info("Deposit: ledger=%s, account=%s, amount=%d", ledger_id, account, amount)
        return await self.ctx.ledger.balance_of(db, ledger_id, account)

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    async def check_invariants(self, db: Any) -> dict[str, Any]:
        """Scan every market and the reward pool; report violations and escrow coverage."""
        violations: list[str] = []
        prize_pools = 0
        checked = 0
        cursor: int | None = None
        while True:
            page = await self.ctx.markets.list_markets(db, None, cursor, _SCAN_PAGE)
            for market in page:
                try:
                    verify_market_invariants(market)
                except AssertionError as exc:
                    violations.append(str(exc))
                    logger.error("Invariant violation: %s", exc)
                prize_pools += market.prize_pool
                checked += 1
            if len(page) < _SCAN_PAGE:
                break
            cursor = page[-1].id

        pool = await self.rewards.get_pool(db)
        reward_supply = await self.ctx.ledger.total_supply(db, REWARD_LEDGER)
        violations.extend(verify_reward_invariants(pool, reward_supply))

        escrow = await self.ctx.ledger.balance_of(db, NATIVE_LEDGER, ESCROW_ACCOUNT)
        return {
            "ok": not violations,
            "violations": violations,
            "markets_checked": checked,
            "prize_pools_total": prize_pools,
            "escrow_balance": escrow,
            "escrow_shortfall": max(prize_pools - escrow, 0),
        }
