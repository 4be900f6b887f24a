"""SettlementService — market resolution and prize-pool claims.

State machine per market: Open -> Settled (terminal). Settlement requires the
owner or an allow-listed bot and a clock at or past ``settlement_time``.

Batch settlement treats settled, not-yet-ready and unknown markets as skips;
only a length mismatch or a missing authorization fails the whole call.
"""

import logging
from typing import Any

from src.pm_auth.application.service import AuthorizationService
from src.pm_clearing.domain.fee import drain_volume
from src.pm_clearing.infrastructure.fee_collector import ensure_escrow_covers, pay_out
from src.pm_common.errors import (
    AlreadySettledError,
    ArrayLengthMismatchError,
    MarketNotFoundError,
    NoWinningSharesError,
    NoWinningSharesExistError,
    NotSettledError,
    TooEarlyError,
)
from src.pm_common.wad import pro_rata
from src.pm_engine.domain.events import (
    BatchSettlement,
    DomainEvent,
    MarketSettled,
    WinningsClaimed,
)
from src.pm_engine.engine.context import EngineContext
from src.pm_market.domain.models import Market
from src.pm_rewards.application.service import RewardLedgerService
from src.pm_settlement.domain.invariants import verify_market_invariants
from src.pm_settlement.domain.rules import classify_outcome

logger = logging.getLogger(__name__)


def _apply_settlement(market: Market, final_price: int) -> MarketSettled:
    outcome = classify_outcome(market.initial_price, final_price)
    market.settled = True
    market.final_price = final_price
    market.winning_outcome = outcome
    verify_market_invariants(market)
    return MarketSettled(market_id=market.id, outcome=outcome, final_price=final_price)


def _drain_pool(market: Market, amount: int) -> None:
    """Remove ``amount`` from the prize pool, outcome by outcome in ordinal order."""
    remaining = amount
    for idx, volume in enumerate(market.total_volume):
        if remaining == 0:
            break
        taken = min(volume, remaining)
        market.total_volume[idx] = drain_volume(volume, taken)
        remaining -= taken


class SettlementService:
    def __init__(
        self,
        ctx: EngineContext,
        auth: AuthorizationService | None = None,
        rewards: RewardLedgerService | None = None,
    ) -> None:
        self._ctx = ctx
        self._auth = auth or AuthorizationService(ctx)
        self._rewards = rewards or RewardLedgerService(ctx)

    async def settle_market(
        self, db: Any, caller: str, market_id: int, final_price: int
    ) -> tuple[Market, list[DomainEvent]]:
        await self._auth.require_settler(db, caller)
        market = await self._ctx.markets.get_market(db, market_id, for_update=True)
        if market is None:
            raise MarketNotFoundError(market_id)
        if market.settled:
            raise AlreadySettledError(market_id)
        if not market.is_ready(self._ctx.clock()):
            raise TooEarlyError(market_id, market.settlement_time)

        event = _apply_settlement(market, final_price)
        await self._ctx.markets.update_market(db, market)
        logger.info(
            "Market settled: id=%d, final_price=%d, outcome=%s, by=%s",
            market_id,
            final_price,
            event.outcome.value,
            caller,
        )
        return market, [event]

    async def batch_settle_markets(
        self,
        db: Any,
        caller: str,
        market_ids: list[int],
        final_prices: list[int],
    ) -> tuple[list[int], list[DomainEvent]]:
        """Settle every eligible pair in input order. Returns the ids actually settled."""
        if len(market_ids) != len(final_prices):
            raise ArrayLengthMismatchError(len(market_ids), len(final_prices))
        await self._auth.require_settler(db, caller)

        now = self._ctx.clock()
        settled_ids: list[int] = []
        events: list[DomainEvent] = []
        for market_id, final_price in zip(market_ids, final_prices):
            market = await self._ctx.markets.get_market(db, market_id, for_update=True)
            if market is None:
                logger.info("Batch settle: skip unknown market %d", market_id)
                continue
            if market.settled:
                logger.info("Batch settle: skip already settled market %d", market_id)
                continue
            if not market.is_ready(now):
                logger.info("Batch settle: skip market %d, not ready", market_id)
                continue
            events.append(_apply_settlement(market, final_price))
            await self._ctx.markets.update_market(db, market)
            settled_ids.append(market_id)

        events.append(
            BatchSettlement(market_ids=tuple(market_ids), success_count=len(settled_ids))
        )
        logger.info(
            "Batch settlement by %s: %d of %d settled", caller, len(settled_ids), len(market_ids)
        )
        return settled_ids, events

    async def get_unsettled_markets(self, db: Any, market_ids: list[int]) -> list[int]:
        """Ids that are past their settlement time but not yet settled, in input order."""
        now = self._ctx.clock()
        ready: list[int] = []
        for market_id in market_ids:
            market = await self._ctx.markets.get_market(db, market_id)
            if market is not None and not market.settled and market.is_ready(now):
                ready.append(market_id)
        return ready

    async def claim_winnings(
        self, db: Any, caller: str, market_id: int
    ) -> tuple[int, list[DomainEvent]]:
        market = await self._ctx.markets.get_market(db, market_id, for_update=True)
        if market is None:
            raise MarketNotFoundError(market_id)
        if not market.settled or market.winning_outcome is None:
            raise NotSettledError(market_id)

        winner = market.winning_outcome
        ledger_id = market.position_token(winner)
        user_shares = await self._ctx.ledger.balance_of(db, ledger_id, caller)
        if user_shares == 0:
            raise NoWinningSharesError()
        total_winning = market.shares_of(winner)
        if total_winning == 0:
            raise NoWinningSharesExistError(market_id)

        winnings = pro_rata(market.prize_pool, user_shares, total_winning)
        await ensure_escrow_covers(self._ctx.ledger, db, winnings)

        # Commit
        market.total_shares[winner.ordinal] -= user_shares
        _drain_pool(market, winnings)
        verify_market_invariants(market)
        await self._ctx.markets.update_market(db, market)
        await self._ctx.ledger.burn(db, ledger_id, caller, user_shares)
        await self._rewards.issue(db, caller, user_shares * self._ctx.params.winner_multiplier)

        # Transfer
        await pay_out(self._ctx.ledger, db, caller, winnings)

        logger.info(
            "Winnings claimed: market=%d, account=%s, shares=%d, amount=%d",
            market_id,
            caller,
            user_shares,
            winnings,
        )
        return winnings, [WinningsClaimed(market_id=market_id, account=caller, amount=winnings)]
