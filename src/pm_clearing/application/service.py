"""TradingService — buy and sell positions against the bonding curve.

Each operation runs in three phases: validate and price, commit the market
record and position ledgers, then move native currency through the escrow.
All balance checks happen in the first phase.
"""

import logging
from typing import Any

from src.pm_clearing.domain.fee import FeeSplit, drain_volume, split_fees
from src.pm_clearing.infrastructure.fee_collector import (
    collect_payment,
    distribute_fees,
    ensure_can_pay,
    ensure_escrow_covers,
    pay_out,
)
from src.pm_common.enums import Outcome
from src.pm_common.errors import (
    AlreadySettledError,
    InsufficientPaymentError,
    InsufficientSharesError,
    InvalidShareAmountError,
    MarketClosedError,
    MarketNotFoundError,
    OnlyWinnersCanSellAfterSettlementError,
)
from src.pm_engine.domain.events import DomainEvent, FeesPaid, SharesPurchased, SharesSold
from src.pm_engine.engine.context import EngineContext
from src.pm_market.domain.models import Market
from src.pm_pricing.domain.bonding_curve import buy_cost, sell_payout
from src.pm_rewards.application.service import RewardLedgerService
from src.pm_settlement.domain.invariants import verify_market_invariants

logger = logging.getLogger(__name__)


class TradingService:
    def __init__(self, ctx: EngineContext, rewards: RewardLedgerService | None = None) -> None:
        self._ctx = ctx
        self._rewards = rewards or RewardLedgerService(ctx)

    async def _load(self, db: Any, market_id: int) -> Market:
        market = await self._ctx.markets.get_market(db, market_id, for_update=True)
        if market is None:
            raise MarketNotFoundError(market_id)
        return market

    def _split(self, gross: int) -> FeeSplit:
        params = self._ctx.params
        return split_fees(gross, params.creator_fee_bps, params.platform_fee_bps)

    def quote_buy(self, market: Market, outcome: Outcome, shares: int) -> FeeSplit:
        return self._split(
            buy_cost(market.shares_of(outcome), shares, self._ctx.params.price_scale)
        )

    def quote_sell(self, market: Market, outcome: Outcome, shares: int) -> FeeSplit:
        return self._split(
            sell_payout(market.shares_of(outcome), shares, self._ctx.params.price_scale)
        )

    async def buy_shares(
        self,
        db: Any,
        caller: str,
        market_id: int,
        outcome: Outcome,
        shares: int,
        payment: int,
    ) -> tuple[FeeSplit, list[DomainEvent]]:
        market = await self._load(db, market_id)
        if market.settled:
            raise AlreadySettledError(market_id)
        if market.is_ready(self._ctx.clock()):
            raise MarketClosedError(market_id)
        if shares <= 0:
            raise InvalidShareAmountError()

        split = self.quote_buy(market, outcome, shares)
        if payment < split.gross:
            raise InsufficientPaymentError(split.gross, payment)
        await ensure_can_pay(self._ctx.ledger, db, caller, payment)

        # Commit
        idx = outcome.ordinal
        market.total_shares[idx] += shares
        market.total_volume[idx] += split.net
        verify_market_invariants(market)
        await self._ctx.markets.update_market(db, market)
        await self._ctx.ledger.mint(db, market.position_token(outcome), caller, shares)
        await self._rewards.issue(db, market.creator, self._ctx.params.trade_reward)

        # Transfers
        await collect_payment(self._ctx.ledger, db, caller, payment)
        await distribute_fees(self._ctx.ledger, db, split, market.creator, self._ctx.params.owner)
        await pay_out(self._ctx.ledger, db, caller, payment - split.gross)

        logger.info(
            "Buy: market=%d, outcome=%s, buyer=%s, shares=%d, cost=%d, net=%d",
            market_id,
            outcome.value,
            caller,
            shares,
            split.gross,
            split.net,
        )
        return split, [
            SharesPurchased(
                market_id=market_id,
                buyer=caller,
                outcome=outcome,
                shares=shares,
                cost=split.gross,
            ),
            FeesPaid(
                market_id=market_id,
                creator=market.creator,
                creator_fee=split.creator_fee,
                platform_fee=split.platform_fee,
            ),
        ]

    async def sell_shares(
        self,
        db: Any,
        caller: str,
        market_id: int,
        outcome: Outcome,
        shares: int,
    ) -> tuple[FeeSplit, list[DomainEvent]]:
        market = await self._load(db, market_id)
        if shares <= 0:
            raise InvalidShareAmountError()
        held = await self._ctx.ledger.balance_of(db, market.position_token(outcome), caller)
        if held < shares:
            raise InsufficientSharesError(shares, held)
        if market.settled:
            if outcome != market.winning_outcome:
                raise OnlyWinnersCanSellAfterSettlementError(market_id)
        elif market.is_ready(self._ctx.clock()):
            raise MarketClosedError(market_id)

        split = self.quote_sell(market, outcome, shares)
        await ensure_escrow_covers(self._ctx.ledger, db, split.gross)

        # Commit
        idx = outcome.ordinal
        market.total_shares[idx] -= shares
        market.total_volume[idx] = drain_volume(market.total_volume[idx], split.net)
        verify_market_invariants(market)
        await self._ctx.markets.update_market(db, market)
        await self._ctx.ledger.burn(db, market.position_token(outcome), caller, shares)

        # Transfers
        await distribute_fees(self._ctx.ledger, db, split, market.creator, self._ctx.params.owner)
        await pay_out(self._ctx.ledger, db, caller, split.net)

        logger.info(
            "Sell: market=%d, outcome=%s, seller=%s, shares=%d, gross=%d, net=%d",
            market_id,
            outcome.value,
            caller,
            shares,
            split.gross,
            split.net,
        )
        return split, [
            SharesSold(
                market_id=market_id,
                seller=caller,
                outcome=outcome,
                shares=shares,
                payout=split.net,
            ),
            FeesPaid(
                market_id=market_id,
                creator=market.creator,
                creator_fee=split.creator_fee,
                platform_fee=split.platform_fee,
            ),
        ]
