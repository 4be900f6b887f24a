"""MarketRegistryService — market creation and read access.

The caller (engine facade) holds the registry lock and passes the db session;
the router owns the transaction.
"""

import logging
from typing import Any

from src.pm_clearing.infrastructure.fee_collector import (
    collect_payment,
    ensure_can_pay,
    pay_out,
)
from src.pm_common.enums import Outcome
from src.pm_common.errors import (
    InsufficientFeeError,
    InvalidPriceError,
    MarketNotFoundError,
)
from src.pm_engine.domain.events import DomainEvent, MarketCreated
from src.pm_engine.engine.context import EngineContext
from src.pm_ledger.domain.constants import position_ledger_id
from src.pm_market.domain.models import Market
from src.pm_rewards.application.service import RewardLedgerService
from src.pm_settlement.domain.invariants import verify_market_invariants
from src.pm_settlement.domain.rules import settlement_time_for

logger = logging.getLogger(__name__)


class MarketRegistryService:
    def __init__(self, ctx: EngineContext, rewards: RewardLedgerService | None = None) -> None:
        self._ctx = ctx
        self._rewards = rewards or RewardLedgerService(ctx)

    async def create_market(
        self,
        db: Any,
        caller: str,
        token_address: str,
        initial_price: int,
        payment: int,
    ) -> tuple[Market, list[DomainEvent]]:
        params = self._ctx.params
        if payment < params.creation_fee:
            raise InsufficientFeeError(params.creation_fee, payment)
        if initial_price <= 0:
            raise InvalidPriceError(initial_price)
        await ensure_can_pay(self._ctx.ledger, db, caller, payment)

        now = self._ctx.clock()
        market_id = await self._ctx.markets.allocate_market_id(db)
        market = Market(
            id=market_id,
            creator=caller,
            token_address=token_address,
            initial_price=initial_price,
            created_at=now,
            settlement_time=settlement_time_for(now, params.settlement_period),
            position_tokens=[position_ledger_id(market_id, o) for o in Outcome],
        )
        verify_market_invariants(market)
        await self._ctx.markets.insert_market(db, market)
        for ledger_id in market.position_tokens:
            await self._ctx.ledger.create_ledger(db, ledger_id)

        await self._rewards.issue(db, caller, params.creator_reward)

        await collect_payment(self._ctx.ledger, db, caller, payment)
        await pay_out(self._ctx.ledger, db, params.owner, params.creation_fee)
        await pay_out(self._ctx.ledger, db, caller, payment - params.creation_fee)

        logger.info(
            "Market created: id=%d, creator=%s, token=%s, settles_at=%d",
            market.id,
            caller,
            token_address,
            market.settlement_time,
        )
        event = MarketCreated(
            market_id=market.id,
            creator=caller,
            token_address=token_address,
            initial_price=initial_price,
            settlement_time=market.settlement_time,
        )
        return market, [event]

    async def get_market(self, db: Any, market_id: int) -> Market:
        market = await self._ctx.markets.get_market(db, market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        return market

    async def list_markets(
        self,
        db: Any,
        settled: bool | None = None,
        cursor_id: int | None = None,
        limit: int = 20,
    ) -> tuple[list[Market], int | None]:
        # Fetch limit+1 to detect has_more without COUNT(*)
        markets = await self._ctx.markets.list_markets(db, settled, cursor_id, limit + 1)
        page = markets[:limit]
        next_cursor = page[-1].id if len(markets) > limit and page else None
        return page, next_cursor
