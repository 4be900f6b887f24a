"""RewardLedgerService — reward-token issuance and the pro-rata redemption pool.

Reward tokens are minted to creators (on market creation and each buy) and to
winners (on claim). Holders burn them to redeem a proportional slice of the
deposited protocol-token pool:

    received = protocol_token_balance * burned // total_shares_issued
"""

import logging
from typing import Any

from src.pm_common.errors import (
    AmountTooSmallError,
    EmptyRedemptionPoolError,
    InsufficientBalanceError,
    InsufficientRewardBalanceError,
    InvalidAmountError,
    NoRewardSharesIssuedError,
    ProtocolTokenAlreadySetError,
    ProtocolTokenNotSetError,
)
from src.pm_common.wad import pro_rata
from src.pm_engine.domain.events import (
    DomainEvent,
    ProtocolTokenClaimed,
    ProtocolTokenDeposited,
)
from src.pm_engine.engine.context import EngineContext
from src.pm_ledger.domain.constants import REWARD_LEDGER, REWARD_POOL_ACCOUNT
from src.pm_rewards.domain.models import RewardPool

logger = logging.getLogger(__name__)


class RewardLedgerService:
    def __init__(self, ctx: EngineContext) -> None:
        self._ctx = ctx

    async def get_pool(self, db: Any) -> RewardPool:
        return await self._ctx.rewards.get_pool(db)

    async def reward_balance(self, db: Any, account: str) -> int:
        return await self._ctx.ledger.balance_of(db, REWARD_LEDGER, account)

    async def issue(self, db: Any, account: str, amount: int) -> None:
        """Mint reward tokens and count them as issued shares."""
        if amount <= 0:
            return
        pool = await self._ctx.rewards.get_pool(db, for_update=True)
        pool.total_shares_issued += amount
        await self._ctx.rewards.save_pool(db, pool)
        await self._ctx.ledger.mint(db, REWARD_LEDGER, account, amount)

    async def set_protocol_token(self, db: Any, asset: str) -> RewardPool:
        """One-time binding of the redeemable asset. Caller ownership is checked upstream."""
        pool = await self._ctx.rewards.get_pool(db, for_update=True)
        if pool.protocol_token is not None:
            raise ProtocolTokenAlreadySetError()
        pool.protocol_token = asset
        await self._ctx.ledger.create_ledger(db, asset)
        await self._ctx.rewards.save_pool(db, pool)
        logger.info("Protocol token set to %s", asset)
        return pool

    async def deposit_protocol_tokens(
        self, db: Any, caller: str, amount: int
    ) -> tuple[RewardPool, list[DomainEvent]]:
        if amount <= 0:
            raise InvalidAmountError()
        pool = await self._ctx.rewards.get_pool(db, for_update=True)
        if pool.protocol_token is None:
            raise ProtocolTokenNotSetError()
        available = await self._ctx.ledger.balance_of(db, pool.protocol_token, caller)
        if available < amount:
            raise InsufficientBalanceError(pool.protocol_token, amount, available)

        pool.protocol_token_balance += amount
        await self._ctx.rewards.save_pool(db, pool)
        await self._ctx.ledger.transfer(
            db, pool.protocol_token, caller, REWARD_POOL_ACCOUNT, amount
        )
        logger.info("Protocol token deposit: %s added %d", caller, amount)
        return pool, [ProtocolTokenDeposited(account=caller, amount=amount)]

    async def claim_protocol_tokens(
        self, db: Any, caller: str, share_amount: int
    ) -> tuple[int, list[DomainEvent]]:
        """Burn ``share_amount`` reward tokens for a pro-rata slice of the pool."""
        pool = await self._ctx.rewards.get_pool(db, for_update=True)
        if pool.protocol_token is None:
            raise ProtocolTokenNotSetError()
        if share_amount <= 0:
            raise InvalidAmountError()
        held = await self._ctx.ledger.balance_of(db, REWARD_LEDGER, caller)
        if held < share_amount:
            raise InsufficientRewardBalanceError(share_amount, held)
        if pool.total_shares_issued == 0:
            raise NoRewardSharesIssuedError()
        if pool.protocol_token_balance == 0:
            raise EmptyRedemptionPoolError()

        received = pro_rata(pool.protocol_token_balance, share_amount, pool.total_shares_issued)
        if received == 0:
            raise AmountTooSmallError()

        pool.total_shares_issued -= share_amount
        pool.protocol_token_balance -= received
        await self._ctx.rewards.save_pool(db, pool)
        await self._ctx.ledger.burn(db, REWARD_LEDGER, caller, share_amount)
        await self._ctx.ledger.transfer(
            db, pool.protocol_token, REWARD_POOL_ACCOUNT, caller, received
        )
        logger.info(
            "Protocol token claim: %s burned %d, received %d", caller, share_amount, received
        )
        return received, [
            ProtocolTokenClaimed(account=caller, burned=share_amount, received=received)
        ]
