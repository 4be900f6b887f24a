"""RewardPoolRepository — single-row reward_pool table (id = 1, seeded by migration)."""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_common.errors import InternalError
from src.pm_rewards.domain.models import RewardPool

_GET_POOL_SQL = text("""
    SELECT total_shares_issued, protocol_token_balance, protocol_token
    FROM reward_pool WHERE id = 1
""")

_GET_POOL_FOR_UPDATE_SQL = text("""
    SELECT total_shares_issued, protocol_token_balance, protocol_token
    FROM reward_pool WHERE id = 1 FOR UPDATE
""")

_SAVE_POOL_SQL = text("""
    UPDATE reward_pool
    SET total_shares_issued = :total_shares_issued,
        protocol_token_balance = :protocol_token_balance,
        protocol_token = :protocol_token,
        updated_at = NOW()
    WHERE id = 1
""")


class RewardPoolRepository:
    async def get_pool(self, db: AsyncSession, for_update: bool = False) -> RewardPool:
        sql = _GET_POOL_FOR_UPDATE_SQL if for_update else _GET_POOL_SQL
        row = (await db.execute(sql)).fetchone()
        if row is None:
            raise InternalError("reward_pool row missing; run migrations")
        return RewardPool(
            total_shares_issued=int(row.total_shares_issued),
            protocol_token_balance=int(row.protocol_token_balance),
            protocol_token=row.protocol_token,
        )

    async def save_pool(self, db: AsyncSession, pool: RewardPool) -> None:
        await db.execute(
            _SAVE_POOL_SQL,
            {
                "total_shares_issued": Decimal(pool.total_shares_issued),
                "protocol_token_balance": Decimal(pool.protocol_token_balance),
                "protocol_token": pool.protocol_token,
            },
        )
