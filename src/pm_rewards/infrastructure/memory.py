from typing import Any

from src.pm_rewards.domain.models import RewardPool


class InMemoryRewardPoolRepository:
    def __init__(self) -> None:
        self._pool = RewardPool()

    async def get_pool(self, db: Any, for_update: bool = False) -> RewardPool:
        return self._pool.copy()

    async def save_pool(self, db: Any, pool: RewardPool) -> None:
        self._pool = pool.copy()
