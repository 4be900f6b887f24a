"""Repository Protocol for the single reward-pool record."""

from typing import Any, Protocol

from src.pm_rewards.domain.models import RewardPool


class RewardPoolRepositoryProtocol(Protocol):
    async def get_pool(self, db: Any, for_update: bool = False) -> RewardPool: ...

    async def save_pool(self, db: Any, pool: RewardPool) -> None: ...
