# src/pm_market/domain/repository.py
"""Repository Protocol — dependency inversion for testability.

Unit tests inject the in-memory adapter that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Any, Protocol

from src.pm_market.domain.models import Market


class MarketRepositoryProtocol(Protocol):
    async def allocate_market_id(self, db: Any) -> int: ...

    async def get_market(
        self, db: Any, market_id: int, for_update: bool = False
    ) -> Market | None: ...

    async def insert_market(self, db: Any, market: Market) -> None: ...

    async def update_market(self, db: Any, market: Market) -> None: ...

    async def list_markets(
        self,
        db: Any,
        settled: bool | None,
        cursor_id: int | None,
        limit: int,
    ) -> list[Market]: ...
