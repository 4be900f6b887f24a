"""In-process market registry. Returns detached copies so callers commit explicitly."""

from typing import Any

from src.pm_market.domain.models import Market


class InMemoryMarketRepository:
    def __init__(self) -> None:
        self._markets: dict[int, Market] = {}
        self._last_id = 0

    async def allocate_market_id(self, db: Any) -> int:
        self._last_id += 1
        return self._last_id

    async def get_market(
        self, db: Any, market_id: int, for_update: bool = False
    ) -> Market | None:
        market = self._markets.get(market_id)
        return market.copy() if market else None

    async def insert_market(self, db: Any, market: Market) -> None:
        if market.id in self._markets:
            raise ValueError(f"Market id already used: {market.id}")
        self._markets[market.id] = market.copy()

    async def update_market(self, db: Any, market: Market) -> None:
        if market.id not in self._markets:
            raise KeyError(market.id)
        self._markets[market.id] = market.copy()

    async def list_markets(
        self,
        db: Any,
        settled: bool | None,
        cursor_id: int | None,
        limit: int,
    ) -> list[Market]:
        ids = sorted(self._markets, reverse=True)
        if cursor_id is not None:
            ids = [i for i in ids if i < cursor_id]
        markets = [self._markets[i] for i in ids]
        if settled is not None:
            markets = [m for m in markets if m.settled == settled]
        return [m.copy() for m in markets[:limit]]
