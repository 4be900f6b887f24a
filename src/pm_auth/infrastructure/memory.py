from typing import Any


class InMemoryBotRegistry:
    def __init__(self) -> None:
        self._bots: set[str] = set()

    async def is_authorized(self, db: Any, account: str) -> bool:
        return account in self._bots

    async def set_authorized(self, db: Any, account: str, flag: bool) -> None:
        if flag:
            self._bots.add(account)
        else:
            self._bots.discard(account)

    async def list_authorized(self, db: Any) -> list[str]:
        return sorted(self._bots)
