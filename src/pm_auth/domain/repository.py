"""Repository Protocol for the settlement-bot allow-list."""

from typing import Any, Protocol


class BotRegistryProtocol(Protocol):
    async def is_authorized(self, db: Any, account: str) -> bool: ...

    async def set_authorized(self, db: Any, account: str, flag: bool) -> None: ...

    async def list_authorized(self, db: Any) -> list[str]: ...
