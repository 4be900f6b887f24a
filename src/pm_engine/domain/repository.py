from typing import Any, Protocol

from src.pm_engine.domain.events import DomainEvent


class EventSinkProtocol(Protocol):
    async def emit(self, db: Any, event: DomainEvent) -> None: ...
