"""Event sinks: append-only market_events table, or an in-process list."""

import json
import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pm_engine.domain.events import DomainEvent

logger = logging.getLogger(__name__)

_INSERT_EVENT_SQL = text("""
    INSERT INTO market_events (market_id, event_type, payload)
    VALUES (:market_id, :event_type, CAST(:payload AS JSONB))
""")


class SqlEventSink:
    async def emit(self, db: AsyncSession, event: DomainEvent) -> None:
        """Insert one row into market_events within the caller's transaction."""
        await db.execute(
            _INSERT_EVENT_SQL,
            {
                "market_id": event.market_id_ref,
                "event_type": event.event_type.value,
                "payload": json.dumps(event.to_payload()),
            },
        )


class InMemoryEventSink:
    def __init__(self) -> None:
        self.events: list[DomainEvent] = []

    async def emit(self, db: Any, event: DomainEvent) -> None:
        logger.debug("event %s %s", event.event_type.value, event.to_payload())
        self.events.append(event)

    def of_type(self, event_cls: type[DomainEvent]) -> list[DomainEvent]:
        return [e for e in self.events if isinstance(e, event_cls)]
