"""Domain events — notifications emitted after an operation's state changes apply."""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar

from src.pm_common.enums import EventType, Outcome


@dataclass(frozen=True)
class DomainEvent:
    event_type: ClassVar[EventType]

    @property
    def market_id_ref(self) -> int | None:
        return getattr(self, "market_id", None)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, tuple):
                value = list(value)
            payload[f.name] = value
        return payload

    def to_dict(self) -> dict[str, Any]:
        return {"event_type": self.event_type.value, **self.to_payload()}


@dataclass(frozen=True)
class MarketCreated(DomainEvent):
    event_type = EventType.MARKET_CREATED
    market_id: int
    creator: str
    token_address: str
    initial_price: int
    settlement_time: int


@dataclass(frozen=True)
class SharesPurchased(DomainEvent):
    event_type = EventType.SHARES_PURCHASED
    market_id: int
    buyer: str
    outcome: Outcome
    shares: int
    cost: int


@dataclass(frozen=True)
class SharesSold(DomainEvent):
    event_type = EventType.SHARES_SOLD
    market_id: int
    seller: str
    outcome: Outcome
    shares: int
    payout: int  # net of fees


@dataclass(frozen=True)
class FeesPaid(DomainEvent):
    event_type = EventType.FEES_PAID
    market_id: int
    creator: str
    creator_fee: int
    platform_fee: int


@dataclass(frozen=True)
class MarketSettled(DomainEvent):
    event_type = EventType.MARKET_SETTLED
    market_id: int
    outcome: Outcome
    final_price: int


@dataclass(frozen=True)
class BatchSettlement(DomainEvent):
    event_type = EventType.BATCH_SETTLEMENT
    market_ids: tuple[int, ...]
    success_count: int


@dataclass(frozen=True)
class WinningsClaimed(DomainEvent):
    event_type = EventType.WINNINGS_CLAIMED
    market_id: int
    account: str
    amount: int


@dataclass(frozen=True)
class BotAuthorized(DomainEvent):
    event_type = EventType.BOT_AUTHORIZED
    account: str
    authorized: bool


@dataclass(frozen=True)
class ProtocolTokenClaimed(DomainEvent):
    event_type = EventType.PROTOCOL_TOKEN_CLAIMED
    account: str
    burned: int
    received: int


@dataclass(frozen=True)
class ProtocolTokenDeposited(DomainEvent):
    event_type = EventType.PROTOCOL_TOKEN_DEPOSITED
    account: str
    amount: int
