"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class Outcome(str, Enum):
    """Settlement class of a market. Declaration order is the storage ordinal."""

    PUMP = "PUMP"
    DUMP = "DUMP"
    NO_CHANGE = "NO_CHANGE"
    RUG = "RUG"
    MOON = "MOON"

    @property
    def ordinal(self) -> int:
        return _OUTCOME_ORDER.index(self)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Outcome":
        return _OUTCOME_ORDER[ordinal]


_OUTCOME_ORDER: tuple[Outcome, ...] = tuple(Outcome)

OUTCOME_COUNT = len(_OUTCOME_ORDER)


class EventType(str, Enum):
    MARKET_CREATED = "MARKET_CREATED"
    SHARES_PURCHASED = "SHARES_PURCHASED"
    SHARES_SOLD = "SHARES_SOLD"
    FEES_PAID = "FEES_PAID"
    MARKET_SETTLED = "MARKET_SETTLED"
    BATCH_SETTLEMENT = "BATCH_SETTLEMENT"
    WINNINGS_CLAIMED = "WINNINGS_CLAIMED"
    BOT_AUTHORIZED = "BOT_AUTHORIZED"
    PROTOCOL_TOKEN_CLAIMED = "PROTOCOL_TOKEN_CLAIMED"
    PROTOCOL_TOKEN_DEPOSITED = "PROTOCOL_TOKEN_DEPOSITED"


class TradeSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
