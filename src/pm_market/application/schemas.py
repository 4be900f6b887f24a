"""Pydantic schemas for pm_market API requests and responses.

Per-outcome fields are rendered as objects keyed by outcome name.
Amounts are 1e18-scaled integers; ``*_display`` fields are 4-decimal strings.
"""

from pydantic import BaseModel, Field

from src.pm_common.datetime_utils import ts_to_iso
from src.pm_common.enums import Outcome
from src.pm_common.wad import MAX_AMOUNT, wad_to_display
from src.pm_market.domain.models import Market


class CreateMarketRequest(BaseModel):
    token_address: str = Field(min_length=1, max_length=128)
    initial_price: int = Field(ge=0, le=MAX_AMOUNT, description="1e18-scaled reference price")
    payment: int = Field(
        ge=0, le=MAX_AMOUNT, description="Attached payment; excess over the fee is refunded"
    )


def _per_outcome(values: list[int]) -> dict[str, int]:
    return {o.value: values[o.ordinal] for o in Outcome}


class MarketDetail(BaseModel):
    id: int
    creator: str
    token_address: str
    initial_price: int
    created_at: str
    settlement_time: int
    settlement_time_iso: str
    settled: bool
    winning_outcome: Outcome | None
    final_price: int | None
    total_shares: dict[str, int]
    total_volume: dict[str, int]
    prize_pool: int
    prize_pool_display: str
    position_tokens: dict[str, str]

    @classmethod
    def from_domain(cls, m: Market) -> "MarketDetail":
        return cls(
            id=m.id,
            creator=m.creator,
            token_address=m.token_address,
            initial_price=m.initial_price,
            created_at=ts_to_iso(m.created_at),
            settlement_time=m.settlement_time,
            settlement_time_iso=ts_to_iso(m.settlement_time),
            settled=m.settled,
            winning_outcome=m.winning_outcome,
            final_price=m.final_price,
            total_shares=_per_outcome(m.total_shares),
            total_volume=_per_outcome(m.total_volume),
            prize_pool=m.prize_pool,
            prize_pool_display=wad_to_display(m.prize_pool),
            position_tokens={o.value: m.position_token(o) for o in Outcome},
        )


class MarketListItem(BaseModel):
    id: int
    creator: str
    token_address: str
    settlement_time: int
    settled: bool
    winning_outcome: Outcome | None
    prize_pool: int

    @classmethod
    def from_domain(cls, m: Market) -> "MarketListItem":
        return cls(
            id=m.id,
            creator=m.creator,
            token_address=m.token_address,
            settlement_time=m.settlement_time,
            settled=m.settled,
            winning_outcome=m.winning_outcome,
            prize_pool=m.prize_pool,
        )


class MarketListResponse(BaseModel):
    items: list[MarketListItem]
    next_cursor: int | None
    has_more: bool


class QuoteResponse(BaseModel):
    market_id: int
    outcome: Outcome
    shares: int
    side: str
    gross: int
    creator_fee: int
    platform_fee: int
    net: int
