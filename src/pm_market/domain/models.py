"""Domain models for pm_market — pure dataclasses, no business logic."""

from dataclasses import dataclass, field, replace

from src.pm_common.enums import OUTCOME_COUNT, Outcome


def _zeros() -> list[int]:
    return [0] * OUTCOME_COUNT


@dataclass
class Market:
    id: int
    creator: str
    token_address: str
    initial_price: int           # wad
    created_at: int              # unix seconds
    settlement_time: int         # unix seconds, next day boundary after created_at
    settled: bool = False
    winning_outcome: Outcome | None = None
    final_price: int | None = None
    # Indexed by Outcome.ordinal
    total_shares: list[int] = field(default_factory=_zeros)
    total_volume: list[int] = field(default_factory=_zeros)   # net of fees
    position_tokens: list[str] = field(default_factory=list)  # ledger ids

    @property
    def prize_pool(self) -> int:
        return sum(self.total_volume)

    def shares_of(self, outcome: Outcome) -> int:
        return self.total_shares[outcome.ordinal]

    def volume_of(self, outcome: Outcome) -> int:
        return self.total_volume[outcome.ordinal]

    def position_token(self, outcome: Outcome) -> str:
        return self.position_tokens[outcome.ordinal]

    def is_ready(self, now: int) -> bool:
        return now >= self.settlement_time

    def copy(self) -> "Market":
        """Detached copy: per-outcome lists are not shared with the original."""
        return replace(
            self,
            total_shares=list(self.total_shares),
            total_volume=list(self.total_volume),
            position_tokens=list(self.position_tokens),
        )
