"""Domain models for pm_rewards — pure dataclasses, no business logic."""

from dataclasses import dataclass, replace


@dataclass
class RewardPool:
    total_shares_issued: int = 0      # reward tokens outstanding
    protocol_token_balance: int = 0   # redeemable protocol-token pool
    protocol_token: str | None = None  # ledger id, set once

    def copy(self) -> "RewardPool":
        return replace(self)
