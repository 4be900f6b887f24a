"""Reward ledger schemas."""
from pydantic import BaseModel, Field

from src.pm_common.wad import MAX_AMOUNT, wad_to_display
from src.pm_rewards.domain.models import RewardPool


class DepositProtocolTokensRequest(BaseModel):
    amount: int = Field(
        le=MAX_AMOUNT, description="Protocol-token amount moved into the redemption pool"
    )


class ClaimProtocolTokensRequest(BaseModel):
    share_amount: int = Field(le=MAX_AMOUNT, description="Reward tokens to burn")


class ClaimProtocolTokensResponse(BaseModel):
    burned: int
    received: int


class RewardPoolOut(BaseModel):
    protocol_token: str | None
    total_shares_issued: int
    protocol_token_balance: int
    protocol_token_balance_display: str

    @classmethod
    def from_domain(cls, pool: RewardPool) -> "RewardPoolOut":
        return cls(
            protocol_token=pool.protocol_token,
            total_shares_issued=pool.total_shares_issued,
            protocol_token_balance=pool.protocol_token_balance,
            protocol_token_balance_display=wad_to_display(pool.protocol_token_balance),
        )
