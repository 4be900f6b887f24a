"""Settlement and claim schemas."""
from pydantic import BaseModel, Field, model_validator

from src.pm_common.enums import Outcome
from src.pm_common.wad import MAX_AMOUNT


class SettleRequest(BaseModel):
    final_price: int = Field(ge=0, le=MAX_AMOUNT, description="Observed 1e18-scaled price")


class BatchSettleRequest(BaseModel):
    market_ids: list[int] = Field(max_length=500)
    final_prices: list[int] = Field(max_length=500)

    @model_validator(mode="after")
    def _prices_in_range(self) -> "BatchSettleRequest":
        if any(p < 0 or p > MAX_AMOUNT for p in self.final_prices):
            raise ValueError("final_prices must be between 0 and 10**78 - 1")
        return self


class UnsettledRequest(BaseModel):
    market_ids: list[int] = Field(max_length=500)


class SettleResponse(BaseModel):
    market_id: int
    winning_outcome: Outcome
    final_price: int


class BatchSettleResponse(BaseModel):
    requested: int
    settled_market_ids: list[int]
    success_count: int


class ClaimResponse(BaseModel):
    market_id: int
    amount: int
    amount_display: str
