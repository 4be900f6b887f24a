"""Trade request/response schemas for buy and sell."""
from pydantic import BaseModel, Field

from src.pm_clearing.domain.fee import FeeSplit
from src.pm_common.enums import Outcome, TradeSide
from src.pm_common.wad import MAX_AMOUNT


class BuyRequest(BaseModel):
    outcome: Outcome
    shares: int = Field(le=MAX_AMOUNT, description="Number of position shares to mint")
    payment: int = Field(
        ge=0, le=MAX_AMOUNT, description="Attached payment; excess over cost is refunded"
    )


class SellRequest(BaseModel):
    outcome: Outcome
    shares: int = Field(le=MAX_AMOUNT, description="Number of position shares to burn")


class TradeResponse(BaseModel):
    market_id: int
    side: TradeSide
    outcome: Outcome
    shares: int
    gross: int
    creator_fee: int
    platform_fee: int
    net: int
    refund: int = 0

    @classmethod
    def from_split(
        cls,
        market_id: int,
        side: TradeSide,
        outcome: Outcome,
        shares: int,
        split: FeeSplit,
        refund: int = 0,
    ) -> "TradeResponse":
        return cls(
            market_id=market_id,
            side=side,
            outcome=outcome,
            shares=shares,
            gross=split.gross,
            creator_fee=split.creator_fee,
            platform_fee=split.platform_fee,
            net=split.net,
            refund=refund,
        )
