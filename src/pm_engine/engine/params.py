"""Frozen economic parameters the engine runs with."""

from dataclasses import dataclass

from config.settings import Settings
from src.pm_clearing.domain.fee import CREATOR_FEE_BPS, PLATFORM_FEE_BPS
from src.pm_common.datetime_utils import SECONDS_PER_DAY
from src.pm_common.wad import WAD
from src.pm_pricing.domain.bonding_curve import PRICE_SCALE


@dataclass(frozen=True)
class EngineParams:
    owner: str = "PLATFORM_OWNER"
    creation_fee: int = WAD // 100
    price_scale: int = PRICE_SCALE
    creator_fee_bps: int = CREATOR_FEE_BPS
    platform_fee_bps: int = PLATFORM_FEE_BPS
    creator_reward: int = 100 * WAD
    trade_reward: int = 10 * WAD
    winner_multiplier: int = 100
    settlement_period: int = SECONDS_PER_DAY

    @classmethod
    def from_settings(cls, s: Settings) -> "EngineParams":
        return cls(
            owner=s.OWNER_ACCOUNT,
            creation_fee=s.CREATION_FEE,
            price_scale=s.PRICE_SCALE,
            creator_fee_bps=s.CREATOR_FEE_BPS,
            platform_fee_bps=s.PLATFORM_FEE_BPS,
            creator_reward=s.CREATOR_REWARD,
            trade_reward=s.TRADE_REWARD,
            winner_multiplier=s.WINNER_MULTIPLIER,
            settlement_period=s.SETTLEMENT_PERIOD_SECONDS,
        )
