"""Fee calculation — split a gross trade amount into creator, platform and net parts."""

from dataclasses import dataclass

from src.pm_common.wad import bps_of

CREATOR_FEE_BPS = 10   # 0.1%
PLATFORM_FEE_BPS = 100  # 1%


@dataclass(frozen=True)
class FeeSplit:
    gross: int
    creator_fee: int
    platform_fee: int
    net: int


def split_fees(
    gross: int,
    creator_fee_bps: int = CREATOR_FEE_BPS,
    platform_fee_bps: int = PLATFORM_FEE_BPS,
) -> FeeSplit:
    """Truncating bps fees; the remainder (including rounding dust) is net."""
    creator_fee = bps_of(gross, creator_fee_bps)
    platform_fee = bps_of(gross, platform_fee_bps)
    return FeeSplit(
        gross=gross,
        creator_fee=creator_fee,
        platform_fee=platform_fee,
        net=gross - creator_fee - platform_fee,
    )


def drain_volume(volume: int, amount: int) -> int:
    """Volume left after removing ``amount``, floored at zero."""
    return volume - amount if amount < volume else 0
