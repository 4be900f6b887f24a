"""Outcome classification and settlement scheduling."""

from src.pm_common.datetime_utils import SECONDS_PER_DAY, next_period_boundary
from src.pm_common.enums import Outcome
from src.pm_common.wad import percent_of

# Price bands as percent of the initial price
MOON_PERCENT = 150
PUMP_PERCENT = 110
RUG_PERCENT = 50
DUMP_PERCENT = 90


def classify_outcome(initial_price: int, final_price: int) -> Outcome:
    """Map a final price observation to an Outcome.

    Bands are checked in order MOON, PUMP, RUG, DUMP; the first match wins,
    so the extreme bands take precedence over the looser ones they contain.
    """
    if final_price >= percent_of(initial_price, MOON_PERCENT):
        return Outcome.MOON
    if final_price >= percent_of(initial_price, PUMP_PERCENT):
        return Outcome.PUMP
    if final_price <= percent_of(initial_price, RUG_PERCENT):
        return Outcome.RUG
    if final_price <= percent_of(initial_price, DUMP_PERCENT):
        return Outcome.DUMP
    return Outcome.NO_CHANGE


def settlement_time_for(created_at: int, period: int = SECONDS_PER_DAY) -> int:
    """Earliest settlement moment: the next period boundary strictly after creation."""
    return next_period_boundary(created_at, period)
