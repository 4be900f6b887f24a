"""Unit tests for outcome classification and settlement scheduling."""
import pytest

from src.pm_common.enums import Outcome
from src.pm_settlement.domain.rules import classify_outcome, settlement_time_for


class TestClassifyOutcome:
    @pytest.mark.parametrize(
        "final_price, expected",
        [
            (1150, Outcome.PUMP),
            (2000, Outcome.MOON),
            (850, Outcome.DUMP),
            (100, Outcome.RUG),
            (1005, Outcome.NO_CHANGE),
        ],
    )
    def test_reference_prices(self, final_price: int, expected: Outcome) -> None:
        assert classify_outcome(1000, final_price) == expected

    @pytest.mark.parametrize(
        "final_price, expected",
        [
            (1500, Outcome.MOON),
            (1499, Outcome.PUMP),
            (1100, Outcome.PUMP),
            (1099, Outcome.NO_CHANGE),
            (901, Outcome.NO_CHANGE),
            (900, Outcome.DUMP),
            (501, Outcome.DUMP),
            (500, Outcome.RUG),
            (0, Outcome.RUG),
        ],
    )
    def test_band_edges_are_inclusive(self, final_price: int, expected: Outcome) -> None:
        assert classify_outcome(1000, final_price) == expected

    def test_moon_checked_before_pump(self) -> None:
        assert classify_outcome(10**18, 10 * 10**18) == Outcome.MOON

    def test_rug_checked_before_dump(self) -> None:
        assert classify_outcome(10**18, 1) == Outcome.RUG

    def test_thresholds_truncate(self) -> None:
        # 7 * 150 // 100 = 10, 7 * 110 // 100 = 7
        assert classify_outcome(7, 10) == Outcome.MOON
        assert classify_outcome(7, 7) == Outcome.PUMP


class TestSettlementTime:
    def test_mid_day_rolls_to_next_midnight(self) -> None:
        assert settlement_time_for(1_700_000_000) == 1_700_006_400

    def test_exact_boundary_still_waits_a_full_day(self) -> None:
        assert settlement_time_for(1_699_920_000) == 1_700_006_400

    def test_last_second_of_day(self) -> None:
        assert settlement_time_for(1_700_006_399) == 1_700_006_400

    def test_epoch(self) -> None:
        assert settlement_time_for(0) == 86_400

    def test_custom_period(self) -> None:
        assert settlement_time_for(125, period=60) == 180
