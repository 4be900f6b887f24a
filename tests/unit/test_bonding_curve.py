"""Unit tests for the linear bonding curve."""
import pytest

from src.pm_common.errors import InsufficientPoolSupplyError
from src.pm_pricing.domain.bonding_curve import (
    PRICE_SCALE,
    buy_cost,
    marginal_price,
    sell_payout,
)


class TestBuyCost:
    def test_first_hundred_shares(self) -> None:
        assert buy_cost(0, 100) == 5 * 10**18

    def test_second_hundred_shares_cost_three_times_first(self) -> None:
        first = buy_cost(0, 100)
        second = buy_cost(100, 100)
        assert second == 15 * 10**18
        assert second == 3 * first

    def test_single_share_at_zero_supply(self) -> None:
        assert buy_cost(0, 1) == PRICE_SCALE // 2

    def test_truncates_with_odd_scale(self) -> None:
        # 3 * 1 * 1 / 2 = 1.5 -> 1
        assert buy_cost(0, 1, k=3) == 1

    @pytest.mark.parametrize("supply", [0, 1, 50, 10_000])
    def test_strictly_increasing_in_shares(self, supply: int) -> None:
        costs = [buy_cost(supply, n) for n in range(1, 30)]
        assert all(a < b for a, b in zip(costs, costs[1:]))

    @pytest.mark.parametrize("shares", [1, 7, 100])
    def test_strictly_increasing_in_supply(self, shares: int) -> None:
        costs = [buy_cost(s, shares) for s in range(0, 30)]
        assert all(a < b for a, b in zip(costs, costs[1:]))

    def test_sequential_identical_purchases_get_more_expensive(self) -> None:
        supply = 0
        previous = -1
        for _ in range(10):
            cost = buy_cost(supply, 25)
            assert cost > previous
            previous = cost
            supply += 25


class TestSellPayout:
    def test_selling_everything_returns_buy_cost(self) -> None:
        assert sell_payout(100, 100) == buy_cost(0, 100)

    def test_partial_sell(self) -> None:
        # k * 50 * (200 - 50) / 2
        assert sell_payout(100, 50) == 375 * 10**16

    def test_sell_then_buy_back_is_symmetric(self) -> None:
        assert sell_payout(200, 100) == buy_cost(100, 100)

    def test_more_than_supply_rejected(self) -> None:
        with pytest.raises(InsufficientPoolSupplyError):
            sell_payout(10, 11)

    def test_strictly_increasing_in_shares(self) -> None:
        payouts = [sell_payout(100, n) for n in range(1, 101)]
        assert all(a < b for a, b in zip(payouts, payouts[1:]))


def test_marginal_price_grows_with_supply() -> None:
    assert marginal_price(0) < marginal_price(1) < marginal_price(1000)
