"""Linear bonding curve — price per share grows with the outcome's supply.

The marginal price of the i-th share is k*i, so buying ``shares`` on top of
``supply`` costs the trapezoid area k*shares*(2*supply + shares)/2, and selling
them back from ``supply`` returns k*shares*(2*supply - shares)/2.
Integer division truncates.
"""

from src.pm_common.errors import InsufficientPoolSupplyError

PRICE_SCALE = 10**15  # k


def buy_cost(current_supply: int, shares: int, k: int = PRICE_SCALE) -> int:
    """Gross cost of minting ``shares`` when ``current_supply`` already exist."""
    return k * shares * (2 * current_supply + shares) // 2


def sell_payout(current_supply: int, shares: int, k: int = PRICE_SCALE) -> int:
    """Gross payout for burning ``shares`` out of ``current_supply``."""
    if shares > current_supply:
        raise InsufficientPoolSupplyError(shares, current_supply)
    return k * shares * (2 * current_supply - shares) // 2


def marginal_price(current_supply: int, k: int = PRICE_SCALE) -> int:
    """Price of the next single share: buy_cost(supply, 1) rounded down."""
    return buy_cost(current_supply, 1, k)
