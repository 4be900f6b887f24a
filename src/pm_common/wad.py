"""Integer arithmetic utilities for 1e18-scaled (wad) amounts.

All prices, amounts, and balances use int. No float, no Decimal.
Division truncates toward zero; rounding dust is never reimbursed.
"""

WAD = 10**18
BPS_DENOMINATOR = 10_000

# Largest value a NUMERIC(78,0) column holds
MAX_AMOUNT = 10**78 - 1


def bps_of(amount: int, rate_bps: int) -> int:
    """Truncating basis-point share: amount * rate_bps // 10000."""
    if amount == 0 or rate_bps == 0:
        return 0
    return amount * rate_bps // BPS_DENOMINATOR


def pro_rata(total: int, part: int, whole: int) -> int:
    """total * part // whole (multiply first to keep precision)."""
    return total * part // whole


def percent_of(amount: int, percent: int) -> int:
    """amount * percent // 100, used for price-band thresholds."""
    return amount * percent // 100


def wad_to_display(amount: int) -> str:
    """Render a wad amount with 4 decimals: 1_500_000_000_000_000_000 -> '1.5000'."""
    sign = "-" if amount < 0 else ""
    abs_amount = -amount if amount < 0 else amount
    whole, frac = divmod(abs_amount, WAD)
    return f"{sign}{whole:,}.{frac * 10_000 // WAD:04d}"
