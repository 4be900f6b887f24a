"""UTC datetime utilities."""

from datetime import datetime, timezone

SECONDS_PER_DAY = 86400


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def unix_now() -> int:
    """Return the current UTC time as whole unix seconds."""
    return int(utc_now().timestamp())


def next_period_boundary(ts: int, period: int = SECONDS_PER_DAY) -> int:
    """Start of the next whole period strictly after ``ts``.

    A timestamp already on a boundary still moves to the following one:
    next_period_boundary(86400) == 172800.
    """
    return (ts // period) * period + period


def ts_to_iso(ts: int) -> str:
    return datetime.fromtimestamp(ts, timezone.utc).isoformat()
