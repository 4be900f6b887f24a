"""Well-known ledger ids and system accounts."""

from src.pm_common.enums import Outcome

NATIVE_LEDGER = "NATIVE"  # currency used for payments, fees and payouts
REWARD_LEDGER = "REWARD"  # secondary reward token

ESCROW_ACCOUNT = "ENGINE_ESCROW"  # holds net trading volume of every market
REWARD_POOL_ACCOUNT = "REWARD_POOL"  # holds deposited protocol tokens


def position_ledger_id(market_id: int, outcome: Outcome) -> str:
    """Ledger id of one outcome's position token: 'MKT-7:PUMP'."""
    return f"MKT-{market_id}:{outcome.value}"
