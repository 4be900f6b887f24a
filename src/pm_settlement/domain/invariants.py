"""Market and reward-pool invariant verification after each mutation."""

import logging

from src.pm_common.enums import OUTCOME_COUNT
from src.pm_market.domain.models import Market
from src.pm_rewards.domain.models import RewardPool

logger = logging.getLogger(__name__)


def verify_market_invariants(market: Market) -> None:
    """Raise AssertionError if the market record is internally inconsistent.

    - per-outcome arrays have exactly one slot per Outcome
    - shares and volume are never negative
    - winning_outcome / final_price are set iff the market is settled
    """
    assert len(market.total_shares) == OUTCOME_COUNT, (
        f"market {market.id}: total_shares has {len(market.total_shares)} slots"
    )
    assert len(market.total_volume) == OUTCOME_COUNT, (
        f"market {market.id}: total_volume has {len(market.total_volume)} slots"
    )
    assert len(market.position_tokens) == OUTCOME_COUNT, (
        f"market {market.id}: position_tokens has {len(market.position_tokens)} slots"
    )
    assert all(s >= 0 for s in market.total_shares), (
        f"market {market.id}: negative shares {market.total_shares}"
    )
    assert all(v >= 0 for v in market.total_volume), (
        f"market {market.id}: negative volume {market.total_volume}"
    )
    if market.settled:
        assert market.winning_outcome is not None and market.final_price is not None, (
            f"market {market.id}: settled without outcome/final price"
        )
    else:
        assert market.winning_outcome is None and market.final_price is None, (
            f"market {market.id}: outcome recorded before settlement"
        )
    logger.debug(
        "Invariants OK: market=%s, pool=%d, shares=%s",
        market.id,
        market.prize_pool,
        market.total_shares,
    )


def verify_reward_invariants(pool: RewardPool, reward_supply: int) -> list[str]:
    """Issued reward shares must equal the reward token supply. Returns violations."""
    violations: list[str] = []
    if pool.total_shares_issued != reward_supply:
        msg = (
            f"reward shares issued ({pool.total_shares_issued}) "
            f"!= reward token supply ({reward_supply})"
        )
        violations.append(msg)
        logger.error(msg)
    if pool.protocol_token_balance < 0:
        msg = f"negative protocol token balance ({pool.protocol_token_balance})"
        violations.append(msg)
        logger.error(msg)
    return violations
