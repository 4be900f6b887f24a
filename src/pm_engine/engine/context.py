"""EngineContext — the single top-level state handle shared by every component.

Holds the owner/parameters, the id counter and allow-list (via their
repositories), the balance ledger capability and the clock. Components never
reach for module globals.
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from src.pm_auth.domain.repository import BotRegistryProtocol
from src.pm_common.datetime_utils import unix_now
from src.pm_engine.engine.params import EngineParams
from src.pm_ledger.domain.repository import BalanceLedgerProtocol
from src.pm_market.domain.repository import MarketRepositoryProtocol
from src.pm_rewards.domain.repository import RewardPoolRepositoryProtocol


@dataclass
class EngineContext:
    markets: MarketRepositoryProtocol
    ledger: BalanceLedgerProtocol
    bots: BotRegistryProtocol
    rewards: RewardPoolRepositoryProtocol
    params: EngineParams = field(default_factory=EngineParams)
    clock: Callable[[], int] = unix_now
