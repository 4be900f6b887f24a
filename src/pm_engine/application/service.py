# src/pm_engine/application/service.py
from config.settings import settings
from src.pm_auth.infrastructure.memory import InMemoryBotRegistry
from src.pm_auth.infrastructure.persistence import BotRegistryRepository
from src.pm_engine.engine.context import EngineContext
from src.pm_engine.engine.engine import MarketEngine
from src.pm_engine.engine.params import EngineParams
from src.pm_engine.infrastructure.events import InMemoryEventSink, SqlEventSink
from src.pm_ledger.infrastructure.memory import InMemoryBalanceLedger
from src.pm_ledger.infrastructure.persistence import SqlBalanceLedger
from src.pm_market.infrastructure.memory import InMemoryMarketRepository
from src.pm_market.infrastructure.persistence import MarketRepository
from src.pm_rewards.infrastructure.memory import InMemoryRewardPoolRepository
from src.pm_rewards.infrastructure.persistence import RewardPoolRepository

_engine: MarketEngine | None = None


def build_memory_engine(params: EngineParams | None = None, clock=None) -> MarketEngine:
    """Engine over in-process adapters; state lives as long as the engine."""
    ctx = EngineContext(
        markets=InMemoryMarketRepository(),
        ledger=InMemoryBalanceLedger(),
        bots=InMemoryBotRegistry(),
        rewards=InMemoryRewardPoolRepository(),
        params=params or EngineParams.from_settings(settings),
    )
    if clock is not None:
        ctx.clock = clock
    return MarketEngine(ctx, InMemoryEventSink())


def build_sql_engine(params: EngineParams | None = None) -> MarketEngine:
    ctx = EngineContext(
        markets=MarketRepository(),
        ledger=SqlBalanceLedger(),
        bots=BotRegistryRepository(),
        rewards=RewardPoolRepository(),
        params=params or EngineParams.from_settings(settings),
    )
    return MarketEngine(ctx, SqlEventSink())


def get_market_engine() -> MarketEngine:
    global _engine  # noqa: PLW0603
    if _engine is None:
        if settings.STORAGE_BACKEND == "memory":
            _engine = build_memory_engine()
        else:
            _engine = build_sql_engine()
    return _engine
