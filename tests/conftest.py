"""Shared test fixtures.

Unit tests run against an engine wired to the in-memory adapters, with a
controllable clock. The HTTP client routes requests to the same engine.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.pm_common.database import NullSession, get_db_session
from src.pm_common.wad import WAD
from src.pm_engine.application.service import build_memory_engine, get_market_engine
from src.pm_engine.engine.engine import MarketEngine
from src.pm_engine.engine.params import EngineParams
from src.pm_ledger.domain.constants import NATIVE_LEDGER

OWNER = "PLATFORM_OWNER"
CREATOR = "creator"
T0 = 1_700_000_000            # 2023-11-14T22:13:20Z
SETTLES_AT = 1_700_006_400    # next UTC midnight after T0


class FakeClock:
    def __init__(self, now: int = T0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def params() -> EngineParams:
    return EngineParams(owner=OWNER)


@pytest.fixture
def engine(params: EngineParams, clock: FakeClock) -> MarketEngine:
    return build_memory_engine(params=params, clock=clock)


@pytest.fixture
def db() -> NullSession:
    return NullSession()


@pytest.fixture
def fund(engine: MarketEngine, db: NullSession):
    """Credit native currency to an account."""

    async def _fund(account: str, amount: int = 1_000 * WAD) -> None:
        await engine.deposit(db, NATIVE_LEDGER, account, amount)

    return _fund


@pytest.fixture
async def market(engine: MarketEngine, db: NullSession, fund):
    """A fresh market created at T0 by CREATOR with initial price 1000."""
    await fund(CREATOR, 10 * WAD)
    created, _ = await engine.create_market(
        db, CREATOR, "0xTOKEN", 1000, engine.ctx.params.creation_fee
    )
    return created


@pytest.fixture
async def client(engine: MarketEngine) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints against the memory engine."""
    app.dependency_overrides[get_market_engine] = lambda: engine
    app.dependency_overrides[get_db_session] = NullSession
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
