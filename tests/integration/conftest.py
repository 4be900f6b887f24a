"""Integration-test fixtures.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool (created at import time) remains valid across
the entire test session. Requires STORAGE_BACKEND=postgres and migrations.
"""

import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config.settings import settings
from src.main import app

WAD = 10**18


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def owner_headers() -> dict[str, str]:
    return {"X-Account-Id": settings.OWNER_ACCOUNT}


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def trader(client: AsyncClient, owner_headers: dict[str, str]) -> dict[str, str]:
    """A freshly funded account; unique per run so reruns do not collide."""
    account = f"it_trader_{uuid.uuid4().hex[:8]}"
    resp = await client.post(
        "/api/v1/ledger/deposit",
        json={"account": account, "amount": 100 * WAD},
        headers=owner_headers,
    )
    assert resp.status_code == 200
    return {"X-Account-Id": account}
