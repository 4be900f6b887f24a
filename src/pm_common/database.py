from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import settings

engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_size=20,
    max_overflow=10,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class NullSession:
    """Stand-in session for the in-memory backend.

    Exposes the ``begin()`` / ``begin_nested()`` scopes routers and the engine
    open, without a database.
    """

    @asynccontextmanager
    async def begin(self) -> AsyncGenerator[None, None]:
        yield

    @asynccontextmanager
    async def begin_nested(self) -> AsyncGenerator[None, None]:
        yield

    async def execute(self, *args: Any, **kwargs: Any) -> Any:
        raise RuntimeError("NullSession cannot execute SQL; STORAGE_BACKEND is 'memory'")


async def get_db_session() -> AsyncGenerator[AsyncSession | NullSession, None]:
    """FastAPI dependency: yields an AsyncSession, auto-closes after request."""
    if settings.STORAGE_BACKEND == "memory":
        yield NullSession()
        return
    async with async_session_factory() as session:
        yield session
