"""Unit tests for database dependency injection."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from infrastructure.database import dependencies
from infrastructure.database.dependencies import (
    close_database_connections,
    get_engine,
    get_session,
)


@pytest_asyncio.fixture(autouse=True)
async def reset_engine():
    """Dispose the module-level engine around each test."""
    await close_database_connections()
    yield
    await close_database_connections()


@pytest.mark.asyncio
async def test_get_engine():
    engine = get_engine()

    assert isinstance(engine, AsyncEngine)
    assert engine.url.drivername == "postgresql+asyncpg"


@pytest.mark.asyncio
async def test_engine_is_singleton():
    assert get_engine() is get_engine()


@pytest.mark.asyncio
async def test_get_session_yields_async_session():
    async for session in get_session():
        assert isinstance(session, AsyncSession)
        assert session.bind is get_engine()


@pytest.mark.asyncio
async def test_close_resets_engine():
    first = get_engine()

    await close_database_connections()

    assert dependencies._engine is None
    assert dependencies._sessionmaker is None
    assert get_engine() is not first
