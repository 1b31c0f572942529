"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance.
Use docker-compose for testing.
"""

from collections.abc import AsyncGenerator
import os
from uuid import uuid4

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings
from wordpress.infrastructure.models import ActionQueueModel


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        WPHUB_DB_HOST, WPHUB_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("WPHUB_DB_HOST", "localhost"),
        port=int(os.getenv("WPHUB_DB_PORT", "5432")),
        database=os.getenv("WPHUB_DB_DATABASE", "wphub"),
        username=os.getenv("WPHUB_DB_USERNAME", "wphub"),
        password=SecretStr(os.getenv("WPHUB_DB_PASSWORD", "wphub_dev_password")),
    )


@pytest_asyncio.fixture
async def integration_engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine with the action queue table created.

    Skips the test when the database is unreachable.
    """
    engine = create_engine(integration_db_settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        await engine.dispose()
        pytest.skip(f"Database not available: {e}")

    yield engine

    await engine.dispose()


@pytest.fixture
def website_id() -> str:
    """A website id unique to the test, so rows never collide."""
    return f"it-site-{uuid4()}"


@pytest_asyncio.fixture
async def integration_session(
    integration_engine: AsyncEngine, website_id: str
) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session and remove the test website's rows afterwards."""
    sessionmaker = async_sessionmaker(integration_engine, expire_on_commit=False)

    async with sessionmaker() as session:
        yield session

    async with sessionmaker() as session, session.begin():
        await session.execute(
            delete(ActionQueueModel).where(ActionQueueModel.website_id == website_id)
        )
