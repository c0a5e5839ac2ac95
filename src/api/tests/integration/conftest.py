"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance. Connection settings
are read from the usual LINKBIO_DB_* environment variables. Every test
gets freshly created tables, dropped again afterwards.
"""

from __future__ import annotations

from typing import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from iam.infrastructure.models import UserModel  # noqa: F401
from infrastructure.database.engines import create_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings
from profiles.infrastructure.models import LinkModel, SocialLinkModel  # noqa: F401


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        LINKBIO_DB_HOST, LINKBIO_DB_PORT, etc.
    """
    return DatabaseSettings()


@pytest_asyncio.fixture
async def engine(integration_db_settings: DatabaseSettings) -> AsyncIterator[AsyncEngine]:
    """Provide an engine on a clean schema."""
    engine = create_engine(integration_db_settings)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
