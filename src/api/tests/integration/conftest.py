"""Integration test fixtures for database tests.

These fixtures require a running PostgreSQL instance.
Use docker-compose for testing.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
import os

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

import blog.infrastructure.models  # noqa: F401
from infrastructure.database.engines import create_database_engine
from infrastructure.database.models import Base
from infrastructure.settings import DatabaseSettings


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        BLOG_DB_HOST, BLOG_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("BLOG_DB_HOST", "localhost"),
        port=int(os.getenv("BLOG_DB_PORT", "5432")),
        database=os.getenv("BLOG_DB_DATABASE", "blog"),
        username=os.getenv("BLOG_DB_USERNAME", "blog"),
        password=SecretStr(os.getenv("BLOG_DB_PASSWORD", "blog_dev_password")),
    )


@pytest_asyncio.fixture
async def engine(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[AsyncEngine, None]:
    """Provide an engine against a schema with empty blog tables."""
    engine = create_database_engine(integration_db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(text("TRUNCATE posts, users"))

    yield engine

    async with engine.begin() as conn:
        await conn.execute(text("TRUNCATE posts, users"))
    await engine.dispose()


@pytest.fixture
def sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def async_session(
    sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session for integration tests."""
    async with sessionmaker() as session:
        yield session
