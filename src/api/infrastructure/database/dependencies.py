"""Database dependency injection for FastAPI.

Provides the async session factory with proper transaction management and
connection pooling, plus schema and health helpers used at startup.
"""

from __future__ import annotations

import threading
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_database_engine
from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    SchemaCreationError,
)
from infrastructure.database.models import Base
from infrastructure.observability import DefaultDatabaseProbe
from infrastructure.settings import get_database_settings

# Module-level probe for observability
_probe = DefaultDatabaseProbe()

# Module-level engine instance (created on first use)
_engine: AsyncEngine | None = None

# Module-level sessionmaker instance (created with the engine)
_sessionmaker: async_sessionmaker[AsyncSession] | None = None

# Thread lock for safe engine initialization
_engine_lock = threading.Lock()


def get_engine() -> AsyncEngine:
    """Get the database engine (singleton).

    Creates engine on first call and caches for subsequent calls.
    Uses double-check locking for thread-safe initialization.
    Also creates and caches the sessionmaker for efficient session creation.

    Returns:
        Configured async engine
    """
    global _engine, _sessionmaker
    if _engine is None:
        with _engine_lock:
            # Double-check after acquiring lock
            if _engine is None:
                settings = get_database_settings()
                _engine = create_database_engine(settings)
                _sessionmaker = async_sessionmaker(
                    _engine,
                    expire_on_commit=False,
                    class_=AsyncSession,
                )
                _probe.engine_created(
                    host=settings.host,
                    database=settings.database,
                    pool_size=settings.pool_max_connections,
                )
    return _engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the current request (FastAPI dependency).

    The session is configured to NOT auto-commit. Services own the
    transaction boundary using `async with session.begin()`.

    Usage:
        @router.post("/posts")
        async def create_post(
            session: AsyncSession = Depends(get_session)
        ):
            async with session.begin():
                session.add(post)
                # transaction commits at end of `with` block

    Yields:
        AsyncSession for database operations
    """
    # Ensure engine and sessionmaker are initialized
    get_engine()
    assert _sessionmaker is not None

    async with _sessionmaker() as session:
        yield session


async def create_schema() -> list[str]:
    """Create every ORM table that does not exist yet.

    Model modules must be imported before calling this so their tables are
    registered on the shared metadata.

    Returns:
        Names of the tables known to the metadata

    Raises:
        SchemaCreationError: If the DDL cannot be executed
    """
    engine = get_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as e:
        raise SchemaCreationError(f"Failed to create database schema: {e}") from e

    tables = sorted(Base.metadata.tables)
    _probe.schema_created(tables)
    return tables


async def check_database_connection() -> None:
    """Run a trivial query to verify the database is reachable.

    Raises:
        DatabaseConnectionError: If the query fails
    """
    engine = get_engine()
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        _probe.health_check_failed(e)
        raise DatabaseConnectionError(f"Database is unreachable: {e}") from e


async def close_database_connections() -> None:
    """Close all database engine connections.

    Should be called on application shutdown to properly cleanup connections.
    Also resets the sessionmaker to allow reinitialization.
    """
    global _engine, _sessionmaker

    if _engine is not None:
        await _engine.dispose()
        _probe.engine_disposed()
        _engine = None
        _sessionmaker = None
