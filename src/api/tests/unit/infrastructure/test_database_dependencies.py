"""Unit tests for database dependency injection.

Tests the FastAPI session provider and the schema and health helpers.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from infrastructure.database import dependencies
from infrastructure.database.dependencies import (
    check_database_connection,
    close_database_connections,
    create_schema,
    get_engine,
    get_session,
)
from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    SchemaCreationError,
)


def _engine_with_connection(conn: AsyncMock, method: str) -> MagicMock:
    """Build an engine mock whose begin()/connect() yields the given connection."""
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=conn)
    ctx.__aexit__ = AsyncMock(return_value=None)
    engine = MagicMock()
    getattr(engine, method).return_value = ctx
    return engine


@pytest.mark.asyncio
async def test_get_engine():
    """Test that get_engine returns an AsyncEngine."""
    engine = get_engine()

    assert isinstance(engine, AsyncEngine)
    assert engine.url.drivername == "postgresql+asyncpg"


@pytest.mark.asyncio
async def test_engine_is_singleton():
    """Test that the engine is cached and reused."""
    assert get_engine() is get_engine()


@pytest.mark.asyncio
async def test_get_session():
    """Test that get_session yields exactly one bound AsyncSession."""
    session_count = 0

    async for session in get_session():
        session_count += 1
        assert isinstance(session, AsyncSession)
        assert session.bind.sync_engine is get_engine().sync_engine

    assert session_count == 1


@pytest.mark.asyncio
async def test_close_database_connections():
    """Test that close_database_connections disposes the engine."""
    engine = get_engine()

    await close_database_connections()

    # After closing, getting the engine again should create a new instance
    assert get_engine() is not engine


@pytest.mark.asyncio
async def test_create_schema_runs_create_all():
    """create_schema should run metadata.create_all and report the tables."""
    conn = AsyncMock()
    engine = _engine_with_connection(conn, "begin")

    with patch.object(dependencies, "get_engine", return_value=engine):
        tables = await create_schema()

    conn.run_sync.assert_awaited_once_with(dependencies.Base.metadata.create_all)
    assert tables == sorted(dependencies.Base.metadata.tables)


@pytest.mark.asyncio
async def test_create_schema_wraps_database_errors():
    """DDL failures should surface as SchemaCreationError."""
    conn = AsyncMock()
    conn.run_sync.side_effect = OperationalError("CREATE TABLE", {}, Exception("boom"))
    engine = _engine_with_connection(conn, "begin")

    with patch.object(dependencies, "get_engine", return_value=engine):
        with pytest.raises(SchemaCreationError):
            await create_schema()


@pytest.mark.asyncio
async def test_check_database_connection_succeeds():
    """A successful SELECT 1 should not raise."""
    conn = AsyncMock()
    engine = _engine_with_connection(conn, "connect")

    with patch.object(dependencies, "get_engine", return_value=engine):
        await check_database_connection()

    conn.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_check_database_connection_reports_unreachable_database():
    """Connection failures should surface as DatabaseConnectionError."""
    engine = MagicMock()
    engine.connect.side_effect = OSError("Connection refused")

    with patch.object(dependencies, "get_engine", return_value=engine):
        with pytest.raises(DatabaseConnectionError, match="Connection refused"):
            await check_database_connection()
