"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Registers the users and posts tables on the shared metadata
import blog.infrastructure.models  # noqa: F401
from blog.presentation import router as blog_router
from blog.presentation.validation import register_exception_handlers
from infrastructure.database.dependencies import (
    check_database_connection,
    close_database_connections,
    create_schema,
)
from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.logging import configure_logging
from infrastructure.middleware import RequestLoggingMiddleware
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import get_settings
from infrastructure.version import __version__

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def blog_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Schema creation for missing tables (when enabled)
    - Engine disposal on shutdown
    """
    probe = DefaultStartupProbe()
    probe.application_starting(app_name=settings.app_name, version=__version__)

    if settings.create_schema:
        await create_schema()
    else:
        probe.schema_creation_skipped()

    yield

    await close_database_connections()
    probe.application_stopped()


app = FastAPI(
    title=settings.app_name,
    description="Blogging backend exposing users and posts over REST",
    version=__version__,
    debug=settings.debug,
    lifespan=blog_lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
register_exception_handlers(app)

# Include Blog bounded context routes
app.include_router(blog_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db() -> dict:
    """Check database connection health."""
    try:
        await check_database_connection()
        return {"status": "ok", "connected": True}
    except DatabaseConnectionError as e:
        return {
            "status": "error",
            "connected": False,
            "error": str(e),
        }
