"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        BLOG_DB_HOST: Database host (default: localhost)
        BLOG_DB_PORT: Database port (default: 5432)
        BLOG_DB_DATABASE: Database name (default: blog)
        BLOG_DB_USERNAME: Database user (default: blog)
        BLOG_DB_PASSWORD: Database password (required in production)
        BLOG_DB_POOL_MAX_CONNECTIONS: Connections kept in the pool (default: 10)
        BLOG_DB_ECHO_SQL: Log every SQL statement (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOG_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="blog", description="Database name")
    username: str = Field(default="blog", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    echo_sql: bool = Field(default=False, description="Echo SQL statements")

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections.

    Environment variables:
        BLOG_APP_NAME: Application name (default: Blog API)
        BLOG_DEBUG: Debug mode (default: false)
        BLOG_LOG_LEVEL: Minimum log level (default: info)
        BLOG_CREATE_SCHEMA: Create missing tables at startup (default: true)
        BLOG_CORS_ORIGINS: JSON list of allowed browser origins
            (default: ["http://localhost:3000"])
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Blog API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info",
        description="Minimum log level",
    )
    create_schema: bool = Field(
        default=True,
        description="Create the users and posts tables at startup if missing",
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()
