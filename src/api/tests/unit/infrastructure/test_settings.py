"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import DatabaseSettings, Settings


class TestDatabaseSettings:
    """Tests for database connection settings."""

    def test_defaults(self):
        """Should have sensible development defaults."""
        settings = DatabaseSettings()
        assert settings.host
        assert settings.port == 5432
        assert 1 <= settings.pool_max_connections <= 100
        assert settings.echo_sql is False

    def test_reads_prefixed_environment_variables(self, monkeypatch):
        """Values should come from BLOG_DB_ prefixed variables."""
        monkeypatch.setenv("BLOG_DB_HOST", "db.internal")
        monkeypatch.setenv("BLOG_DB_PORT", "6543")
        monkeypatch.setenv("BLOG_DB_PASSWORD", "hunter2")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.port == 6543
        assert settings.password.get_secret_value() == "hunter2"

    def test_password_is_not_rendered(self):
        """The password must be masked in reprs and connection strings."""
        settings = DatabaseSettings(password="hunter2")

        assert "hunter2" not in repr(settings)
        assert "hunter2" not in settings.connection_string

    def test_pool_max_must_be_positive(self):
        """Pool max connections must be >= 1."""
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=0)

    def test_pool_max_respects_upper_limit(self):
        """Pool max should not exceed reasonable limit."""
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)


class TestSettings:
    """Tests for main application settings."""

    def test_defaults(self):
        """Schema creation is on and logging is at info by default."""
        settings = Settings()
        assert settings.app_name == "Blog API"
        assert settings.log_level == "info"
        assert settings.create_schema is True
        assert settings.cors_origins == ["http://localhost:3000"]

    def test_reads_prefixed_environment_variables(self, monkeypatch):
        """Values should come from BLOG_ prefixed variables."""
        monkeypatch.setenv("BLOG_LOG_LEVEL", "debug")
        monkeypatch.setenv("BLOG_CREATE_SCHEMA", "false")

        settings = Settings()

        assert settings.log_level == "debug"
        assert settings.create_schema is False

    def test_cors_origins_read_as_json_list(self, monkeypatch):
        monkeypatch.setenv(
            "BLOG_CORS_ORIGINS", '["https://blog.example.com", "http://localhost:5173"]'
        )

        settings = Settings()

        assert settings.cors_origins == [
            "https://blog.example.com",
            "http://localhost:5173",
        ]

    def test_rejects_unknown_log_level(self):
        """Only standard level names are accepted."""
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")
