"""
Tests for settings loading and logging configuration.
"""

import logging
import pytest
from pydantic import ValidationError

from lightbnb.config import Settings, configure_logging


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in ("DATABASE_URL", "ENVIRONMENT", "LOG_LEVEL", "DEBUG", "DEFAULT_RESULT_LIMIT",
                 "POSTGRES_HOST", "POSTGRES_DB", "POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_PORT"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Test settings validation."""

    def test_database_url_built_from_components(self):
        settings = Settings(_env_file=None, postgres_host="db", postgres_db="lightbnb_dev")

        assert settings.database_url == "postgresql+asyncpg://vagrant:123@db:5432/lightbnb_dev"
        assert not settings.is_sqlite

    def test_sync_driver_url_upgraded(self):
        settings = Settings(_env_file=None, database_url="postgresql://u:p@host:5432/lightbnb")

        assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/lightbnb"

    def test_sqlite_url_kept(self):
        settings = Settings(_env_file=None, database_url="sqlite+aiosqlite://")

        assert settings.is_sqlite

    def test_environment_from_env_var(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")

        settings = Settings(_env_file=None)

        assert settings.is_production

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="qa")

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="loud")

    def test_default_result_limit(self):
        assert Settings(_env_file=None).default_result_limit == 10

        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_result_limit=0)


class TestConfigureLogging:
    """Test logging setup from settings."""

    def test_debug_enables_debug_level(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging(Settings(_env_file=None, debug=True))

        assert calls["level"] == logging.DEBUG

    def test_log_level_used(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

        configure_logging(Settings(_env_file=None, log_level="warning"))

        assert calls["level"] == logging.WARNING
