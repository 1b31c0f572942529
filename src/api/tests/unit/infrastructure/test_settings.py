"""Unit tests for infrastructure settings."""

import pytest
from pydantic import ValidationError

from infrastructure.settings import ActionQueueSettings, DatabaseSettings, Settings


class TestDatabaseSettingsPoolConfiguration:
    """Tests for connection pool configuration."""

    def test_default_pool_settings(self):
        """Should have sensible pool defaults."""
        settings = DatabaseSettings()
        assert 1 <= settings.pool_max_connections <= 20

    def test_pool_max_must_be_positive(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=0)

    def test_pool_max_respects_upper_limit(self):
        with pytest.raises(ValidationError):
            DatabaseSettings(pool_max_connections=101)

    def test_declares_connection_fields_only(self):
        assert set(DatabaseSettings.model_fields) == {
            "host",
            "port",
            "database",
            "username",
            "password",
            "pool_max_connections",
        }


class TestDatabaseSettingsEnvironment:
    """Tests for loading database settings from the environment."""

    def test_reads_prefixed_environment_variables(self, monkeypatch):
        monkeypatch.setenv("WPHUB_DB_HOST", "db.internal")
        monkeypatch.setenv("WPHUB_DB_PORT", "6543")
        monkeypatch.setenv("WPHUB_DB_PASSWORD", "s3cret")

        settings = DatabaseSettings()

        assert settings.host == "db.internal"
        assert settings.port == 6543
        assert settings.password.get_secret_value() == "s3cret"


class TestActionQueueSettings:
    """Tests for action queue settings."""

    def test_defaults(self):
        settings = ActionQueueSettings()
        assert settings.default_priority == 5
        assert settings.history_limit == 100

    def test_reads_prefixed_environment_variables(self, monkeypatch):
        monkeypatch.setenv("WPHUB_ACTION_QUEUE_DEFAULT_PRIORITY", "1")
        monkeypatch.setenv("WPHUB_ACTION_QUEUE_HISTORY_LIMIT", "25")

        settings = ActionQueueSettings()

        assert settings.default_priority == 1
        assert settings.history_limit == 25

    @pytest.mark.parametrize("limit", [0, 1001])
    def test_history_limit_bounds(self, limit):
        with pytest.raises(ValidationError):
            ActionQueueSettings(history_limit=limit)


class TestSettings:
    """Tests for the aggregate application settings."""

    def test_exposes_sections(self):
        settings = Settings()
        assert isinstance(settings.database, DatabaseSettings)
        assert isinstance(settings.action_queue, ActionQueueSettings)
        assert settings.debug is False
        assert settings.app_name == "WP Hub API"
