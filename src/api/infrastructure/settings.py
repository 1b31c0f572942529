"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        WPHUB_DB_HOST: Database host (default: localhost)
        WPHUB_DB_PORT: Database port (default: 5432)
        WPHUB_DB_DATABASE: Database name (default: wphub)
        WPHUB_DB_USERNAME: Database user (default: wphub)
        WPHUB_DB_PASSWORD: Database password (required in production)
        WPHUB_DB_POOL_MAX_CONNECTIONS: Connections kept by the engine pool,
            with no overflow (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="WPHUB_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="wphub", description="Database name")
    username: str = Field(default="wphub", description="Database username")
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


class ActionQueueSettings(BaseSettings):
    """WordPress action queue settings.

    Environment variables:
        WPHUB_ACTION_QUEUE_DEFAULT_PRIORITY: Priority stored when the caller
            gives none (default: 5)
        WPHUB_ACTION_QUEUE_HISTORY_LIMIT: Number of entries returned by the
            action history when no explicit limit is given (default: 100)
    """

    model_config = SettingsConfigDict(
        env_prefix="WPHUB_ACTION_QUEUE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_priority: int = Field(
        default=5,
        description="Priority recorded for entries enqueued without one",
    )
    history_limit: int = Field(
        default=100,
        description="Default page size for action history",
        ge=1,
        le=1000,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="WP Hub API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def action_queue(self) -> ActionQueueSettings:
        """Get action queue settings."""
        return get_action_queue_settings()


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


@lru_cache
def get_action_queue_settings() -> ActionQueueSettings:
    """Get cached action queue settings."""
    return ActionQueueSettings()
