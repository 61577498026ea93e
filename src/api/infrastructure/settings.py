"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreBackend(StrEnum):
    """Persistence technologies the permission store can run on."""

    SQL = "sql"
    REDIS = "redis"


class DatabaseSettings(BaseSettings):
    """Database connection settings for the relational permission store.

    Environment variables:
        PERMS_DB_HOST: Database host (default: localhost)
        PERMS_DB_PORT: Database port (default: 5432)
        PERMS_DB_DATABASE: Database name (default: perms)
        PERMS_DB_USERNAME: Database user (default: perms)
        PERMS_DB_PASSWORD: Database password (required in production)
        PERMS_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        PERMS_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
    """

    model_config = SettingsConfigDict(
        env_prefix="PERMS_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="perms", description="Database name")
    username: str = Field(default="perms", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        return f"postgresql://{self.username}@{self.host}:{self.port}/{self.database}"


class RedisSettings(BaseSettings):
    """Redis connection settings for the key-value permission store.

    Environment variables:
        PERMS_REDIS_URL: Redis connection URL (default: redis://localhost:6379/0)
        PERMS_REDIS_KEY_PREFIX: Prefix applied to every key (default: perms)
    """

    model_config = SettingsConfigDict(
        env_prefix="PERMS_REDIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL",
    )
    key_prefix: str = Field(
        default="perms",
        description="Prefix applied to every key written by the store",
        min_length=1,
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections.

    Environment variables:
        PERMS_APP_NAME: Application name (default: Perms API)
        PERMS_DEBUG: Debug mode (default: false)
        PERMS_NAMESPACE: Namespace bootstrapped at start-up and used when a
            request does not name one (default: default)
        PERMS_STORE_BACKEND: ``sql`` or ``redis`` (default: sql)
    """

    model_config = SettingsConfigDict(
        env_prefix="PERMS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Perms API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    namespace: str = Field(
        default="default",
        description="Namespace bootstrapped at start-up",
        min_length=1,
        max_length=255,
    )
    store_backend: StoreBackend = Field(
        default=StoreBackend.SQL,
        description="Persistence technology backing the permission store",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()

    @property
    def redis(self) -> RedisSettings:
        """Get redis settings."""
        return get_redis_settings()


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
def get_redis_settings() -> RedisSettings:
    """Get cached redis settings."""
    return RedisSettings()
