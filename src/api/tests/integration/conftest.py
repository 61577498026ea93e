"""Integration test fixtures for the permission stores.

These fixtures require running PostgreSQL and Redis instances.
Use docker-compose for testing and run with ``pytest -m integration``.
"""

from collections.abc import AsyncGenerator
import os

import pytest
import pytest_asyncio
from pydantic import SecretStr
from sqlalchemy import text

from infrastructure.database.engines import create_store_engine
from infrastructure.database.models import Base
from infrastructure.redis import create_redis_client
from infrastructure.settings import DatabaseSettings, RedisSettings
from permissions.infrastructure.redis_store import RedisPermissionStore
from permissions.infrastructure.sql_store import SqlPermissionStore

# Register ORM tables on Base.metadata
import permissions.infrastructure.models  # noqa: F401

TEST_KEY_PREFIX = "perms-test"


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with environment variables:
        PERMS_DB_HOST, PERMS_DB_PORT, etc.
    """
    return DatabaseSettings(
        host=os.getenv("PERMS_DB_HOST", "localhost"),
        port=int(os.getenv("PERMS_DB_PORT", "5432")),
        database=os.getenv("PERMS_DB_DATABASE", "perms"),
        username=os.getenv("PERMS_DB_USERNAME", "perms"),
        password=SecretStr(os.getenv("PERMS_DB_PASSWORD", "perms_dev_password")),
        pool_min_connections=1,
        pool_max_connections=5,
    )


@pytest.fixture(scope="session")
def integration_redis_settings() -> RedisSettings:
    return RedisSettings(
        url=os.getenv("PERMS_REDIS_URL", "redis://localhost:6379/15"),
        key_prefix=TEST_KEY_PREFIX,
    )


@pytest_asyncio.fixture
async def postgres_store(
    integration_db_settings: DatabaseSettings,
) -> AsyncGenerator[SqlPermissionStore, None]:
    """Relational store on PostgreSQL with empty permission tables."""
    engine = create_store_engine(integration_db_settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(text("DELETE FROM permission_membership"))
        await conn.execute(text("DELETE FROM permissions"))

    store = SqlPermissionStore(engine=engine)
    yield store

    async with engine.begin() as conn:
        await conn.execute(text("DELETE FROM permission_membership"))
        await conn.execute(text("DELETE FROM permissions"))
    await store.close()


async def _flush_prefix(client, prefix: str) -> None:
    keys = [key async for key in client.scan_iter(match=f"{prefix}:*")]
    if keys:
        await client.delete(*keys)


@pytest_asyncio.fixture
async def redis_store(
    integration_redis_settings: RedisSettings,
) -> AsyncGenerator[RedisPermissionStore, None]:
    """Key-value store on Redis with the test key prefix flushed."""
    client = create_redis_client(integration_redis_settings)
    await _flush_prefix(client, integration_redis_settings.key_prefix)

    store = RedisPermissionStore(
        client=client, key_prefix=integration_redis_settings.key_prefix
    )
    yield store

    await _flush_prefix(client, integration_redis_settings.key_prefix)
    await store.close()


@pytest.fixture(params=["postgres", "redis"])
def store(request):
    """Run a test once against each backend."""
    return request.getfixturevalue(f"{request.param}_store")
