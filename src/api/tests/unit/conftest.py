"""Unit test fixtures with mocked dependencies and an in-memory SQL store."""

from collections.abc import AsyncGenerator
from unittest.mock import create_autospec

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from infrastructure.database.models import Base
from permissions.infrastructure.observability import PermissionStoreProbe
from permissions.infrastructure.sql_store import SqlPermissionStore
from permissions.ports.repositories import IPermissionStore

# Register ORM tables on Base.metadata
import permissions.infrastructure.models  # noqa: F401


@pytest.fixture
def mock_store():
    """Create mock permission store."""
    return create_autospec(IPermissionStore, instance=True)


@pytest.fixture
def mock_store_probe():
    """Create mock permission store probe."""
    return create_autospec(PermissionStoreProbe, instance=True)


@pytest.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the permission tables created.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def sql_store(sqlite_engine, mock_store_probe) -> SqlPermissionStore:
    """Relational permission store backed by in-memory SQLite."""
    return SqlPermissionStore(engine=sqlite_engine, probe=mock_store_probe)
