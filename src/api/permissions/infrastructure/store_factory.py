"""Selects and constructs the configured permission store."""

from __future__ import annotations

from infrastructure.database.engines import create_store_engine
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.redis import create_redis_client, redact_redis_url
from infrastructure.settings import Settings, StoreBackend
from permissions.infrastructure.observability import (
    DefaultPermissionStoreProbe,
    PermissionStoreProbe,
)
from permissions.infrastructure.redis_store import RedisPermissionStore
from permissions.infrastructure.sql_store import SqlPermissionStore
from permissions.ports.repositories import IPermissionStore


def create_permission_store(
    settings: Settings,
    probe: PermissionStoreProbe | None = None,
    startup_probe: StartupProbe | None = None,
) -> IPermissionStore:
    """Build the store for ``settings.store_backend``.

    No connection is made here; both backends connect lazily on first use.

    Args:
        settings: Application settings
        probe: Optional store probe shared by the created store
        startup_probe: Optional probe recording which store was opened

    Returns:
        A store satisfying IPermissionStore
    """
    probe = probe or DefaultPermissionStoreProbe()
    startup_probe = startup_probe or DefaultStartupProbe()

    if settings.store_backend == StoreBackend.REDIS:
        redis_settings = settings.redis
        store: IPermissionStore = RedisPermissionStore(
            client=create_redis_client(redis_settings),
            key_prefix=redis_settings.key_prefix,
            probe=probe,
        )
        target = redact_redis_url(redis_settings.url)
    else:
        db_settings = settings.database
        store = SqlPermissionStore(
            engine=create_store_engine(db_settings),
            probe=probe,
        )
        target = db_settings.connection_string

    startup_probe.permission_store_opened(settings.store_backend.value, target)
    return store
