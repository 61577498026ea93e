"""Domain-Oriented Observability for permissions infrastructure."""

from permissions.infrastructure.observability.store_probe import (
    DefaultPermissionStoreProbe,
    PermissionStoreProbe,
)

__all__ = [
    "DefaultPermissionStoreProbe",
    "PermissionStoreProbe",
]
