"""Ports (interfaces) for the permissions bounded context.

Ports define the store contract and the domain errors without specifying
implementation details, so the application layer stays independent of the
persistence technology.
"""

from permissions.ports.exceptions import (
    DuplicateGroupError,
    GroupNotEmptyError,
    GroupNotFoundError,
    NoPermissionsConfiguredError,
    NotAMemberError,
    PermissionsError,
    ReservedGroupNameError,
    StoreUnavailableError,
)
from permissions.ports.repositories import IPermissionStore

__all__ = [
    "IPermissionStore",
    "PermissionsError",
    "ReservedGroupNameError",
    "DuplicateGroupError",
    "GroupNotFoundError",
    "GroupNotEmptyError",
    "NotAMemberError",
    "NoPermissionsConfiguredError",
    "StoreUnavailableError",
]
