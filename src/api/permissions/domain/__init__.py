"""Domain layer for the permissions bounded context."""

from permissions.domain.value_objects import (
    MAX_IDENTIFIER_LENGTH,
    SERVER_ADMINS,
    SERVER_ADMINS_DESCRIPTION,
    PermissionGroup,
    is_reserved_group,
)

__all__ = [
    "MAX_IDENTIFIER_LENGTH",
    "SERVER_ADMINS",
    "SERVER_ADMINS_DESCRIPTION",
    "PermissionGroup",
    "is_reserved_group",
]
