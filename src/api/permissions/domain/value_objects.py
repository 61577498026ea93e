"""Value objects for the permissions domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for the identifiers the authorization engine works with.
"""

from __future__ import annotations

from dataclasses import dataclass

# Reserved bootstrap group. Membership grants every permission in a namespace.
SERVER_ADMINS = "server_admins"
SERVER_ADMINS_DESCRIPTION = "Server Admins"

# Upper bound for namespaces, group names and principal ids on every backend.
MAX_IDENTIFIER_LENGTH = 255


@dataclass(frozen=True)
class PermissionGroup:
    """A named, described authorization bucket within a namespace.

    Group names are unique per namespace. The member set is not part of
    this value object; it is queried through the membership operations so
    that every read reflects the store's current state.
    """

    namespace: str
    name: str
    description: str = ""

    @property
    def is_reserved(self) -> bool:
        """Whether this is the reserved bootstrap group."""
        return is_reserved_group(self.name)


def is_reserved_group(name: str) -> bool:
    """Return True if ``name`` is the reserved ``server_admins`` group."""
    return name == SERVER_ADMINS
