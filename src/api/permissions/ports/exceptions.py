"""Domain exceptions for the permissions bounded context.

These exceptions represent domain-level errors raised by the permission
store and the application services. They are never recovered internally;
the presentation layer translates them into responses that name the
offending group or principal.
"""

from __future__ import annotations


class PermissionsError(Exception):
    """Base class for all permissions domain errors."""

    def __init__(
        self,
        message: str,
        *,
        namespace: str | None = None,
        group: str | None = None,
        principal: str | None = None,
    ):
        super().__init__(message)
        self.namespace = namespace
        self.group = group
        self.principal = principal


class ReservedGroupNameError(PermissionsError):
    """Raised when a generic administrative path targets ``server_admins``.

    The bootstrap group is created at start-up and its membership is seeded
    out-of-band. Creating, deleting, or changing membership of it through
    the public operations is always rejected.
    """

    def __init__(self, group: str, namespace: str | None = None):
        super().__init__(
            f"`{group}` is a reserved group and cannot be modified",
            namespace=namespace,
            group=group,
        )


class DuplicateGroupError(PermissionsError):
    """Raised when creating a group whose name already exists in the namespace."""

    def __init__(self, group: str, namespace: str):
        super().__init__(
            f"group `{group}` already exists",
            namespace=namespace,
            group=group,
        )


class GroupNotFoundError(PermissionsError):
    """Raised when an operation references a group absent from the namespace."""

    def __init__(self, group: str, namespace: str):
        super().__init__(
            f"no such group: `{group}`",
            namespace=namespace,
            group=group,
        )


class GroupNotEmptyError(PermissionsError):
    """Raised when deleting a group that still has members.

    Deletion is refused rather than cascaded; members must be removed
    first by the caller.
    """

    def __init__(self, group: str, namespace: str, member_count: int | None = None):
        if member_count is None:
            message = f"group `{group}` still has members"
        else:
            message = f"group `{group}` still has {member_count} member(s)"
        super().__init__(message, namespace=namespace, group=group)
        self.member_count = member_count


class NotAMemberError(PermissionsError):
    """Raised when removing a principal that is not in the group."""

    def __init__(self, group: str, namespace: str, principal: str):
        super().__init__(
            f"`{principal}` is not a member of `{group}`",
            namespace=namespace,
            group=group,
            principal=principal,
        )


class NoPermissionsConfiguredError(PermissionsError):
    """Raised when listing groups in a namespace that has none.

    This is a user-visible configuration state, distinct from an empty
    per-group or per-principal listing, which is not an error.
    """

    def __init__(self, namespace: str):
        super().__init__(
            f"no permission groups are configured in namespace `{namespace}`",
            namespace=namespace,
        )


class StoreUnavailableError(PermissionsError):
    """Raised when the backing store cannot be reached or fails unexpectedly.

    Always propagated to the caller unmodified and never retried by the
    core. The driver exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, namespace: str | None = None):
        super().__init__(
            f"permission store unavailable during {operation}",
            namespace=namespace,
        )
        self.operation = operation
