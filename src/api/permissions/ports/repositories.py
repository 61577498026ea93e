"""Store protocol (port) for the permissions bounded context.

The permission store is the only seam between the application services and
persistence. Relational and key-value implementations must satisfy this
contract identically: the services are written against it and never
against a concrete store.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from permissions.domain.value_objects import PermissionGroup


@runtime_checkable
class IPermissionStore(Protocol):
    """Backing store for permission groups and their member sets.

    Every operation is scoped by ``namespace`` and never observes data from
    another namespace. Implementations translate storage-specific absence
    ("no such row", "no such key") into ``GroupNotFoundError`` and
    ``NotAMemberError``, and driver failures into ``StoreUnavailableError``.
    No operation is retried.
    """

    async def group_exists(self, namespace: str, name: str) -> bool:
        """Return whether a group with ``name`` exists in ``namespace``."""
        ...

    async def get_group(self, namespace: str, name: str) -> PermissionGroup | None:
        """Retrieve a group by name within a namespace.

        Returns:
            The group, or None if it does not exist
        """
        ...

    async def create_group(
        self, namespace: str, name: str, description: str
    ) -> PermissionGroup:
        """Persist a new, empty group.

        Args:
            namespace: The namespace to create the group in
            name: Group name, unique within the namespace
            description: Free-text description

        Returns:
            The created group

        Raises:
            DuplicateGroupError: If the name already exists in the namespace
        """
        ...

    async def delete_group(self, namespace: str, name: str) -> PermissionGroup:
        """Delete an empty group.

        Returns:
            The deleted group record

        Raises:
            GroupNotFoundError: If the group does not exist
            GroupNotEmptyError: If the group still has members
        """
        ...

    async def list_groups(self, namespace: str) -> list[PermissionGroup]:
        """List every group in a namespace, ordered by name.

        An empty namespace yields an empty list, not an error.
        """
        ...

    async def add_member(self, namespace: str, group: str, principal: str) -> None:
        """Add a principal to a group's member set.

        Adding an existing member is a no-op.

        Raises:
            GroupNotFoundError: If the group does not exist
        """
        ...

    async def remove_member(self, namespace: str, group: str, principal: str) -> None:
        """Remove a principal from a group's member set.

        Raises:
            GroupNotFoundError: If the group does not exist
            NotAMemberError: If the principal is not in the set
        """
        ...

    async def is_member(self, namespace: str, group: str, principal: str) -> bool:
        """Test membership. An unknown group yields False."""
        ...

    async def list_members(self, namespace: str, group: str) -> list[str]:
        """List a group's principals, ordered.

        Raises:
            GroupNotFoundError: If the group does not exist
        """
        ...

    async def list_groups_for_principal(
        self, namespace: str, principal: str
    ) -> list[str]:
        """List the names of every group the principal is a member of."""
        ...

    async def ping(self) -> bool:
        """Return whether the store is reachable."""
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        ...
