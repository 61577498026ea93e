"""Group registry application service.

Manages permission group existence: create, delete (only when empty), list
and look up by name within a namespace. The reserved ``server_admins``
group is never created or deleted through this service.
"""

from __future__ import annotations

from permissions.application.observability import (
    DefaultGroupRegistryProbe,
    GroupRegistryProbe,
)
from permissions.domain.value_objects import PermissionGroup, is_reserved_group
from permissions.ports.exceptions import (
    GroupNotFoundError,
    NoPermissionsConfiguredError,
    PermissionsError,
    ReservedGroupNameError,
)
from permissions.ports.repositories import IPermissionStore


class GroupRegistry:
    """Application service for permission group administration."""

    def __init__(
        self,
        store: IPermissionStore,
        probe: GroupRegistryProbe | None = None,
    ):
        """Initialize GroupRegistry with dependencies.

        Args:
            store: Permission store the registry reads and writes through
            probe: Optional domain probe for observability
        """
        self._store = store
        self._probe = probe or DefaultGroupRegistryProbe()

    def _reject_reserved(self, namespace: str, name: str, operation: str) -> None:
        if is_reserved_group(name):
            self._probe.reserved_group_rejected(namespace, name, operation)
            raise ReservedGroupNameError(name, namespace)

    async def create(
        self, namespace: str, name: str, description: str = ""
    ) -> PermissionGroup:
        """Create a new, empty group.

        Args:
            namespace: Namespace to create the group in
            name: Group name
            description: Free-text description

        Returns:
            The created group

        Raises:
            ReservedGroupNameError: If name is ``server_admins``
            DuplicateGroupError: If the group already exists
            StoreUnavailableError: If the store fails
        """
        self._reject_reserved(namespace, name, "create")
        try:
            group = await self._store.create_group(namespace, name, description)
        except PermissionsError as e:
            self._probe.group_creation_failed(namespace, name, str(e))
            raise

        self._probe.group_created(namespace, name)
        return group

    async def delete(self, namespace: str, name: str) -> PermissionGroup:
        """Delete an empty group.

        Members are never cascaded; the caller removes them first.

        Returns:
            The deleted group

        Raises:
            ReservedGroupNameError: If name is ``server_admins``
            GroupNotFoundError: If the group does not exist
            GroupNotEmptyError: If the group has members
            StoreUnavailableError: If the store fails
        """
        self._reject_reserved(namespace, name, "delete")
        try:
            group = await self._store.delete_group(namespace, name)
        except PermissionsError as e:
            self._probe.group_deletion_failed(namespace, name, str(e))
            raise

        self._probe.group_deleted(namespace, name)
        return group

    async def list(self, namespace: str) -> list[PermissionGroup]:
        """List every group in the namespace, ordered by name.

        Raises:
            NoPermissionsConfiguredError: If the namespace has no groups
            StoreUnavailableError: If the store fails
        """
        groups = await self._store.list_groups(namespace)
        if not groups:
            self._probe.no_groups_configured(namespace)
            raise NoPermissionsConfiguredError(namespace)

        self._probe.groups_listed(namespace, len(groups))
        return groups

    async def get(self, namespace: str, name: str) -> PermissionGroup:
        """Look up a group by name.

        Lookup is read-only, so the reserved group is visible here.

        Raises:
            GroupNotFoundError: If the group does not exist
            StoreUnavailableError: If the store fails
        """
        group = await self._store.get_group(namespace, name)
        if group is None:
            raise GroupNotFoundError(name, namespace)
        return group
