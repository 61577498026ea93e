"""Membership application service.

Manages principal membership inside permission groups. Membership of the
reserved ``server_admins`` group is seeded out-of-band and cannot be changed
through this service; it can still be listed.
"""

from __future__ import annotations

from permissions.application.observability import (
    DefaultMembershipProbe,
    MembershipProbe,
)
from permissions.domain.value_objects import PermissionGroup, is_reserved_group
from permissions.ports.exceptions import PermissionsError, ReservedGroupNameError
from permissions.ports.repositories import IPermissionStore


class MembershipService:
    """Application service for group membership administration."""

    def __init__(
        self,
        store: IPermissionStore,
        probe: MembershipProbe | None = None,
    ):
        """Initialize MembershipService with dependencies.

        Args:
            store: Permission store holding the member sets
            probe: Optional domain probe for observability
        """
        self._store = store
        self._probe = probe or DefaultMembershipProbe()

    def _reject_reserved(self, namespace: str, group: str, operation: str) -> None:
        if is_reserved_group(group):
            self._probe.reserved_group_rejected(namespace, group, operation)
            raise ReservedGroupNameError(group, namespace)

    async def add_member(self, namespace: str, group: str, principal: str) -> None:
        """Add a principal to a group.

        Adding a principal that is already a member succeeds without change.

        Raises:
            ReservedGroupNameError: If group is ``server_admins``
            GroupNotFoundError: If the group does not exist
            StoreUnavailableError: If the store fails
        """
        self._reject_reserved(namespace, group, "add_member")
        try:
            await self._store.add_member(namespace, group, principal)
        except PermissionsError as e:
            self._probe.member_addition_failed(namespace, group, principal, str(e))
            raise

        self._probe.member_added(namespace, group, principal)

    async def remove_member(self, namespace: str, group: str, principal: str) -> None:
        """Remove a principal from a group.

        Raises:
            ReservedGroupNameError: If group is ``server_admins``
            GroupNotFoundError: If the group does not exist
            NotAMemberError: If the principal is not a member
            StoreUnavailableError: If the store fails
        """
        self._reject_reserved(namespace, group, "remove_member")
        try:
            await self._store.remove_member(namespace, group, principal)
        except PermissionsError as e:
            self._probe.member_removal_failed(namespace, group, principal, str(e))
            raise

        self._probe.member_removed(namespace, group, principal)

    async def list_members(self, namespace: str, group: str) -> list[str]:
        """List the principals in a group.

        An existing group with no members yields an empty list.

        Raises:
            GroupNotFoundError: If the group does not exist
            StoreUnavailableError: If the store fails
        """
        members = await self._store.list_members(namespace, group)
        self._probe.members_listed(namespace, group, len(members))
        return members

    async def list_groups_for_principal(
        self, namespace: str, principal: str
    ) -> list[PermissionGroup]:
        """List every group the principal is a member of.

        A principal with no memberships yields an empty list, which is
        distinct from a namespace with no groups at all.
        """
        names = set(await self._store.list_groups_for_principal(namespace, principal))
        if not names:
            self._probe.principal_groups_listed(namespace, principal, 0)
            return []

        groups = [g for g in await self._store.list_groups(namespace) if g.name in names]
        self._probe.principal_groups_listed(namespace, principal, len(groups))
        return groups
