"""Bootstrap service for the reserved server_admins group.

Runs at application startup. It is the only path allowed to create
``server_admins``, and it writes through the store directly so the
reserved-name guard of GroupRegistry does not apply.
"""

from __future__ import annotations

from infrastructure.observability.startup_probe import (
    DefaultStartupProbe,
    StartupProbe,
)
from permissions.domain.value_objects import (
    SERVER_ADMINS,
    SERVER_ADMINS_DESCRIPTION,
    PermissionGroup,
)
from permissions.ports.exceptions import DuplicateGroupError, PermissionsError
from permissions.ports.repositories import IPermissionStore


class ServerAdminsBootstrapService:
    """Ensures ``server_admins`` exists and warns when it has no members.

    An administrator-less namespace is a misconfiguration, not a crash
    condition: it is reported through the startup probe and startup
    continues. Store failures are not absorbed.
    """

    def __init__(
        self,
        store: IPermissionStore,
        probe: StartupProbe | None = None,
    ):
        """Initialize the bootstrap service.

        Args:
            store: Permission store to bootstrap
            probe: Optional startup probe for observability
        """
        self._store = store
        self._probe = probe or DefaultStartupProbe()

    async def ensure_server_admins(self, namespace: str) -> PermissionGroup:
        """Ensure the bootstrap group exists and check that it has members.

        Idempotent, and safe against concurrent startup of several
        instances.

        Args:
            namespace: The configured namespace

        Returns:
            The bootstrap group

        Raises:
            StoreUnavailableError: If the store fails
        """
        try:
            group = await self._ensure_group(namespace)
            members = await self._store.list_members(namespace, SERVER_ADMINS)
        except PermissionsError as e:
            self._probe.bootstrap_failed(namespace, e)
            raise

        if not members:
            self._probe.server_admins_has_no_members(namespace)
        else:
            self._probe.server_admins_members_found(namespace, len(members))
        return group

    async def _ensure_group(self, namespace: str) -> PermissionGroup:
        existing = await self._store.get_group(namespace, SERVER_ADMINS)
        if existing is not None:
            self._probe.server_admins_already_exists(namespace)
            return existing

        try:
            group = await self._store.create_group(
                namespace, SERVER_ADMINS, SERVER_ADMINS_DESCRIPTION
            )
        except DuplicateGroupError:
            # Another instance created it concurrently
            self._probe.server_admins_already_exists(namespace)
            return PermissionGroup(
                namespace=namespace,
                name=SERVER_ADMINS,
                description=SERVER_ADMINS_DESCRIPTION,
            )

        self._probe.server_admins_bootstrapped(namespace)
        return group
