"""Authorization engine.

Decides whether a principal may perform an action guarded by a list of
candidate permission groups. Membership of ``server_admins`` overrides
every other check.
"""

from __future__ import annotations

from collections.abc import Sequence

from permissions.application.observability import (
    AuthorizationProbe,
    DefaultAuthorizationProbe,
)
from permissions.domain.value_objects import SERVER_ADMINS
from permissions.ports.exceptions import StoreUnavailableError
from permissions.ports.repositories import IPermissionStore


class AuthorizationEngine:
    """Flat group-membership authorization.

    Unknown candidate group names count as "not a member" and never raise;
    only store failures propagate.
    """

    def __init__(
        self,
        store: IPermissionStore,
        probe: AuthorizationProbe | None = None,
    ):
        self._store = store
        self._probe = probe or DefaultAuthorizationProbe()

    async def authorize(
        self,
        namespace: str,
        principal: str,
        candidate_groups: Sequence[str],
    ) -> bool:
        """Return whether ``principal`` may act under any of ``candidate_groups``.

        The admin override is tested first. Candidates are then tested in
        caller order and evaluation stops at the first match.

        Args:
            namespace: Namespace the decision is scoped to
            principal: Normalized principal id
            candidate_groups: Group names guarding the action, in priority order

        Returns:
            True if the principal is an admin or a member of a candidate group

        Raises:
            StoreUnavailableError: If the store fails
        """
        try:
            if await self._store.is_member(namespace, SERVER_ADMINS, principal):
                self._probe.authorized_as_admin(namespace, principal)
                return True

            for group in candidate_groups:
                if await self._store.is_member(namespace, group, principal):
                    self._probe.authorized_by_group(namespace, principal, group)
                    return True
        except StoreUnavailableError as e:
            self._probe.authorization_failed(namespace, principal, str(e))
            raise

        self._probe.authorization_denied(namespace, principal, list(candidate_groups))
        return False
