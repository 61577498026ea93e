"""Application services for the permissions bounded context.

Application services orchestrate the permission store to fulfill use
cases. They are the "front door" to the permissions context and are
written only against the IPermissionStore port.
"""

from permissions.application.services.authorization_engine import (
    AuthorizationEngine,
)
from permissions.application.services.bootstrap_service import (
    ServerAdminsBootstrapService,
)
from permissions.application.services.group_registry import GroupRegistry
from permissions.application.services.membership_service import MembershipService

__all__ = [
    "AuthorizationEngine",
    "GroupRegistry",
    "MembershipService",
    "ServerAdminsBootstrapService",
]
