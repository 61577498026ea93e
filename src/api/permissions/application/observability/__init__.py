"""Domain-Oriented Observability for the permissions application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from permissions.application.observability.authorization_probe import (
    AuthorizationProbe,
    DefaultAuthorizationProbe,
)
from permissions.application.observability.group_registry_probe import (
    DefaultGroupRegistryProbe,
    GroupRegistryProbe,
)
from permissions.application.observability.membership_probe import (
    DefaultMembershipProbe,
    MembershipProbe,
)

__all__ = [
    "AuthorizationProbe",
    "DefaultAuthorizationProbe",
    "GroupRegistryProbe",
    "DefaultGroupRegistryProbe",
    "MembershipProbe",
    "DefaultMembershipProbe",
]
