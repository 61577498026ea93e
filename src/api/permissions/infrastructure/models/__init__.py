"""SQLAlchemy ORM models for the permissions bounded context.

Used only by the relational permission store.
"""

from permissions.infrastructure.models.membership import PermissionMembershipModel
from permissions.infrastructure.models.permission import PermissionModel

__all__ = [
    "PermissionMembershipModel",
    "PermissionModel",
]
