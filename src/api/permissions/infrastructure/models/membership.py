"""SQLAlchemy ORM model for the permission_membership join table.

One row per (group, principal). The namespace is denormalized onto the row
so every membership query can filter on it directly.

Foreign Key Constraint:
- permission_id references permissions.id with RESTRICT delete
- a group with members cannot be deleted; members are removed first
"""

from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class PermissionMembershipModel(Base, TimestampMixin):
    """ORM model for group membership rows."""

    __tablename__ = "permission_membership"
    __table_args__ = (UniqueConstraint("permission_id", "user_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    namespace: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    permission_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("permissions.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<PermissionMembershipModel(permission_id={self.permission_id}, "
            f"user_id={self.user_id})>"
        )
