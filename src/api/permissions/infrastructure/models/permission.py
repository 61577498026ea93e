"""SQLAlchemy ORM model for the permissions table.

One row per (namespace, group). Group names are unique per namespace.
"""

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class PermissionModel(Base, TimestampMixin):
    """ORM model for permission group records."""

    __tablename__ = "permissions"
    __table_args__ = (UniqueConstraint("namespace", "name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    namespace: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<PermissionModel(id={self.id}, namespace={self.namespace}, "
            f"name={self.name})>"
        )
