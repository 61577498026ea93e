"""create permissions tables

Revision ID: 3f1c2a9d7e40
Revises:
Create Date: 2026-10-19 09:12:44.118204

Creates the permission group table and the membership join table.
permission_membership.permission_id uses a RESTRICT FK so a group can only
be deleted once its members have been removed.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create permissions and permission_membership tables.

    Key constraints:
    - (namespace, name) unique on permissions
    - (permission_id, user_id) unique on permission_membership
    - permission_id FK with RESTRICT (no cascading member deletion)
    """
    op.create_table(
        "permissions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("namespace", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_permissions"),
        sa.UniqueConstraint(
            "namespace", "name", name="uq_permissions_namespace_name"
        ),
    )
    op.create_index("ix_permissions_namespace", "permissions", ["namespace"])

    op.create_table(
        "permission_membership",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("namespace", sa.String(255), nullable=False),
        sa.Column("permission_id", sa.Integer, nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_permission_membership"),
        sa.ForeignKeyConstraint(
            ["permission_id"],
            ["permissions.id"],
            name="fk_permission_membership_permission_id_permissions",
            ondelete="RESTRICT",
        ),
        sa.UniqueConstraint(
            "permission_id",
            "user_id",
            name="uq_permission_membership_permission_id_user_id",
        ),
    )
    op.create_index(
        "ix_permission_membership_namespace", "permission_membership", ["namespace"]
    )
    op.create_index(
        "ix_permission_membership_permission_id",
        "permission_membership",
        ["permission_id"],
    )
    op.create_index(
        "ix_permission_membership_user_id", "permission_membership", ["user_id"]
    )


def downgrade() -> None:
    """Drop permission_membership first (FK dependency), then permissions."""
    op.drop_index(
        "ix_permission_membership_user_id", table_name="permission_membership"
    )
    op.drop_index(
        "ix_permission_membership_permission_id", table_name="permission_membership"
    )
    op.drop_index(
        "ix_permission_membership_namespace", table_name="permission_membership"
    )
    op.drop_table("permission_membership")
    op.drop_index("ix_permissions_namespace", table_name="permissions")
    op.drop_table("permissions")
