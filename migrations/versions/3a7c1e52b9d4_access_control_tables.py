"""access_control_tables

Revision ID: 3a7c1e52b9d4
Revises:
Create Date: 2026-10-19 09:12:44.201837

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3a7c1e52b9d4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ROLES
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # PERMISSIONS
    op.create_table(
        "permissions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # ROLE PERMISSIONS
    op.create_table(
        "role_permissions",
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("permission_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"]),
        sa.ForeignKeyConstraint(["permission_id"], ["permissions.id"]),
        sa.PrimaryKeyConstraint("role_id", "permission_id"),
    )

    # ROLE HIERARCHY
    op.create_table(
        "role_hierarchy",
        sa.Column("parent_role_id", sa.Integer(), nullable=False),
        sa.Column("child_role_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["parent_role_id"], ["roles.id"]),
        sa.ForeignKeyConstraint(["child_role_id"], ["roles.id"]),
        sa.PrimaryKeyConstraint("parent_role_id", "child_role_id"),
    )
    op.create_index("idx_role_hierarchy_child", "role_hierarchy", ["child_role_id"])

    # USERS
    op.create_table(
        "users",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_users_role_id", "users", ["role_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_users_role_id", table_name="users")
    op.drop_table("users")
    op.drop_index("idx_role_hierarchy_child", table_name="role_hierarchy")
    op.drop_table("role_hierarchy")
    op.drop_table("role_permissions")
    op.drop_table("permissions")
    op.drop_table("roles")
