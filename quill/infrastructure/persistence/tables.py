"""SQLAlchemy table definitions - dialect-agnostic (works with SQLite and PostgreSQL)."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ROLES TABLE
# ============================================================================
roles_table = Table(
    "roles",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(64), nullable=False, unique=True),
    Column("description", Text, nullable=True),
)


# ============================================================================
# PERMISSIONS TABLE
# ============================================================================
permissions_table = Table(
    "permissions",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String(64), nullable=False, unique=True),
    Column("description", Text, nullable=True),
)


# ============================================================================
# ROLE PERMISSIONS TABLE (grants)
# ============================================================================
role_permissions_table = Table(
    "role_permissions",
    metadata,
    Column("role_id", Integer, ForeignKey("roles.id"), primary_key=True),
    Column("permission_id", Integer, ForeignKey("permissions.id"), primary_key=True),
)


# ============================================================================
# ROLE HIERARCHY TABLE
# ============================================================================
# The child inherits every grant of the parent.
role_hierarchy_table = Table(
    "role_hierarchy",
    metadata,
    Column("parent_role_id", Integer, ForeignKey("roles.id"), primary_key=True),
    Column("child_role_id", Integer, ForeignKey("roles.id"), primary_key=True),
)

Index("idx_role_hierarchy_child", role_hierarchy_table.c.child_role_id)


# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", String, primary_key=True),  # UUID as string
    Column("username", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("role_id", Integer, ForeignKey("roles.id"), nullable=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=True),
)

Index("idx_users_role_id", users_table.c.role_id)
