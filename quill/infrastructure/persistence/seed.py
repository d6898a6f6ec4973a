"""Database seed data for the role graph."""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)

ROLES: list[tuple[int, str, str]] = [
    (1, "USER", "Registered user"),
    (2, "MEMBER", "Paying member"),
    (3, "MODERATOR", "Content moderator"),
    (4, "ADMIN", "Administrator"),
    (5, "SUPER_ADMIN", "Super administrator"),
]

PERMISSIONS: list[tuple[int, str, str]] = [
    (1, "CREATE_ARTICLE", "Create articles"),
    (2, "EDIT_OWN_ARTICLE", "Edit own articles"),
    (3, "DELETE_OWN_ARTICLE", "Delete own articles"),
    (4, "COMMENT", "Comment on articles"),
    (5, "DELETE_OWN_COMMENT", "Delete own comments"),
    (6, "DELETE_COMMENT", "Delete any comment"),
    (7, "MODERATE_ARTICLE", "Moderate articles"),
    (8, "ADMINISTER", "Administer the system"),
    (9, "DELETE_COMMENT_IN_OWN_ARTICLE", "Delete comments on own articles"),
    (10, "POST_PREMIUM_ARTICLE", "Post premium articles"),
    (11, "ACCESS_MEMBER_ONLY_AREA", "Access the member-only area"),
]

# (role_id, permission_id)
GRANTS: list[tuple[int, int]] = [
    (1, 1),
    (1, 2),
    (1, 3),
    (1, 4),
    (1, 5),
    (1, 9),
    (2, 10),
    (2, 11),
    (3, 7),
    (4, 8),
    (5, 6),
]

# (parent_role_id, child_role_id): the child inherits the parent's grants
HIERARCHY: list[tuple[int, int]] = [
    (1, 2),
    (2, 3),
    (3, 4),
    (4, 5),
]


async def ensure_access_control_seed(engine: AsyncEngine) -> None:
    """Ensure the built-in roles, permissions, grants and hierarchy exist. Idempotent.

    Existing rows are left untouched so operator edits survive restarts.
    """
    async with engine.begin() as conn:
        await conn.execute(
            text(
                "INSERT INTO roles (id, name, description) "
                "VALUES (:id, :name, :description) "
                "ON CONFLICT DO NOTHING"
            ),
            [{"id": i, "name": n, "description": d} for i, n, d in ROLES],
        )
        await conn.execute(
            text(
                "INSERT INTO permissions (id, name, description) "
                "VALUES (:id, :name, :description) "
                "ON CONFLICT DO NOTHING"
            ),
            [{"id": i, "name": n, "description": d} for i, n, d in PERMISSIONS],
        )
        await conn.execute(
            text(
                "INSERT INTO role_permissions (role_id, permission_id) "
                "VALUES (:role_id, :permission_id) "
                "ON CONFLICT DO NOTHING"
            ),
            [{"role_id": r, "permission_id": p} for r, p in GRANTS],
        )
        await conn.execute(
            text(
                "INSERT INTO role_hierarchy (parent_role_id, child_role_id) "
                "VALUES (:parent, :child) "
                "ON CONFLICT DO NOTHING"
            ),
            [{"parent": p, "child": c} for p, c in HIERARCHY],
        )
    logger.info(
        "Access control seeded: roles=%d permissions=%d grants=%d edges=%d",
        len(ROLES),
        len(PERMISSIONS),
        len(GRANTS),
        len(HIERARCHY),
    )
