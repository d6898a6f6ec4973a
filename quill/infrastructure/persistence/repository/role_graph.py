"""SQL implementation of the read-only role graph port."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.auth.model.role import Permission, Role
from quill.domain.auth.model.value import PermissionId, RoleId, UserId
from quill.domain.auth.port.role_graph import RoleGraphRepository
from quill.domain.shared.error import RoleGraphIntegrityError
from quill.infrastructure.persistence.tables import (
    permissions_table,
    role_hierarchy_table,
    role_permissions_table,
    roles_table,
    users_table,
)


def _row_to_role(row: Any) -> Role:
    return Role(id=RoleId(row["id"]), name=row["name"], description=row["description"])


def _row_to_permission(row: Any) -> Permission:
    return Permission(
        id=PermissionId(row["id"]),
        name=row["name"],
        description=row["description"],
    )


class PostgresRoleGraphRepository(RoleGraphRepository):
    """Reads roles, grants and hierarchy edges within the session's transaction.

    Grant and edge queries outer-join the referenced rows so a dangling
    reference is reported instead of silently dropped.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_user_role(self, user_id: UserId) -> Role | None:
        stmt = (
            select(roles_table)
            .select_from(users_table.join(roles_table, users_table.c.role_id == roles_table.c.id))
            .where(users_table.c.id == str(user_id))
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_role(row) if row else None

    async def get_role(self, role_id: RoleId) -> Role | None:
        stmt = select(roles_table).where(roles_table.c.id == role_id.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_role(row) if row else None

    async def get_role_grants(self, role_id: RoleId) -> list[Permission]:
        stmt = (
            select(
                role_permissions_table.c.permission_id.label("ref"),
                permissions_table.c.id,
                permissions_table.c.name,
                permissions_table.c.description,
            )
            .select_from(
                role_permissions_table.outerjoin(
                    permissions_table,
                    role_permissions_table.c.permission_id == permissions_table.c.id,
                )
            )
            .where(role_permissions_table.c.role_id == role_id.root)
            .order_by(role_permissions_table.c.permission_id)
        )
        result = await self.session.execute(stmt)

        grants: list[Permission] = []
        for row in result.mappings():
            if row["id"] is None:
                raise RoleGraphIntegrityError(
                    f"Role {role_id} is granted missing permission {row['ref']}"
                )
            grants.append(_row_to_permission(row))
        return grants

    async def get_parent_roles(self, role_id: RoleId) -> list[Role]:
        stmt = (
            select(
                role_hierarchy_table.c.parent_role_id.label("ref"),
                roles_table.c.id,
                roles_table.c.name,
                roles_table.c.description,
            )
            .select_from(
                role_hierarchy_table.outerjoin(
                    roles_table,
                    role_hierarchy_table.c.parent_role_id == roles_table.c.id,
                )
            )
            .where(role_hierarchy_table.c.child_role_id == role_id.root)
            .order_by(role_hierarchy_table.c.parent_role_id)
        )
        result = await self.session.execute(stmt)

        parents: list[Role] = []
        for row in result.mappings():
            if row["id"] is None:
                raise RoleGraphIntegrityError(
                    f"Role {role_id} inherits from missing role {row['ref']}"
                )
            parents.append(_row_to_role(row))
        return parents
