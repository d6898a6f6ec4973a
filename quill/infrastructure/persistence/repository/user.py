"""SQL implementation of the user repository."""

from typing import Any
from uuid import UUID

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quill.domain.auth.model.user import User
from quill.domain.auth.model.value import RoleId, UserId
from quill.domain.auth.port.repository import UserRepository
from quill.infrastructure.persistence.tables import users_table


def _row_to_user(row: Any) -> User:
    """Convert a database row to a User model."""
    return User(
        id=UserId(UUID(row["id"])),
        username=row["username"],
        email=row["email"],
        role_id=RoleId(row["role_id"]) if row["role_id"] is not None else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _user_to_dict(user: User) -> dict:
    """Convert a User model to a database row dict."""
    return {
        "id": str(user.id),
        "username": user.username,
        "email": user.email,
        "role_id": user.role_id.root if user.role_id is not None else None,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository (also runs on SQLite)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: UserId) -> User | None:
        stmt = select(users_table).where(users_table.c.id == str(user_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user(row) if row else None

    async def get_for_update(self, user_id: UserId) -> User | None:
        # FOR UPDATE is ignored by SQLite, whose writers are serialized anyway
        stmt = select(users_table).where(users_table.c.id == str(user_id)).with_for_update()
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user(row) if row else None

    async def save(self, user: User) -> None:
        user_dict = _user_to_dict(user)
        existing = await self.get(user.id)

        if existing:
            stmt = update(users_table).where(users_table.c.id == str(user.id)).values(**user_dict)
        else:
            stmt = insert(users_table).values(**user_dict)

        await self.session.execute(stmt)
        await self.session.flush()
