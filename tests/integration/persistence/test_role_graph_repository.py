"""Integration tests for the SQL role graph and user repositories on SQLite."""

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from quill.domain.auth.model.user import User
from quill.domain.auth.model.value import RoleId, UserId
from quill.domain.auth.service.resolver import PermissionResolver
from quill.domain.shared.error import RoleGraphIntegrityError
from quill.infrastructure.persistence.repository.role_graph import PostgresRoleGraphRepository
from quill.infrastructure.persistence.repository.user import PostgresUserRepository
from quill.infrastructure.persistence.seed import ensure_access_control_seed


async def _add_user(session: AsyncSession, role_id: int | None, username: str = "alice") -> User:
    user = User.create(
        username=username,
        email=f"{username}@example.com",
        role_id=RoleId(role_id) if role_id is not None else None,
    )
    await PostgresUserRepository(session).save(user)
    return user


class TestSeed:
    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, sqlite_engine: AsyncEngine) -> None:
        await ensure_access_control_seed(sqlite_engine)
        await ensure_access_control_seed(sqlite_engine)

        async with sqlite_engine.connect() as conn:
            roles = (await conn.execute(text("SELECT COUNT(*) FROM roles"))).scalar_one()
            grants = (await conn.execute(text("SELECT COUNT(*) FROM role_permissions"))).scalar_one()
            edges = (await conn.execute(text("SELECT COUNT(*) FROM role_hierarchy"))).scalar_one()

        assert (roles, grants, edges) == (5, 11, 4)


class TestRoleGraphRepository:
    @pytest.mark.asyncio
    async def test_get_role(self, session: AsyncSession) -> None:
        role = await PostgresRoleGraphRepository(session).get_role(RoleId(3))

        assert role is not None
        assert role.name == "MODERATOR"

    @pytest.mark.asyncio
    async def test_get_missing_role(self, session: AsyncSession) -> None:
        assert await PostgresRoleGraphRepository(session).get_role(RoleId(42)) is None

    @pytest.mark.asyncio
    async def test_get_role_grants(self, session: AsyncSession) -> None:
        grants = await PostgresRoleGraphRepository(session).get_role_grants(RoleId(2))

        assert [p.name for p in grants] == ["POST_PREMIUM_ARTICLE", "ACCESS_MEMBER_ONLY_AREA"]

    @pytest.mark.asyncio
    async def test_get_parent_roles(self, session: AsyncSession) -> None:
        parents = await PostgresRoleGraphRepository(session).get_parent_roles(RoleId(5))

        assert [r.name for r in parents] == ["ADMIN"]

    @pytest.mark.asyncio
    async def test_root_role_has_no_parents(self, session: AsyncSession) -> None:
        assert await PostgresRoleGraphRepository(session).get_parent_roles(RoleId(1)) == []

    @pytest.mark.asyncio
    async def test_get_user_role(self, session: AsyncSession) -> None:
        user = await _add_user(session, role_id=2)

        role = await PostgresRoleGraphRepository(session).get_user_role(user.id)

        assert role is not None
        assert role.name == "MEMBER"

    @pytest.mark.asyncio
    async def test_get_user_role_for_unknown_user(self, session: AsyncSession) -> None:
        assert await PostgresRoleGraphRepository(session).get_user_role(UserId.generate()) is None

    @pytest.mark.asyncio
    async def test_get_user_role_without_role(self, session: AsyncSession) -> None:
        user = await _add_user(session, role_id=None)

        assert await PostgresRoleGraphRepository(session).get_user_role(user.id) is None

    @pytest.mark.asyncio
    async def test_dangling_parent_edge_raises(self, session: AsyncSession) -> None:
        # SQLite does not enforce foreign keys unless asked to
        await session.execute(
            text("INSERT INTO role_hierarchy (parent_role_id, child_role_id) VALUES (99, 2)")
        )

        with pytest.raises(RoleGraphIntegrityError, match="99"):
            await PostgresRoleGraphRepository(session).get_parent_roles(RoleId(2))

    @pytest.mark.asyncio
    async def test_dangling_grant_raises(self, session: AsyncSession) -> None:
        await session.execute(
            text("INSERT INTO role_permissions (role_id, permission_id) VALUES (1, 404)")
        )

        with pytest.raises(RoleGraphIntegrityError, match="404"):
            await PostgresRoleGraphRepository(session).get_role_grants(RoleId(1))


class TestResolverOnSeed:
    @pytest.mark.asyncio
    async def test_seeded_chain_resolution(self, session: AsyncSession) -> None:
        resolver = PermissionResolver(_graph=PostgresRoleGraphRepository(session))
        user = await _add_user(session, role_id=1)
        admin = await _add_user(session, role_id=4, username="admin")

        user_access = await resolver.resolve(user.id)
        admin_access = await resolver.resolve(admin.id)

        assert user_access.roles == {"USER"}
        assert user_access.permissions == {
            "CREATE_ARTICLE",
            "EDIT_OWN_ARTICLE",
            "DELETE_OWN_ARTICLE",
            "COMMENT",
            "DELETE_OWN_COMMENT",
            "DELETE_COMMENT_IN_OWN_ARTICLE",
        }
        assert admin_access.roles == {"USER", "MEMBER", "MODERATOR", "ADMIN"}
        assert "ADMINISTER" in admin_access.permissions
        assert "DELETE_COMMENT" not in admin_access.permissions


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_save_and_get(self, session: AsyncSession) -> None:
        user = await _add_user(session, role_id=2)

        loaded = await PostgresUserRepository(session).get(user.id)

        assert loaded is not None
        assert loaded.username == "alice"
        assert loaded.role_id == RoleId(2)

    @pytest.mark.asyncio
    async def test_save_updates_role(self, session: AsyncSession) -> None:
        repo = PostgresUserRepository(session)
        user = await _add_user(session, role_id=2)

        locked = await repo.get_for_update(user.id)
        assert locked is not None
        locked.assign_role(RoleId(3))
        await repo.save(locked)

        reloaded = await repo.get(user.id)
        assert reloaded is not None
        assert reloaded.role_id == RoleId(3)
        assert reloaded.updated_at is not None

    @pytest.mark.asyncio
    async def test_committed_change_visible_to_next_unit_of_work(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        async with session_factory() as first:
            user = await _add_user(first, role_id=1)
            await first.commit()

        async with session_factory() as second:
            loaded = await PostgresUserRepository(second).get(user.id)

        assert loaded is not None
        assert loaded.role_id == RoleId(1)

    @pytest.mark.asyncio
    async def test_get_for_update_unknown_user(self, session: AsyncSession) -> None:
        assert await PostgresUserRepository(session).get_for_update(UserId.generate()) is None
