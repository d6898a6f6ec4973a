"""Tests for PermissionResolver against an in-memory role graph."""

import pytest
from auth_fakes import InMemoryRoleGraphRepository, InMemoryStore

from quill.domain.auth.model.value import RoleId, UserId
from quill.domain.auth.service.resolver import PermissionResolver
from quill.domain.shared.error import NotFoundError, RoleGraphIntegrityError


def _resolver(store: InMemoryStore) -> PermissionResolver:
    return PermissionResolver(_graph=InMemoryRoleGraphRepository(store))


class TestResolveUser:
    @pytest.mark.asyncio
    async def test_member_as_parent_of_user(self) -> None:
        store = InMemoryStore()
        store.add_role(1, "USER")
        store.add_role(2, "MEMBER")
        store.add_permission(1, "CREATE_ARTICLE")
        store.add_permission(4, "COMMENT")
        store.add_permission(10, "POST_PREMIUM_ARTICLE")
        store.grant(1, 1)
        store.grant(1, 4)
        store.grant(2, 10)
        store.inherit(parent_id=2, child_id=1)
        user = store.add_user(role_id=1)

        access = await _resolver(store).resolve(user.id)

        assert access.role.name == "USER"
        assert access.roles == {"USER", "MEMBER"}
        assert access.permissions == {"CREATE_ARTICLE", "COMMENT", "POST_PREMIUM_ARTICLE"}

    @pytest.mark.asyncio
    async def test_user_as_parent_of_member(self) -> None:
        store = InMemoryStore()
        store.add_role(1, "USER")
        store.add_role(2, "MEMBER")
        store.add_permission(1, "CREATE_ARTICLE")
        store.add_permission(4, "COMMENT")
        store.add_permission(10, "POST_PREMIUM_ARTICLE")
        store.grant(1, 1)
        store.grant(1, 4)
        store.grant(2, 10)
        store.inherit(parent_id=1, child_id=2)
        user = store.add_user(role_id=1)

        access = await _resolver(store).resolve(user.id)

        assert access.roles == {"USER"}
        assert access.permissions == {"CREATE_ARTICLE", "COMMENT"}

    @pytest.mark.asyncio
    async def test_seeded_super_admin_holds_every_grant(self, seeded_store: InMemoryStore) -> None:
        user = seeded_store.add_user(role_id=5)

        access = await _resolver(seeded_store).resolve(user.id)

        assert access.roles == {"USER", "MEMBER", "MODERATOR", "ADMIN", "SUPER_ADMIN"}
        assert len(access.permissions) == 11

    @pytest.mark.asyncio
    async def test_seeded_admin_lacks_delete_comment(self, seeded_store: InMemoryStore) -> None:
        user = seeded_store.add_user(role_id=4)

        access = await _resolver(seeded_store).resolve(user.id)

        assert "ADMINISTER" in access.permissions
        assert "DELETE_COMMENT" not in access.permissions

    @pytest.mark.asyncio
    async def test_resolution_is_repeatable(self, seeded_store: InMemoryStore) -> None:
        user = seeded_store.add_user(role_id=3)
        resolver = _resolver(seeded_store)

        first = await resolver.resolve(user.id)
        second = await resolver.resolve(user.id)

        assert first == second


class TestResolveFailures:
    @pytest.mark.asyncio
    async def test_unknown_user_raises_not_found(self, seeded_store: InMemoryStore) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await _resolver(seeded_store).resolve(UserId.generate())

        assert exc_info.value.code == "identity_unresolved"

    @pytest.mark.asyncio
    async def test_user_without_role_raises_not_found(self, seeded_store: InMemoryStore) -> None:
        user = seeded_store.add_user(role_id=None)

        with pytest.raises(NotFoundError):
            await _resolver(seeded_store).resolve(user.id)

    @pytest.mark.asyncio
    async def test_dangling_user_role_raises_not_found(self, seeded_store: InMemoryStore) -> None:
        user = seeded_store.add_user(role_id=42)

        with pytest.raises(NotFoundError):
            await _resolver(seeded_store).resolve(user.id)

    @pytest.mark.asyncio
    async def test_dangling_parent_edge_raises_integrity_error(self, seeded_store: InMemoryStore) -> None:
        seeded_store.inherit(parent_id=77, child_id=2)
        user = seeded_store.add_user(role_id=2)

        with pytest.raises(RoleGraphIntegrityError):
            await _resolver(seeded_store).resolve(user.id)

    @pytest.mark.asyncio
    async def test_dangling_grant_raises_integrity_error(self, seeded_store: InMemoryStore) -> None:
        seeded_store.grant(1, 404)
        user = seeded_store.add_user(role_id=1)

        with pytest.raises(RoleGraphIntegrityError):
            await _resolver(seeded_store).resolve(user.id)


class TestResolveRole:
    @pytest.mark.asyncio
    async def test_resolve_role_without_user(self, seeded_store: InMemoryStore) -> None:
        access = await _resolver(seeded_store).resolve_role(RoleId(2))

        assert access.roles == {"USER", "MEMBER"}
        assert "ACCESS_MEMBER_ONLY_AREA" in access.permissions
        assert "CREATE_ARTICLE" in access.permissions

    @pytest.mark.asyncio
    async def test_unknown_role_raises_not_found(self, seeded_store: InMemoryStore) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await _resolver(seeded_store).resolve_role(RoleId(99))

        assert exc_info.value.code == "role_not_found"

    @pytest.mark.asyncio
    async def test_cyclic_data_loads_each_role_once(self) -> None:
        store = InMemoryStore()
        store.add_role(1, "A")
        store.add_role(2, "B")
        store.inherit(parent_id=1, child_id=2)
        store.inherit(parent_id=2, child_id=1)
        graph_repo = InMemoryRoleGraphRepository(store)
        resolver = PermissionResolver(_graph=graph_repo)

        graph = await resolver.load_graph(store.roles[1])

        assert len(graph) == 2
        assert graph.closure(RoleId(1)).roles == {"A", "B"}
