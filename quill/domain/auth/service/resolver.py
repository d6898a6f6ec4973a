"""Permission resolver."""

import logging

from quill.domain.auth.model.access import ResolvedAccess
from quill.domain.auth.model.role import Role
from quill.domain.auth.model.role_graph import RoleGraph, RoleNode
from quill.domain.auth.model.value import RoleId, UserId
from quill.domain.auth.port.role_graph import RoleGraphRepository
from quill.domain.shared.error import NotFoundError
from quill.domain.shared.service import Service

logger = logging.getLogger(__name__)


class PermissionResolver(Service):
    """Computes the roles and permissions reachable from a role.

    Resolution is two steps: load the reachable part of the persisted graph
    into an immutable RoleGraph, then compute the closure in memory. Reads
    only; safe to call concurrently and repeatedly.
    """

    _graph: RoleGraphRepository

    async def resolve(self, user_id: UserId) -> ResolvedAccess:
        """Resolve the access of a user's assigned role.

        Raises:
            NotFoundError: If the user does not exist or its role reference dangles.
            RoleGraphIntegrityError: If the reachable graph references missing rows.
        """
        role = await self._graph.get_user_role(user_id)
        if role is None:
            raise NotFoundError(
                f"User {user_id} or its assigned role not found",
                code="identity_unresolved",
            )
        access = await self._resolve_from(role)
        logger.debug(
            "Resolved user_id=%s role=%s roles=%s permissions=%d",
            user_id,
            role.name,
            sorted(access.roles),
            len(access.permissions),
        )
        return access

    async def resolve_role(self, role_id: RoleId) -> ResolvedAccess:
        """Resolve the access a role would confer, independent of any user."""
        role = await self._graph.get_role(role_id)
        if role is None:
            raise NotFoundError(f"Role {role_id} not found", code="role_not_found")
        return await self._resolve_from(role)

    async def load_graph(self, root: Role) -> RoleGraph:
        """Load every role reachable from `root` through parent edges.

        Each role is fetched at most once, so cyclic data terminates.
        """
        nodes: dict[RoleId, RoleNode] = {}
        pending: list[Role] = [root]

        while pending:
            role = pending.pop()
            if role.id in nodes:
                continue
            grants = await self._graph.get_role_grants(role.id)
            parents = await self._graph.get_parent_roles(role.id)
            nodes[role.id] = RoleNode(
                role=role,
                grants=frozenset(p.name for p in grants),
                parents=tuple(parent.id for parent in parents),
            )
            pending.extend(parent for parent in parents if parent.id not in nodes)

        return RoleGraph(nodes)

    async def _resolve_from(self, role: Role) -> ResolvedAccess:
        graph = await self.load_graph(role)
        return graph.closure(role.id)
