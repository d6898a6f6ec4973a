"""Immutable in-memory snapshot of the role inheritance graph.

Direction: a hierarchy edge (parent, child) means the child inherits every
grant of the parent, so the closure of a role walks from the role to its
parents. With the seeded chain USER -> MEMBER -> MODERATOR -> ADMIN ->
SUPER_ADMIN, SUPER_ADMIN resolves to all five roles and USER to itself only.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from quill.domain.auth.model.access import ResolvedAccess
from quill.domain.auth.model.role import Permission, Role, RoleHierarchyEdge
from quill.domain.auth.model.value import RoleId
from quill.domain.shared.error import RoleGraphIntegrityError


@dataclass(frozen=True)
class RoleNode:
    """One role with its direct grants and direct parent roles."""

    role: Role
    grants: frozenset[str]
    parents: tuple[RoleId, ...] = ()


class RoleGraph:
    """Read-only view over a set of RoleNodes keyed by role id.

    Traversal keeps an explicit visited set, so malformed data with cycles,
    self-loops or diamonds still terminates and expands each role once.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: Mapping[RoleId, RoleNode]) -> None:
        self._nodes: Mapping[RoleId, RoleNode] = MappingProxyType(dict(nodes))

    @classmethod
    def build(
        cls,
        roles: Iterable[Role],
        grants: Iterable[tuple[RoleId, Permission]] = (),
        edges: Iterable[RoleHierarchyEdge] = (),
    ) -> "RoleGraph":
        """Assemble a graph from flat rows (roles, role->permission grants, edges)."""
        by_id = {role.id: role for role in roles}
        granted: dict[RoleId, set[str]] = {role_id: set() for role_id in by_id}
        parents: dict[RoleId, list[RoleId]] = {role_id: [] for role_id in by_id}

        for role_id, permission in grants:
            if role_id not in by_id:
                raise RoleGraphIntegrityError(f"Grant references unknown role {role_id}")
            granted[role_id].add(permission.name)

        for edge in edges:
            if edge.child_id not in by_id:
                raise RoleGraphIntegrityError(f"Hierarchy edge references unknown role {edge.child_id}")
            # Unknown parents surface lazily in closure(), like a dangling FK would
            if edge.parent_id not in parents[edge.child_id]:
                parents[edge.child_id].append(edge.parent_id)

        return cls(
            {
                role_id: RoleNode(
                    role=role,
                    grants=frozenset(granted[role_id]),
                    parents=tuple(parents[role_id]),
                )
                for role_id, role in by_id.items()
            }
        )

    def __contains__(self, role_id: object) -> bool:
        return role_id in self._nodes

    def __iter__(self) -> Iterator[RoleNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, role_id: RoleId) -> RoleNode | None:
        return self._nodes.get(role_id)

    def closure(self, root: RoleId) -> ResolvedAccess:
        """Union of roles and permissions reachable from `root` via parent edges.

        Raises:
            RoleGraphIntegrityError: if `root` or any reachable parent is missing.
        """
        root_node = self._nodes.get(root)
        if root_node is None:
            raise RoleGraphIntegrityError(f"Role {root} is not part of the graph")

        visited: set[RoleId] = set()
        roles: set[str] = set()
        permissions: set[str] = set()
        stack: list[RoleId] = [root]

        while stack:
            role_id = stack.pop()
            if role_id in visited:
                continue
            visited.add(role_id)

            node = self._nodes.get(role_id)
            if node is None:
                raise RoleGraphIntegrityError(f"Role {role_id} is referenced as a parent but does not exist")

            roles.add(node.role.name)
            permissions.update(node.grants)
            stack.extend(parent for parent in node.parents if parent not in visited)

        return ResolvedAccess(
            role=root_node.role,
            roles=frozenset(roles),
            permissions=frozenset(permissions),
        )
