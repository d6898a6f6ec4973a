"""Role and permission value objects."""

from dataclasses import dataclass

from quill.domain.auth.model.value import PermissionId, RoleId


@dataclass(frozen=True)
class Role:
    """A named bundle of privilege. Names are unique (e.g. "ADMIN")."""

    id: RoleId
    name: str
    description: str | None = None


@dataclass(frozen=True)
class Permission:
    """An atomic capability guarding one class of action (e.g. "DELETE_COMMENT")."""

    id: PermissionId
    name: str
    description: str | None = None


@dataclass(frozen=True)
class RoleHierarchyEdge:
    """Inheritance edge: the child role inherits every grant of the parent role."""

    parent_id: RoleId
    child_id: RoleId
