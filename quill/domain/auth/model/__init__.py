"""Auth domain models."""

from .access import ResolvedAccess
from .conflict import ConflictConstraint, ConflictPolicy
from .decision import Decision, DecisionKind
from .identity import Anonymous, Identity
from .principal import Principal
from .role import Permission, Role, RoleHierarchyEdge
from .role_graph import RoleGraph, RoleNode
from .user import User
from .value import PermissionId, RoleId, UserId

__all__ = [
    "Anonymous",
    "ConflictConstraint",
    "ConflictPolicy",
    "Decision",
    "DecisionKind",
    "Identity",
    "Permission",
    "PermissionId",
    "Principal",
    "ResolvedAccess",
    "Role",
    "RoleGraph",
    "RoleHierarchyEdge",
    "RoleId",
    "RoleNode",
    "User",
    "UserId",
]
