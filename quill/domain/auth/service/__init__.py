"""Auth domain services."""

from .access import AccessDecisionEngine
from .assignment import RoleAssignmentService
from .resolver import PermissionResolver
from .separation import DutySeparationValidator
from .token import TokenService

__all__ = [
    "AccessDecisionEngine",
    "DutySeparationValidator",
    "PermissionResolver",
    "RoleAssignmentService",
    "TokenService",
]
