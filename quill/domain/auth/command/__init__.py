"""Auth domain commands."""

from .update_user_role import UpdateUserRole, UpdateUserRoleHandler, UpdateUserRoleResult

__all__ = [
    "UpdateUserRole",
    "UpdateUserRoleHandler",
    "UpdateUserRoleResult",
]
