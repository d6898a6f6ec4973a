"""Auth domain ports."""

from .repository import UserRepository
from .role_graph import RoleGraphRepository

__all__ = [
    "RoleGraphRepository",
    "UserRepository",
]
