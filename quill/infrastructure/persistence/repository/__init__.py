from .role_graph import PostgresRoleGraphRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresRoleGraphRepository",
    "PostgresUserRepository",
]
