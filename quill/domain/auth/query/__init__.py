"""Auth domain queries."""

from .get_my_access import GetMyAccess, GetMyAccessHandler, GetMyAccessResult
from .get_user_access import GetUserAccess, GetUserAccessHandler, GetUserAccessResult

__all__ = [
    "GetMyAccess",
    "GetMyAccessHandler",
    "GetMyAccessResult",
    "GetUserAccess",
    "GetUserAccessHandler",
    "GetUserAccessResult",
]
