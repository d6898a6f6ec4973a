"""Handler authorization gates and permission names."""

from .gate import Authenticated, Gate, Public, Requires, authenticated, public, requires
from .permission import PermissionName

__all__ = [
    "Authenticated",
    "Gate",
    "PermissionName",
    "Public",
    "Requires",
    "authenticated",
    "public",
    "requires",
]
