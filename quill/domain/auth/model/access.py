"""Per-check transitive closure of a user's role."""

from collections.abc import Iterable
from dataclasses import dataclass

from quill.domain.auth.model.role import Role


@dataclass(frozen=True)
class ResolvedAccess:
    """Roles and permissions reachable from one assigned role.

    Computed per access check and never persisted.
    """

    role: Role
    roles: frozenset[str]
    permissions: frozenset[str]

    @property
    def active_roles(self) -> frozenset[str]:
        """Roles active in the current session.

        A user holds exactly one role, so every resolved role is active.
        """
        return self.roles

    def missing(self, required: Iterable[str]) -> frozenset[str]:
        """Required permissions not present in the resolved set."""
        return frozenset(required) - self.permissions

    def grants_all(self, required: Iterable[str]) -> bool:
        return not self.missing(required)
