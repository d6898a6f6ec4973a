"""Shared result shapes for access queries."""

from pydantic import BaseModel

from quill.domain.auth.model.access import ResolvedAccess
from quill.domain.auth.model.conflict import ConflictConstraint


class AccessDTO(BaseModel):
    role: str
    roles: list[str]
    permissions: list[str]

    @classmethod
    def from_access(cls, access: ResolvedAccess) -> "AccessDTO":
        return cls(
            role=access.role.name,
            roles=sorted(access.roles),
            permissions=sorted(access.permissions),
        )


def conflict_names(conflicts: tuple[ConflictConstraint, ...]) -> list[str]:
    return [str(c) for c in conflicts]
