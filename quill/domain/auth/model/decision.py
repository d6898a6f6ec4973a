"""Outcomes of an access check."""

from dataclasses import dataclass
from enum import StrEnum

from quill.domain.auth.model.conflict import ConflictConstraint
from quill.domain.shared.error import AuthorizationError


class DecisionKind(StrEnum):
    ALLOW = "allow"
    DENY_UNAUTHENTICATED = "deny_unauthenticated"
    DENY_CONFLICT = "deny_conflict"
    DENY_INSUFFICIENT_PERMISSION = "deny_insufficient_permission"


@dataclass(frozen=True)
class Decision:
    """Outcome of AccessDecisionEngine.authorize().

    Callers inspect `kind`; denials carry a human-readable `reason` and,
    where relevant, the missing permissions or violated constraints.
    """

    kind: DecisionKind
    reason: str = ""
    missing: frozenset[str] = frozenset()
    conflicts: tuple[ConflictConstraint, ...] = ()

    @property
    def allowed(self) -> bool:
        return self.kind is DecisionKind.ALLOW

    @classmethod
    def allow(cls) -> "Decision":
        return _ALLOW

    @classmethod
    def unauthenticated(cls, reason: str = "Authentication required") -> "Decision":
        return cls(DecisionKind.DENY_UNAUTHENTICATED, reason=reason)

    @classmethod
    def conflict(cls, conflicts: tuple[ConflictConstraint, ...]) -> "Decision":
        names = ", ".join(str(c) for c in conflicts)
        return cls(
            DecisionKind.DENY_CONFLICT,
            reason=f"Account holds conflicting roles: {names}",
            conflicts=conflicts,
        )

    @classmethod
    def insufficient(cls, missing: frozenset[str]) -> "Decision":
        names = ", ".join(sorted(missing))
        return cls(
            DecisionKind.DENY_INSUFFICIENT_PERMISSION,
            reason=f"Access denied: missing permission(s) {names}",
            missing=missing,
        )

    def to_error(self) -> AuthorizationError:
        """AuthorizationError for a denial; the code is the decision kind."""
        if self.allowed:
            raise ValueError("An allow decision has no error")
        return AuthorizationError(self.reason, code=self.kind.value)


_ALLOW = Decision(DecisionKind.ALLOW)
