"""Handler-level authorization gates: public(), authenticated() and requires()."""

from dataclasses import dataclass


class Gate:
    """Base for handler-level authorization gates.

    Every CommandHandler/QueryHandler must declare ``__auth__: ClassVar[Gate]``.
    A gate only names what is required; the AccessDecisionEngine decides.
    """

    @property
    def permissions(self) -> frozenset[str]:
        return frozenset()

    @property
    def allow_anonymous(self) -> bool:
        return False


@dataclass(frozen=True)
class Public(Gate):
    """No authentication required."""

    @property
    def allow_anonymous(self) -> bool:
        return True


@dataclass(frozen=True)
class Authenticated(Gate):
    """A verified identity, no particular permission."""


@dataclass(frozen=True)
class Requires(Gate):
    """Gate that requires every listed permission."""

    required: frozenset[str]

    @property
    def permissions(self) -> frozenset[str]:
        return self.required


_PUBLIC = Public()
_AUTHENTICATED = Authenticated()


def public() -> Public:
    """Mark a handler as publicly accessible (no auth required)."""
    return _PUBLIC


def authenticated() -> Authenticated:
    """Mark a handler as requiring any verified identity."""
    return _AUTHENTICATED


def requires(*permissions: str) -> Requires:
    """Mark a handler as requiring all of the given permissions."""
    if not permissions:
        raise ValueError("requires() needs at least one permission; use authenticated()")
    return Requires(required=frozenset(str(p) for p in permissions))
