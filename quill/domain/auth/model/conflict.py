"""Separation-of-duty constraints."""

from collections.abc import Iterable, Set
from dataclasses import dataclass, field


@dataclass(frozen=True, eq=False)
class ConflictConstraint:
    """An unordered pair of role names that must never appear together.

    (A, B) and (B, A) are the same constraint.
    """

    first: str
    second: str
    _members: frozenset[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.first or not self.second:
            raise ValueError("Conflict constraint needs two role names")
        if self.first == self.second:
            raise ValueError(f"Role {self.first!r} cannot conflict with itself")
        object.__setattr__(self, "_members", frozenset((self.first, self.second)))

    @property
    def members(self) -> frozenset[str]:
        return self._members

    def violated_by(self, roles: Set[str]) -> bool:
        """True if both roles of the pair are present."""
        return self._members <= roles

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConflictConstraint):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def __str__(self) -> str:
        return f"{self.first}/{self.second}"


def _constraints(pairs: Iterable[tuple[str, str]]) -> tuple[ConflictConstraint, ...]:
    seen: list[ConflictConstraint] = []
    for first, second in pairs:
        constraint = ConflictConstraint(first, second)
        if constraint not in seen:
            seen.append(constraint)
    return tuple(seen)


@dataclass(frozen=True)
class ConflictPolicy:
    """Statically configured separation-of-duty rules.

    - static: a user may never hold both roles of a pair
    - dynamic: a user may never have both roles of a pair active in one session
    """

    static: tuple[ConflictConstraint, ...] = ()
    dynamic: tuple[ConflictConstraint, ...] = ()

    @classmethod
    def from_pairs(
        cls,
        static: Iterable[tuple[str, str]] = (),
        dynamic: Iterable[tuple[str, str]] = (),
    ) -> "ConflictPolicy":
        """Build a policy from (role, role) pairs, dropping symmetric duplicates."""
        return cls(static=_constraints(static), dynamic=_constraints(dynamic))
