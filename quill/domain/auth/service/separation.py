"""Static and dynamic separation-of-duty checks."""

import logging
from collections.abc import Set

from quill.domain.auth.model.conflict import ConflictConstraint, ConflictPolicy
from quill.domain.auth.model.value import RoleId, UserId
from quill.domain.auth.port.repository import UserRepository
from quill.domain.auth.service.resolver import PermissionResolver
from quill.domain.shared.error import NotFoundError
from quill.domain.shared.service import Service

logger = logging.getLogger(__name__)


def _violations(
    constraints: tuple[ConflictConstraint, ...], roles: Set[str]
) -> tuple[ConflictConstraint, ...]:
    return tuple(c for c in constraints if c.violated_by(roles))


class DutySeparationValidator(Service):
    """Checks role sets against the configured ConflictPolicy.

    Static constraints apply to every role a user holds. Dynamic constraints
    apply to the roles active in a session; with one role per user the two
    sets coincide, but the checks stay separate.
    """

    _policy: ConflictPolicy
    _resolver: PermissionResolver
    _user_repo: UserRepository

    def static_violations(self, roles: Set[str]) -> tuple[ConflictConstraint, ...]:
        return _violations(self._policy.static, roles)

    def dynamic_violations(self, active_roles: Set[str]) -> tuple[ConflictConstraint, ...]:
        return _violations(self._policy.dynamic, active_roles)

    def validate_static(self, roles: Set[str]) -> bool:
        return not self.static_violations(roles)

    def validate_dynamic(self, active_roles: Set[str]) -> bool:
        return not self.dynamic_violations(active_roles)

    async def assignment_violations(
        self, user_id: UserId, candidate_role_id: RoleId
    ) -> tuple[ConflictConstraint, ...]:
        """Static violations the user would be in after receiving the candidate role.

        The hypothetical role set is the closure of the user's current role
        united with the closure of the candidate role, so moving directly
        between two conflicting roles is rejected in either direction. A
        constraint the current closure already breaks on its own is ignored
        unless the candidate's closure breaks it too, so an account that is
        already in conflict can still be moved to a clean role.

        Raises:
            NotFoundError: If the user or the candidate role does not exist.
        """
        user = await self._user_repo.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", code="user_not_found")

        candidate = await self._resolver.resolve_role(candidate_role_id)
        hypothetical = set(candidate.roles)
        existing: tuple[ConflictConstraint, ...] = ()

        if user.role_id is not None and user.role_id != candidate_role_id:
            try:
                current = await self._resolver.resolve_role(user.role_id)
            except NotFoundError:
                # A dangling current role contributes nothing; the assignment repairs it
                logger.warning(
                    "User %s references missing role %s; checking candidate only",
                    user_id,
                    user.role_id,
                )
            else:
                hypothetical |= current.roles
                existing = self.static_violations(current.roles)

        carried = set(self.static_violations(candidate.roles))
        violations = tuple(
            v
            for v in self.static_violations(hypothetical)
            if v not in existing or v in carried
        )
        if violations:
            logger.info(
                "Assignment rejected: user_id=%s candidate=%s conflicts=%s",
                user_id,
                candidate.role.name,
                [str(v) for v in violations],
            )
        return violations

    async def validate_assignment(self, user_id: UserId, candidate_role_id: RoleId) -> bool:
        return not await self.assignment_violations(user_id, candidate_role_id)
