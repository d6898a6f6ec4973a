"""Role assignment, the only mutation of a user's role."""

import logging

from quill.domain.auth.model.user import User
from quill.domain.auth.model.value import RoleId, UserId
from quill.domain.auth.port.repository import UserRepository
from quill.domain.auth.port.role_graph import RoleGraphRepository
from quill.domain.auth.service.separation import DutySeparationValidator
from quill.domain.shared.error import ConflictError, NotFoundError
from quill.domain.shared.service import Service

logger = logging.getLogger(__name__)


class RoleAssignmentService(Service):
    """Changes a user's role after separation-of-duty validation.

    Read, validate and write happen in one unit of work under a row lock on
    the user, so concurrent reassignments of the same user cannot both pass
    validation against a stale state. Nothing is written when validation fails.
    """

    _user_repo: UserRepository
    _graph: RoleGraphRepository
    _validator: DutySeparationValidator

    async def assign_role(self, user_id: UserId, role_id: RoleId) -> User:
        """Assign `role_id` to the user, replacing the current role.

        Raises:
            NotFoundError: If the user or role does not exist.
            ConflictError: If the role is already assigned or the change
                would violate a static conflict constraint.
        """
        user = await self._user_repo.get_for_update(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found", code="user_not_found")

        role = await self._graph.get_role(role_id)
        if role is None:
            raise NotFoundError(f"Role {role_id} not found", code="role_not_found")

        if user.role_id == role.id:
            raise ConflictError(
                f"Role {role.name} already assigned to user {user_id}",
                code="role_already_assigned",
            )

        violations = await self._validator.assignment_violations(user_id, role.id)
        if violations:
            names = ", ".join(str(v) for v in violations)
            raise ConflictError(
                f"Assigning role {role.name} to user {user_id} violates separation of duty: {names}",
                code="role_conflict",
            )

        previous = user.role_id
        user.assign_role(role.id)
        await self._user_repo.save(user)
        logger.info("Role changed: user_id=%s from=%s to=%s", user_id, previous, role.name)
        return user
