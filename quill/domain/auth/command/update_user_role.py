"""UpdateUserRole command and handler."""

from datetime import datetime
from uuid import UUID

from quill.domain.auth.model.identity import Identity
from quill.domain.auth.model.value import RoleId, UserId
from quill.domain.auth.service.access import AccessDecisionEngine
from quill.domain.auth.service.assignment import RoleAssignmentService
from quill.domain.shared.authorization.gate import requires
from quill.domain.shared.authorization.permission import PermissionName
from quill.domain.shared.command import Command, CommandHandler, Result


class UpdateUserRole(Command):
    """Command to replace a user's role."""

    user_id: UUID
    role_id: int


class UpdateUserRoleResult(Result):
    """Result containing the new assignment."""

    user_id: str
    role_id: int
    updated_at: datetime | None


class UpdateUserRoleHandler(CommandHandler[UpdateUserRole, UpdateUserRoleResult]):
    __auth__ = requires(PermissionName.ADMINISTER)
    identity: Identity
    access: AccessDecisionEngine
    assignment_service: RoleAssignmentService

    async def run(self, cmd: UpdateUserRole) -> UpdateUserRoleResult:
        user = await self.assignment_service.assign_role(
            user_id=UserId(cmd.user_id),
            role_id=RoleId(cmd.role_id),
        )
        assert user.role_id is not None

        return UpdateUserRoleResult(
            user_id=str(user.id),
            role_id=user.role_id.root,
            updated_at=user.updated_at,
        )
