"""GetUserAccess query and handler."""

from uuid import UUID

from quill.domain.auth.model.identity import Identity
from quill.domain.auth.model.value import UserId
from quill.domain.auth.query.dto import AccessDTO, conflict_names
from quill.domain.auth.service.access import AccessDecisionEngine
from quill.domain.auth.service.resolver import PermissionResolver
from quill.domain.auth.service.separation import DutySeparationValidator
from quill.domain.shared.authorization.gate import requires
from quill.domain.shared.authorization.permission import PermissionName
from quill.domain.shared.query import Query, QueryHandler
from quill.domain.shared.query import Result as QueryResult


class GetUserAccess(Query):
    """Query for any user's resolved access, for administrators."""

    user_id: UUID


class GetUserAccessResult(QueryResult):
    user_id: str
    access: AccessDTO
    static_conflicts: list[str]
    dynamic_conflicts: list[str]


class GetUserAccessHandler(QueryHandler[GetUserAccess, GetUserAccessResult]):
    __auth__ = requires(PermissionName.ADMINISTER)
    identity: Identity
    access: AccessDecisionEngine
    resolver: PermissionResolver
    validator: DutySeparationValidator

    async def run(self, query: GetUserAccess) -> GetUserAccessResult:
        user_id = UserId(query.user_id)
        resolved = await self.resolver.resolve(user_id)

        return GetUserAccessResult(
            user_id=str(user_id),
            access=AccessDTO.from_access(resolved),
            static_conflicts=conflict_names(self.validator.static_violations(resolved.roles)),
            dynamic_conflicts=conflict_names(
                self.validator.dynamic_violations(resolved.active_roles)
            ),
        )
