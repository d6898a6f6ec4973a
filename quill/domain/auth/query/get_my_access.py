"""GetMyAccess query and handler."""

from quill.domain.auth.model.decision import Decision
from quill.domain.auth.model.identity import Identity
from quill.domain.auth.model.principal import Principal
from quill.domain.auth.query.dto import AccessDTO
from quill.domain.auth.service.access import AccessDecisionEngine
from quill.domain.auth.service.resolver import PermissionResolver
from quill.domain.shared.authorization.gate import authenticated
from quill.domain.shared.error import NotFoundError
from quill.domain.shared.query import Query, QueryHandler
from quill.domain.shared.query import Result as QueryResult


class GetMyAccess(Query):
    """Query for the caller's own resolved access."""


class GetMyAccessResult(QueryResult):
    user_id: str
    username: str | None
    access: AccessDTO


class GetMyAccessHandler(QueryHandler[GetMyAccess, GetMyAccessResult]):
    __auth__ = authenticated()
    identity: Identity
    access: AccessDecisionEngine
    resolver: PermissionResolver

    async def run(self, query: GetMyAccess) -> GetMyAccessResult:
        assert isinstance(self.identity, Principal)  # Guaranteed by __auth__ gate

        try:
            resolved = await self.resolver.resolve(self.identity.user_id)
        except NotFoundError as e:
            # A valid token for a deleted user is no identity at all
            raise Decision.unauthenticated("User or role not found").to_error() from e

        return GetMyAccessResult(
            user_id=str(self.identity.user_id),
            username=self.identity.username,
            access=AccessDTO.from_access(resolved),
        )
