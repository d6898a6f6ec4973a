"""DI provider for auth domain."""

import logging
from uuid import UUID

import jwt
from dishka import from_context, provide
from starlette.requests import Request

from quill.config import Config
from quill.domain.auth.command.update_user_role import UpdateUserRoleHandler
from quill.domain.auth.model.conflict import ConflictPolicy
from quill.domain.auth.model.identity import Anonymous, Identity
from quill.domain.auth.model.principal import Principal
from quill.domain.auth.model.value import UserId
from quill.domain.auth.port.repository import UserRepository
from quill.domain.auth.port.role_graph import RoleGraphRepository
from quill.domain.auth.query.get_my_access import GetMyAccessHandler
from quill.domain.auth.query.get_user_access import GetUserAccessHandler
from quill.domain.auth.service.access import AccessDecisionEngine
from quill.domain.auth.service.assignment import RoleAssignmentService
from quill.domain.auth.service.resolver import PermissionResolver
from quill.domain.auth.service.separation import DutySeparationValidator
from quill.domain.auth.service.token import TokenService
from quill.util.di.base import Provider
from quill.util.di.scope import Scope

logger = logging.getLogger(__name__)


class AuthProvider(Provider):
    """DI provider for auth domain services and handlers."""

    request = from_context(provides=Request, scope=Scope.UOW)

    # Command Handlers
    update_user_role_handler = provide(UpdateUserRoleHandler, scope=Scope.UOW)

    # Query Handlers
    get_my_access_handler = provide(GetMyAccessHandler, scope=Scope.UOW)
    get_user_access_handler = provide(GetUserAccessHandler, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_conflict_policy(self, config: Config) -> ConflictPolicy:
        """Provide the separation-of-duty policy from configuration."""
        policy = ConflictPolicy.from_pairs(
            static=[(a, b) for a, b in config.access.static_conflicts],
            dynamic=[(a, b) for a, b in config.access.dynamic_conflicts],
        )
        logger.info(
            "Conflict policy: static=%s dynamic=%s",
            [str(c) for c in policy.static],
            [str(c) for c in policy.dynamic],
        )
        return policy

    @provide(scope=Scope.APP)
    def get_token_service(self, config: Config) -> TokenService:
        """Provide TokenService."""
        return TokenService(_config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    def get_permission_resolver(self, graph: RoleGraphRepository) -> PermissionResolver:
        return PermissionResolver(_graph=graph)

    @provide(scope=Scope.UOW)
    def get_duty_separation_validator(
        self,
        policy: ConflictPolicy,
        resolver: PermissionResolver,
        user_repo: UserRepository,
    ) -> DutySeparationValidator:
        return DutySeparationValidator(_policy=policy, _resolver=resolver, _user_repo=user_repo)

    @provide(scope=Scope.UOW)
    def get_access_decision_engine(
        self,
        resolver: PermissionResolver,
        validator: DutySeparationValidator,
    ) -> AccessDecisionEngine:
        return AccessDecisionEngine(_resolver=resolver, _validator=validator)

    @provide(scope=Scope.UOW)
    def get_role_assignment_service(
        self,
        user_repo: UserRepository,
        graph: RoleGraphRepository,
        validator: DutySeparationValidator,
    ) -> RoleAssignmentService:
        return RoleAssignmentService(_user_repo=user_repo, _graph=graph, _validator=validator)

    @provide(scope=Scope.UOW)
    def get_identity(self, request: Request, token_service: TokenService) -> Identity:
        """Resolve Identity from the Bearer token.

        Returns Anonymous (with the failure reason) for a missing, expired or
        invalid token, Principal otherwise. Roles are never read here.
        """
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return Anonymous(reason="missing_token")

        token = auth_header[7:]  # Remove "Bearer " prefix

        try:
            payload = token_service.validate_access_token(token)
            user_id = UserId(UUID(str(payload["sub"])))
        except jwt.ExpiredSignatureError:
            return Anonymous(reason="token_expired")
        except (jwt.InvalidTokenError, ValueError):
            return Anonymous(reason="invalid_token")

        logger.debug("Identity resolved: user_id=%s", user_id)
        return Principal(
            user_id=user_id,
            username=payload.get("username"),
            email=payload.get("email"),
        )
