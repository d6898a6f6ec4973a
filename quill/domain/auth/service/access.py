"""Access decision engine."""

import logging
from collections.abc import Iterable

from quill.domain.auth.model.decision import Decision
from quill.domain.auth.model.identity import Anonymous, Identity
from quill.domain.auth.model.principal import Principal
from quill.domain.auth.service.resolver import PermissionResolver
from quill.domain.auth.service.separation import DutySeparationValidator
from quill.domain.shared.error import NotFoundError, RoleGraphIntegrityError
from quill.domain.shared.service import Service

logger = logging.getLogger("quill.authz")


class AccessDecisionEngine(Service):
    """Turns (identity, required permissions) into a Decision.

    Order of evaluation:
    1. no required permissions: allow once identity is established
       (or at once when `allow_anonymous` is set)
    2. no verified identity: deny_unauthenticated
    3. user or role cannot be resolved: deny_unauthenticated
    4. static or dynamic duty-separation violation: deny_conflict
    5. any required permission missing: deny_insufficient_permission

    Stateless and side-effect free apart from logging; denials are returned,
    never raised.
    """

    _resolver: PermissionResolver
    _validator: DutySeparationValidator

    async def authorize(
        self,
        identity: Identity,
        required: Iterable[str] = (),
        *,
        allow_anonymous: bool = False,
    ) -> Decision:
        required = frozenset(required)

        if not isinstance(identity, Principal):
            if not required and allow_anonymous:
                return Decision.allow()
            reason = identity.reason if isinstance(identity, Anonymous) else "missing_token"
            logger.info("Access denied: unauthenticated (%s) required=%s", reason, sorted(required))
            return Decision.unauthenticated(_UNAUTHENTICATED_MESSAGES.get(reason, "Authentication required"))

        if not required:
            return Decision.allow()

        try:
            access = await self._resolver.resolve(identity.user_id)
        except NotFoundError as e:
            logger.info("Access denied: user_id=%s unresolvable (%s)", identity.user_id, e.message)
            return Decision.unauthenticated("User or role not found")
        except RoleGraphIntegrityError as e:
            logger.error("Access denied: user_id=%s role graph fault: %s", identity.user_id, e.message)
            return Decision.unauthenticated("User role could not be resolved")

        conflicts = self._validator.static_violations(
            access.roles
        ) + self._validator.dynamic_violations(access.active_roles)
        if conflicts:
            logger.warning(
                "Access denied: user_id=%s conflicting roles %s",
                identity.user_id,
                [str(c) for c in conflicts],
            )
            return Decision.conflict(conflicts)

        missing = access.missing(required)
        if missing:
            logger.info(
                "Access denied: user_id=%s role=%s missing=%s",
                identity.user_id,
                access.role.name,
                sorted(missing),
            )
            return Decision.insufficient(missing)

        logger.debug(
            "Access allowed: user_id=%s role=%s required=%s",
            identity.user_id,
            access.role.name,
            sorted(required),
        )
        return Decision.allow()


_UNAUTHENTICATED_MESSAGES = {
    "missing_token": "Authorization header required",
    "token_expired": "Token has expired",
    "invalid_token": "Invalid token",
}
