"""Gate enforcement shared by command and query handlers."""

import logging
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any

from quill.domain.shared.authorization.gate import Gate
from quill.domain.shared.error import ConfigurationError

logger = logging.getLogger("quill.authz")

# Unbound async handler method: (self, cmd) -> Coroutine -> Result
HandlerMethod = Callable[..., Coroutine[Any, Any, Any]]


async def enforce_gate(handler: Any) -> None:
    """Ask the handler's access engine to evaluate its ``__auth__`` gate.

    The handler must carry ``identity`` and ``access`` (an
    AccessDecisionEngine). A denial is raised as AuthorizationError whose
    code is the decision kind.
    """
    handler_name = type(handler).__name__
    gate = getattr(type(handler), "__auth__", None)
    if not isinstance(gate, Gate):
        raise ConfigurationError(f"Handler {handler_name} has no __auth__ declaration")

    engine = getattr(handler, "access", None)
    if engine is None:
        raise ConfigurationError(f"Handler {handler_name} has no access engine")

    identity = getattr(handler, "identity", None)
    decision = await engine.authorize(
        identity,
        gate.permissions,
        allow_anonymous=gate.allow_anonymous,
    )
    if not decision.allowed:
        logger.debug("Gate denied: handler=%s kind=%s", handler_name, decision.kind)
        raise decision.to_error()


def wrap_run_with_gate(original_run: HandlerMethod) -> HandlerMethod:
    """Wrap a handler's run() so the gate is evaluated first."""

    @wraps(original_run)
    async def gated_run(self: Any, cmd: Any) -> Any:
        await enforce_gate(self)
        return await original_run(self, cmd)

    return gated_run
