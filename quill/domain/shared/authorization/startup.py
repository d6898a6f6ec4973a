"""Startup validation for handler authorization declarations."""

import logging

from quill.domain.shared.authorization.gate import Gate
from quill.domain.shared.authorization.permission import PermissionName
from quill.domain.shared.command import CommandHandler
from quill.domain.shared.error import ConfigurationError
from quill.domain.shared.query import QueryHandler

logger = logging.getLogger(__name__)

_KNOWN_PERMISSIONS = frozenset(p.value for p in PermissionName)


def _check_handler_class(handler_cls: type) -> None:
    """Check a single handler class for a valid __auth__ declaration.

    Raises ConfigurationError if the gate is missing or names an unknown permission.
    """
    gate = getattr(handler_cls, "__auth__", None)
    if not isinstance(gate, Gate):
        raise ConfigurationError(f"Handler {handler_cls.__name__} has no __auth__ declaration")

    unknown = gate.permissions - _KNOWN_PERMISSIONS
    if unknown:
        raise ConfigurationError(
            f"Handler {handler_cls.__name__} requires unknown permission(s): "
            + ", ".join(sorted(unknown))
        )


def _all_subclasses(base: type) -> list[type]:
    found: list[type] = []
    pending = list(base.__subclasses__())
    while pending:
        cls = pending.pop()
        found.append(cls)
        pending.extend(cls.__subclasses__())
    return found


def validate_all_handlers(package: str = "quill") -> None:
    """Scan registered CommandHandler and QueryHandler subclasses defined under `package`.

    Raises ConfigurationError listing every handler with a missing or invalid gate.
    """
    violations: list[str] = []

    for handler_cls in _all_subclasses(CommandHandler) + _all_subclasses(QueryHandler):
        if not handler_cls.__module__.startswith(f"{package}."):
            continue
        try:
            _check_handler_class(handler_cls)
        except ConfigurationError as e:
            violations.append(str(e))

    if violations:
        raise ConfigurationError(
            f"Authorization validation failed for {len(violations)} handler(s):\n"
            + "\n".join(f"  - {v}" for v in violations)
        )

    logger.info("Authorization startup validation passed for all handlers")
