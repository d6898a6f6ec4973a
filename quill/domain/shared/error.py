"""Error hierarchy for Quill.

Error layers:
- QuillError: Base class for all Quill errors
- DomainError: Business rule violations, validation failures (4xx responses)
- InfrastructureError: System-level failures like storage issues (503 responses)

These errors are mapped to HTTP responses by the global exception handler in app.py.
"""


class QuillError(Exception):
    """Base class for all Quill errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (business logic violations - typically 4xx)
# =============================================================================


class DomainError(QuillError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="validation_error")
        self.field = field


class InvalidStateError(DomainError):
    """Operation not allowed in current state."""


class ConflictError(DomainError):
    """Resource already exists or a separation-of-duty constraint would break."""


class AuthorizationError(DomainError):
    """User not authorized for this operation."""


class RoleGraphIntegrityError(DomainError):
    """Role graph references a role or permission that does not exist.

    Always fails closed: the access check that hits it is denied.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code="role_graph_integrity")


# =============================================================================
# Infrastructure Errors (system-level failures - typically 503)
# =============================================================================


class InfrastructureError(QuillError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Storage backend (database) is unavailable."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""
