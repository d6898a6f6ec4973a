"""Translation of Quill errors into HTTP responses.

Every body has the shape ``{"code": ..., "message": ...}``. Infrastructure
and role-data faults keep their details in the server log; clients get a
fixed message.
"""

from typing import Any

from fastapi import HTTPException

from quill.domain.auth.model.decision import DecisionKind
from quill.domain.shared.error import (
    AuthorizationError,
    ConflictError,
    DomainError,
    InfrastructureError,
    InvalidStateError,
    NotFoundError,
    QuillError,
    RoleGraphIntegrityError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
    InvalidStateError: 409,
    ConflictError: 409,
    AuthorizationError: 403,
}

# Authorization codes that mean "no usable identity" rather than "not allowed"
UNAUTHENTICATED_CODES = frozenset({DecisionKind.DENY_UNAUTHENTICATED.value, "missing_token"})


def map_quill_error(error: QuillError) -> HTTPException:
    """HTTPException for a Quill error.

    Denials without a usable identity become 401 with a Bearer challenge,
    other authorization denials 403. Infrastructure errors become 503 and
    role-data faults 500, both with a fixed message.
    """
    if isinstance(error, InfrastructureError):
        return HTTPException(
            status_code=503,
            detail={"code": error.code, "message": "Service temporarily unavailable"},
        )

    if isinstance(error, RoleGraphIntegrityError):
        return HTTPException(
            status_code=500,
            detail={"code": error.code, "message": "Role data is inconsistent"},
        )

    detail: dict[str, Any] = {"code": error.code, "message": error.message}

    if not isinstance(error, DomainError):
        return HTTPException(status_code=500, detail=detail)

    if isinstance(error, ValidationError) and error.field is not None:
        detail["field"] = error.field

    if isinstance(error, AuthorizationError) and error.code in UNAUTHENTICATED_CODES:
        return HTTPException(
            status_code=401,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return HTTPException(status_code=DOMAIN_ERROR_STATUS_MAP.get(type(error), 400), detail=detail)
