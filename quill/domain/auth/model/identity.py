"""Base types for request identities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Base for all request identities."""

    pass


@dataclass(frozen=True)
class Anonymous(Identity):
    """Request without a usable credential.

    `reason` is the error code of the failed credential check
    ("missing_token", "token_expired" or "invalid_token").
    """

    reason: str = "missing_token"
