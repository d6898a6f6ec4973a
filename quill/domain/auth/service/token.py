"""Token service for JWT validation."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from quill.config import JwtConfig
from quill.domain.auth.model.value import UserId
from quill.domain.shared.service import Service


class TokenService(Service):
    """Service for JWT access token operations.

    Access tokens are HS256 JWTs carrying `sub` (user id), `username` and
    `email`. Quill verifies them; issuance lives with the login flow, and
    `create_access_token` exists for operators and tests.
    """

    _config: JwtConfig

    def create_access_token(
        self,
        user_id: UserId,
        username: str | None = None,
        email: str | None = None,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        """Create a signed JWT access token for `user_id`."""
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._config.access_token_expire_minutes)

        payload: dict[str, Any] = {
            "sub": str(user_id),
            "aud": self._config.audience,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(16),
        }
        if username is not None:
            payload["username"] = username
        if email is not None:
            payload["email"] = email
        if additional_claims:
            payload.update(additional_claims)

        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate and decode a JWT access token.

        Raises:
            jwt.ExpiredSignatureError: If the token has expired
            jwt.InvalidTokenError: If the token is otherwise invalid
        """
        return jwt.decode(
            token,
            self._config.secret,
            algorithms=[self._config.algorithm],
            audience=self._config.audience,
            options={"require": ["sub", "exp"]},
        )
