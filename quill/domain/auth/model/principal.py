"""The verified identity behind a request."""

from dataclasses import dataclass

from quill.domain.auth.model.identity import Identity
from quill.domain.auth.model.value import UserId


@dataclass(frozen=True)
class Principal(Identity):
    """The authenticated identity of the current requester.

    Built from verified token claims only. Roles and permissions are not
    carried here; they are resolved per access check so that a role change
    takes effect on the next request.
    """

    user_id: UserId
    username: str | None = None
    email: str | None = None
