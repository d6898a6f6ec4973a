"""User aggregate for the auth domain."""

from datetime import UTC, datetime

from quill.domain.auth.model.value import RoleId, UserId
from quill.domain.shared.model.aggregate import Aggregate


class User(Aggregate):
    """A registered user of the content platform.

    Invariants:
    - `id` is immutable after creation
    - the user holds at most one role at a time (`role_id`)
    - `updated_at` is set whenever the role changes
    """

    id: UserId
    username: str
    email: str
    role_id: RoleId | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def create(cls, username: str, email: str, role_id: RoleId | None = None) -> "User":
        """Create a new user."""
        return cls(
            id=UserId.generate(),
            username=username,
            email=email,
            role_id=role_id,
            created_at=datetime.now(UTC),
            updated_at=None,
        )

    def assign_role(self, role_id: RoleId) -> None:
        """Replace the user's role. Separation-of-duty checks happen before this call."""
        self.role_id = role_id
        self.updated_at = datetime.now(UTC)
