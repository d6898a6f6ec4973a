"""Repository ports for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from quill.domain.auth.model.user import User
from quill.domain.auth.model.value import UserId
from quill.domain.shared.port import Port


class UserRepository(Port, Protocol):
    """Repository for User aggregate persistence."""

    @abstractmethod
    async def get(self, user_id: UserId) -> User | None:
        """Get a user by ID."""
        ...

    @abstractmethod
    async def get_for_update(self, user_id: UserId) -> User | None:
        """Get a user by ID and hold a row-level lock until the unit of work ends.

        Serializes concurrent role changes for the same user.
        """
        ...

    @abstractmethod
    async def save(self, user: User) -> None:
        """Save a user (create or update)."""
        ...
