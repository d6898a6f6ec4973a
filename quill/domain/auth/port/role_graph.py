"""Read-only port over the persisted role graph."""

from abc import abstractmethod
from typing import Protocol

from quill.domain.auth.model.role import Permission, Role
from quill.domain.auth.model.value import RoleId, UserId
from quill.domain.shared.port import Port


class RoleGraphRepository(Port, Protocol):
    """Queries the resolver needs from the role/permission store.

    Implementations must read from one consistent snapshot for the lifetime
    of a unit of work.
    """

    @abstractmethod
    async def get_user_role(self, user_id: UserId) -> Role | None:
        """Get the role assigned to a user.

        Returns None if the user does not exist, has no role, or its role
        reference dangles.
        """
        ...

    @abstractmethod
    async def get_role(self, role_id: RoleId) -> Role | None:
        """Get a role by ID."""
        ...

    @abstractmethod
    async def get_role_grants(self, role_id: RoleId) -> list[Permission]:
        """Get the permissions granted directly to a role.

        Raises:
            RoleGraphIntegrityError: If a grant references a missing permission.
        """
        ...

    @abstractmethod
    async def get_parent_roles(self, role_id: RoleId) -> list[Role]:
        """Get the roles this role directly inherits from.

        Raises:
            RoleGraphIntegrityError: If an edge references a missing role.
        """
        ...
