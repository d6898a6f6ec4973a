"""Value objects for the auth domain."""

from uuid import UUID, uuid4

from pydantic import RootModel, field_validator


class UserId(RootModel[UUID]):
    """Unique identifier for a User."""

    @classmethod
    def generate(cls) -> "UserId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class RoleId(RootModel[int]):
    """Identifier of a Role row (administrative data, small integers)."""

    @field_validator("root")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"Role id must be positive: {v}")
        return v

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class PermissionId(RootModel[int]):
    """Identifier of a Permission row."""

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)
