"""Base class for domain entities."""

from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """A domain object with identity.

    Entities are mutable pydantic models; assignments are re-validated.
    """

    model_config = ConfigDict(validate_assignment=True)
