"""Base class for aggregate roots."""

from quill.domain.shared.model.entity import Entity


class Aggregate(Entity):
    """Root entity of a consistency boundary.

    Repositories load and save aggregates as a whole.
    """
