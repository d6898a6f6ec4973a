"""Custom Dishka scopes for Quill."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Quill dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, session factory, config-derived policy)
    - UOW: Unit of Work (one HTTP request, one database transaction)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
