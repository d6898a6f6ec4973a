"""Base marker for domain ports."""

from typing import Protocol


class Port(Protocol):
    """Marker base for interfaces the domain depends on.

    Implementations are adapters in infrastructure/.
    """
