"""Base class for Quill DI providers."""

from dishka import Provider as DishkaProvider

from quill.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all Quill providers.

    Factories default to the unit-of-work scope; application singletons
    declare ``scope=Scope.APP`` explicitly.
    """

    scope = Scope.UOW
