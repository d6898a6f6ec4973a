from .base import Provider
from .fastapi import setup_dishka
from .scope import Scope

__all__ = ["Provider", "Scope", "setup_dishka"]
