from . import admin, health, me

__all__ = ["admin", "health", "me"]
