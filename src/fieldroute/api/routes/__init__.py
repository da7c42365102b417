"""Route group exports."""

from . import dispatch, health, routes

__all__ = ["dispatch", "health", "routes"]
