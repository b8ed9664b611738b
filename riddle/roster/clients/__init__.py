"""Client facades."""

from .roster_client import RosterClient

__all__ = ["RosterClient"]
