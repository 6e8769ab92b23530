"""
Session Module - Room and client registry.

A room holds one GameSession:
- Created when the first client joins it
- Shared by two players and any number of spectators
- Destroyed when its last participant leaves

Rooms are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, ClientRecord

__all__ = [
    "SessionManager",
    "ClientRecord",
]
