"""
API Module - Client message interface.

Exposes the engine to a transport as plain messages:
1. Clients connect and receive a client id
2. Clients join a room
3. Clients send moves, skills and restarts
4. Each message yields one reply (new state or an error)

The module opens no sockets; a transport adapter feeds it messages.
"""

from .schemas import (
    # Requests
    ClientMessage,
    JoinRequest,
    MoveRequest,
    SkillRequest,
    SkillData,
    # Responses
    Reply,
    ErrorResponse,
    # Enums
    MessageType,
    ReplyType,
)
from .service import GameService, error_reply

__all__ = [
    # Requests
    "ClientMessage",
    "JoinRequest",
    "MoveRequest",
    "SkillRequest",
    "SkillData",
    # Responses
    "Reply",
    "ErrorResponse",
    # Enums
    "MessageType",
    "ReplyType",
    # Service
    "GameService",
    "error_reply",
]
