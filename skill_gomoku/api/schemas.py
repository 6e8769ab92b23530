"""
Pydantic Schemas for the message API.

These models define the exact contract between clients and the engine.
Client messages are `{type, payload}` objects; every reply is an
envelope of the same shape.

Error Codes:
- INVALID_MESSAGE: Message is not valid JSON or violates its schema
- UNKNOWN_MESSAGE_TYPE: Message type is not recognised
- INTERNAL_ERROR: Unexpected failure while handling the message
- Any engine ErrorCode (NOT_YOUR_TURN, CELL_OCCUPIED, ...)
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from ..engine_core.errors import ErrorCode


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


# =============================================================================
# Enums
# =============================================================================

class MessageType(str, Enum):
    """Client message types."""
    JOIN = "join"
    MOVE = "move"
    SKILL = "skill"
    RESTART = "restart"
    STATE = "state"


class ReplyType(str, Enum):
    """Server reply types."""
    CONNECTED = "connected"
    JOINED = "joined"
    STATE = "state"
    ERROR = "error"


# =============================================================================
# Request Models
# =============================================================================

class ClientMessage(BaseModel):
    """Raw client message envelope."""
    type: str = Field(..., description="join, move, skill, restart, state")
    payload: Optional[dict[str, Any]] = None


class JoinRequest(CamelModel):
    """Join a room; omit room_id to open a new one."""
    room_id: Optional[str] = Field(None, description="Room to join or create")
    display_name: Optional[str] = Field(None, description="Name shown to others")


class MoveRequest(CamelModel):
    """
    Place a stone.

    Coordinates pass through unconverted; the board rejects anything that
    is not an in-range integer.
    """
    x: Any = Field(..., description="Column, 0-based")
    y: Any = Field(..., description="Row, 0-based")


class SkillData(CamelModel):
    """Effect-specific skill parameters, checked by each effect handler."""
    positions: list[Any] = Field(default_factory=list, description="Targets for removal skills, as {x, y}")
    steps: Any = Field(None, description="Snapshots to rewind")
    turn_number: Any = Field(None, description="Turn to restore")

    def to_payload(self) -> dict[str, Any]:
        return {
            "positions": list(self.positions),
            "steps": self.steps,
            "turnNumber": self.turn_number,
        }


class SkillRequest(CamelModel):
    """Cast a skill."""
    skill_id: Optional[str] = Field(None, description="Catalog id, e.g. flying-sand")
    data: Optional[SkillData] = None


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error payload."""
    message: str = Field(..., description="Human-readable error message")
    code: ErrorCode = Field(..., description="Machine-readable error code")


class Reply(BaseModel):
    """Reply envelope sent back to the originating client."""
    type: ReplyType
    payload: dict[str, Any] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
