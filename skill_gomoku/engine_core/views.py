"""
State Views - Read-only pydantic projections of a session.

These models define the exact state contract handed to clients and
observers. Field names are snake_case in Python and camelCase on the
wire (`model_dump(by_alias=True)`). Views are frozen and built from
fresh copies, so they never alias live session state.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .state import Color, Phase, Role


class View(BaseModel):
    """Base for all wire views."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# Shared Models
# =============================================================================

class SkillView(View):
    """One skill as seen by one side."""
    id: str
    name: str
    description: str
    cooldown: int
    remaining_cooldown: int
    used: bool
    available: bool


class PlayerInfo(View):
    """A seated player."""
    id: str
    display_name: str


class PlayersView(View):
    black: Optional[PlayerInfo] = None
    white: Optional[PlayerInfo] = None


class FreezeView(View):
    black: int = 0
    white: int = 0


class SkillsView(View):
    black: list[SkillView] = Field(default_factory=list)
    white: list[SkillView] = Field(default_factory=list)


class PlacementView(View):
    x: int
    y: int
    color: Color
    by_skill: bool = False


class StatusView(View):
    phase: Phase
    winner: Optional[Color] = None


# =============================================================================
# Events
# =============================================================================

class MoveEventView(View):
    type: Literal["move"] = "move"
    x: int
    y: int
    color: Color
    win: bool
    skipped: list[Color] = Field(default_factory=list)


class SkillEventView(View):
    type: Literal["skill"] = "skill"
    skill_id: str
    actor: Color
    details: dict[str, Any] = Field(default_factory=dict)
    skipped: list[Color] = Field(default_factory=list)


class SystemEventView(View):
    type: Literal["system"] = "system"
    action: str


EventView = Annotated[
    Union[MoveEventView, SkillEventView, SystemEventView],
    Field(discriminator="type"),
]


# =============================================================================
# State
# =============================================================================

class StateView(View):
    """Complete serialized session state."""
    id: str
    board: list[list[Optional[Color]]]
    current_turn: Color
    turn_number: int
    players: PlayersView
    freeze: FreezeView
    winner: Optional[Color] = None
    last_event: Optional[EventView] = None
    last_placement: Optional[PlacementView] = None
    skills: SkillsView
    history_length: int
    status: StatusView
    spectator_count: int = 0


class JoinResult(View):
    """What a participant learns when attaching to a session."""
    room_id: Optional[str] = None
    role: Role
    color: Optional[Color] = None
    display_name: str
    state: StateView
