"""
Session State Types - Colors, participants, placements and events.

Design principles:
- Immutable where shared: events and placements are frozen so that
  snapshots can hold them without copying
- Serializable: every type maps onto the state view one-to-one
- Closed sets are enums, not strings
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union


class Color(str, Enum):
    """Stone colors; doubles as the player slot."""
    BLACK = "black"
    WHITE = "white"

    @property
    def opposite(self) -> Color:
        return Color.WHITE if self is Color.BLACK else Color.BLACK


class Role(str, Enum):
    """Participant roles."""
    PLAYER = "player"
    SPECTATOR = "spectator"


class Phase(str, Enum):
    """High-level session phases."""
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


DEFAULT_NAMES = {
    Color.BLACK: "子琪",
    Color.WHITE: "张呈",
}
SPECTATOR_NAME_PREFIX = "观战者"


@dataclass
class Participant:
    """
    A connected participant in a session.

    Players own exactly one color slot; spectators have no color.
    """
    participant_id: str
    role: Role
    display_name: str
    color: Color | None = None

    @property
    def is_player(self) -> bool:
        return self.role is Role.PLAYER


@dataclass(frozen=True)
class Placement:
    """The most recent stone put on the board."""
    x: int
    y: int
    color: Color
    by_skill: bool = False


@dataclass(frozen=True)
class MoveEvent:
    """A regular stone placement."""
    x: int
    y: int
    color: Color
    win: bool
    skipped: tuple[Color, ...] = ()


@dataclass(frozen=True)
class SkillEvent:
    """A resolved skill cast. `details` is effect specific."""
    skill_id: str
    actor: Color
    details: Mapping[str, Any] = field(default_factory=dict, hash=False)
    skipped: tuple[Color, ...] = ()


@dataclass(frozen=True)
class SystemEvent:
    """Session-level events (baseline, restart)."""
    action: str


GameEvent = Union[MoveEvent, SkillEvent, SystemEvent]


@dataclass
class SkillPayload:
    """
    Caller-supplied skill parameters.

    Values are passed through unvalidated; each effect handler checks
    the fields it needs and reports its own error codes.
    """
    positions: list[Any] = field(default_factory=list)
    steps: Any = None
    turn_number: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> SkillPayload:
        """Build a payload from a raw `{positions, steps, turnNumber}` mapping."""
        if not data:
            return cls()
        positions = data.get("positions")
        return cls(
            positions=list(positions) if isinstance(positions, (list, tuple)) else [],
            steps=data.get("steps"),
            turn_number=data.get("turnNumber", data.get("turn_number")),
        )

    def target_coordinates(self) -> list[tuple[Any, Any]]:
        """Positions as (x, y) pairs; accepts `{x, y}` mappings or pairs."""
        coords = []
        for pos in self.positions:
            if isinstance(pos, Mapping):
                coords.append((pos.get("x"), pos.get("y")))
            elif isinstance(pos, (list, tuple)) and len(pos) == 2:
                coords.append((pos[0], pos[1]))
            else:
                coords.append((None, None))
        return coords
