"""
Engine Core - The authoritative game session engine.

The engine:
1. Holds the board and detects five-in-a-row
2. Orders turns, including freeze-driven skips
3. Resolves skills against the shared catalog
4. Records a snapshot per action for rewind/restore
5. Serializes read-only state views
"""

from .errors import ErrorCode, GameError
from .state import Color, Role, Phase, Participant, Placement, SkillPayload
from .board import Board, BOARD_SIZE, WIN_LENGTH
from .skills import (
    EffectType,
    SkillDefinition,
    SkillLedger,
    SKILLS,
    SKILL_MAP,
    USED_SENTINEL,
    catalog,
    get_skill,
)
from .turns import TurnController, FREEZE_SKIP_GUARD
from .history import History, Snapshot
from .skill_resolver import SkillResolver, SkillOutcome
from .session import GameSession
from .views import StateView, SkillView, JoinResult

__all__ = [
    "ErrorCode",
    "GameError",
    "Color",
    "Role",
    "Phase",
    "Participant",
    "Placement",
    "SkillPayload",
    "Board",
    "BOARD_SIZE",
    "WIN_LENGTH",
    "EffectType",
    "SkillDefinition",
    "SkillLedger",
    "SKILLS",
    "SKILL_MAP",
    "USED_SENTINEL",
    "catalog",
    "get_skill",
    "TurnController",
    "FREEZE_SKIP_GUARD",
    "History",
    "Snapshot",
    "SkillResolver",
    "SkillOutcome",
    "GameSession",
    "StateView",
    "SkillView",
    "JoinResult",
]
