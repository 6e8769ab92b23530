"""
Engine errors.

Every failure the engine reports is a GameError carrying a machine-readable
code and a human message. Failures never mutate session state.
"""

from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes."""
    # Actor / turn validation
    NOT_PLAYER = "NOT_PLAYER"
    FINISHED = "FINISHED"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    FROZEN = "FROZEN"

    # Placement
    INVALID_COORDINATE = "INVALID_COORDINATE"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    CELL_OCCUPIED = "CELL_OCCUPIED"

    # Skills
    MISSING_SKILL_ID = "MISSING_SKILL_ID"
    UNKNOWN_SKILL = "UNKNOWN_SKILL"
    SKILL_ALREADY_USED = "SKILL_ALREADY_USED"
    SKILL_ON_COOLDOWN = "SKILL_ON_COOLDOWN"
    MISSING_TARGET = "MISSING_TARGET"
    INVALID_TARGET = "INVALID_TARGET"
    BOARD_FULL = "BOARD_FULL"
    UNDO_LIMIT = "UNDO_LIMIT"
    INVALID_HISTORY_REQUEST = "INVALID_HISTORY_REQUEST"
    HISTORY_NOT_FOUND = "HISTORY_NOT_FOUND"
    NO_OPPONENT_PIECES = "NO_OPPONENT_PIECES"
    UNIMPLEMENTED_SKILL_TYPE = "UNIMPLEMENTED_SKILL_TYPE"

    # Registry
    NO_ACTIVE_SESSION = "NO_ACTIVE_SESSION"
    SESSION_MISSING = "SESSION_MISSING"

    # Message handling
    INVALID_MESSAGE = "INVALID_MESSAGE"
    UNKNOWN_MESSAGE_TYPE = "UNKNOWN_MESSAGE_TYPE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GameError(Exception):
    """A recoverable, local failure of an engine operation."""

    def __init__(self, message: str, code: ErrorCode):
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"GameError({self.code.value}: {self.message})"
