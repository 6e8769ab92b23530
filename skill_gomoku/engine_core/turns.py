"""
Turn Controller - Whose turn it is, freeze counters and turn advance.

The controller never advances on its own. The session calls
advance_turn() once after a placement that did not win, and after a
skill that consumes the caster's turn.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable

from .errors import ErrorCode, GameError
from .skills import SkillLedger
from .state import Color, Participant

# Upper bound on freeze skips per advance. With two colors a normal game
# never needs more than two.
FREEZE_SKIP_GUARD = 4


def _no_freeze() -> dict[Color, int]:
    return {Color.BLACK: 0, Color.WHITE: 0}


@dataclass
class TurnController:
    """Turn state: current color, turn number and per-color freeze."""
    current_turn: Color = Color.BLACK
    turn_number: int = 0
    freeze: dict[Color, int] = field(default_factory=_no_freeze)

    def reset(self) -> None:
        self.current_turn = Color.BLACK
        self.turn_number = 0
        self.freeze = _no_freeze()

    def is_frozen(self, color: Color) -> bool:
        return self.freeze[color] > 0

    def add_freeze(self, color: Color, turns: int) -> None:
        self.freeze[color] += turns

    def can_act(self, participant: Participant | None, finished: bool) -> Participant:
        """
        Validate that `participant` may act now.

        Checks, in order: is a player, game not finished, it is their
        turn, and they are not frozen.
        """
        if participant is None or not participant.is_player:
            raise GameError("Client is not bound to a player seat", ErrorCode.NOT_PLAYER)
        if finished:
            raise GameError("The game is already finished", ErrorCode.FINISHED)
        if participant.color is not self.current_turn:
            raise GameError("It is not this player's turn", ErrorCode.NOT_YOUR_TURN)
        if self.is_frozen(participant.color):
            raise GameError("This player is frozen", ErrorCode.FROZEN)
        return participant

    def advance_turn(self, ledgers: Iterable[SkillLedger]) -> list[Color]:
        """
        Tick cooldowns and hand the turn to the next unfrozen color.

        Returns the colors skipped because they were frozen, in order.
        """
        for ledger in ledgers:
            ledger.tick()

        next_color = self.current_turn.opposite
        skipped: list[Color] = []
        guard = 0
        while self.freeze[next_color] > 0 and guard < FREEZE_SKIP_GUARD:
            self.freeze[next_color] -= 1
            skipped.append(next_color)
            next_color = next_color.opposite
            guard += 1

        self.current_turn = next_color
        return skipped
