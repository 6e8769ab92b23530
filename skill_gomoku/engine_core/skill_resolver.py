"""
Skill Resolver - Applies a skill effect to a session.

The resolver is stateless apart from its random source. It receives an
already validated caster and skill, checks the effect's own
preconditions, and mutates the session only once they all hold.

Design principles:
- Validate before mutating: a raised GameError leaves the session as it was
- One handler per effect type, dispatched from a table
- Randomness is injected so placements are reproducible in tests
"""

from __future__ import annotations
from dataclasses import dataclass, field
from random import Random
from typing import TYPE_CHECKING, Callable

from .board import is_int
from .errors import ErrorCode, GameError
from .skills import EffectType, SkillDefinition
from .state import Color, Placement, SkillEvent, SkillPayload

if TYPE_CHECKING:
    from .session import GameSession


@dataclass
class SkillOutcome:
    """Result of one effect: the event to record and whether the turn is spent."""
    event: SkillEvent
    turn_consumed: bool = False


Handler = Callable[["GameSession", Color, SkillDefinition, SkillPayload], SkillOutcome]


@dataclass
class SkillResolver:
    """Dispatches skills to their effect handlers."""
    rng: Random = field(default_factory=Random)

    def resolve(
        self,
        session: GameSession,
        color: Color,
        skill: SkillDefinition,
        payload: SkillPayload,
    ) -> SkillOutcome:
        handler = self._get_handler(skill.effect)
        if handler is None:
            raise GameError(
                f"Skill type {skill.effect.value} is not implemented",
                ErrorCode.UNIMPLEMENTED_SKILL_TYPE,
            )
        return handler(session, color, skill, payload)

    def _get_handler(self, effect: EffectType) -> Handler | None:
        handlers: dict[EffectType, Handler] = {
            EffectType.REMOVE_OPPONENT: self._remove_opponent,
            EffectType.FREEZE_OPPONENT: self._freeze_opponent,
            EffectType.RANDOM_SELF: self._random_self_placement,
            EffectType.UNDO: self._undo,
            EffectType.RESET_BOARD: self._reset_board,
            EffectType.RESTORE_HISTORY: self._restore_history,
            EffectType.REMOVE_ALL_OPPONENT: self._remove_all_opponent,
        }
        return handlers.get(effect)

    def _remove_opponent(self, session, color, skill, payload) -> SkillOutcome:
        """Clear up to `count` chosen opponent stones."""
        targets = payload.target_coordinates()
        if not targets:
            raise GameError("Choose the stones to remove", ErrorCode.MISSING_TARGET)

        board = session.board
        opponent = color.opposite
        targets = targets[:skill.param("count", 1)]
        for x, y in targets:
            board.validate_coordinate(x, y)

        hits = []
        for x, y in targets:
            if board.get(x, y) is opponent and (x, y) not in hits:
                hits.append((x, y))
        if not hits:
            raise GameError("No opponent stone at the chosen cells", ErrorCode.INVALID_TARGET)

        for x, y in hits:
            board.set(x, y, None)
        return SkillOutcome(SkillEvent(
            skill_id=skill.id,
            actor=color,
            details={"removed": [{"x": x, "y": y} for x, y in hits]},
        ))

    def _freeze_opponent(self, session, color, skill, payload) -> SkillOutcome:
        opponent = color.opposite
        turns = skill.param("turns", 1)
        session.turns.add_freeze(opponent, turns)
        return SkillOutcome(SkillEvent(
            skill_id=skill.id,
            actor=color,
            details={"frozen": opponent.value, "turns": turns},
        ))

    def _random_self_placement(self, session, color, skill, payload) -> SkillOutcome:
        """Drop one of the caster's stones on a uniformly random empty cell."""
        empty = session.board.empty_cells()
        if not empty:
            raise GameError("The board is full", ErrorCode.BOARD_FULL)

        x, y = self.rng.choice(empty)
        win = session.board.place_stone(color, x, y)
        session.turns.turn_number += 1
        session.last_placement = Placement(x=x, y=y, color=color, by_skill=True)
        if win:
            session.declare_winner(color)

        return SkillOutcome(
            SkillEvent(
                skill_id=skill.id,
                actor=color,
                details={"placed": {"x": x, "y": y}, "win": win},
            ),
            turn_consumed=True,
        )

    def _undo(self, session, color, skill, payload) -> SkillOutcome:
        """Roll back `steps` snapshots and drop everything after; 0 means the default."""
        steps = payload.steps
        if steps is None or (is_int(steps) and steps == 0):
            steps = skill.param("steps", 1)
        if not is_int(steps) or steps < 1:
            raise GameError("Undo steps must be a positive integer", ErrorCode.UNDO_LIMIT)

        target_index = len(session.history) - 1 - steps
        if target_index < 0:
            raise GameError("Nothing left to undo", ErrorCode.UNDO_LIMIT)

        session.restore_snapshot(session.history[target_index])
        session.history.truncate(target_index)
        return SkillOutcome(SkillEvent(
            skill_id=skill.id,
            actor=color,
            details={"steps": steps},
        ))

    def _reset_board(self, session, color, skill, payload) -> SkillOutcome:
        """Wipe board and turn state; the usage ledger survives."""
        session.board.clear()
        session.turns.reset()
        session.winner = None
        session.last_placement = None
        for ledger in session.ledgers.values():
            ledger.reset_cooldowns()
        return SkillOutcome(SkillEvent(
            skill_id=skill.id,
            actor=color,
            details={"reset": True},
        ))

    def _restore_history(self, session, color, skill, payload) -> SkillOutcome:
        turn_number = payload.turn_number
        if not is_int(turn_number) or turn_number < 0:
            raise GameError(
                "A valid history turn number is required",
                ErrorCode.INVALID_HISTORY_REQUEST,
            )

        index = session.history.index_for_turn(turn_number)
        if index is None:
            raise GameError(
                f"No history state for turn {turn_number}",
                ErrorCode.HISTORY_NOT_FOUND,
            )

        session.restore_snapshot(session.history[index])
        session.history.truncate(index)
        return SkillOutcome(SkillEvent(
            skill_id=skill.id,
            actor=color,
            details={"turnNumber": turn_number},
        ))

    def _remove_all_opponent(self, session, color, skill, payload) -> SkillOutcome:
        opponent = color.opposite
        cells = list(session.board.cells(opponent))
        if not cells:
            raise GameError("The opponent has no stones to remove", ErrorCode.NO_OPPONENT_PIECES)

        for x, y in cells:
            session.board.set(x, y, None)
        return SkillOutcome(SkillEvent(
            skill_id=skill.id,
            actor=color,
            details={"removedCount": len(cells)},
        ))
