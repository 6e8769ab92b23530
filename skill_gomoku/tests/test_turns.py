"""
Tests for the turn controller.

Tests:
- Turn advance and cooldown ticking
- Freeze skips and the skip guard
- Actor validation order
"""

import pytest

from ..engine_core.errors import ErrorCode, GameError
from ..engine_core.skills import USED_SENTINEL, SkillLedger
from ..engine_core.state import Color, Participant, Role
from ..engine_core.turns import FREEZE_SKIP_GUARD, TurnController


def _player(color: Color) -> Participant:
    return Participant(participant_id=color.value, role=Role.PLAYER, color=color, display_name=color.value)


class TestAdvanceTurn:
    """Tests for advance_turn."""

    def test_flips_color(self):
        turns = TurnController()

        assert turns.advance_turn([]) == []
        assert turns.current_turn is Color.WHITE
        turns.advance_turn([])
        assert turns.current_turn is Color.BLACK

    def test_ticks_every_ledger_once(self):
        black, white = SkillLedger(), SkillLedger()
        black.cooldowns["calm-water"] = 3
        white.cooldowns["restore"] = 1
        white.mark_used("capture")

        TurnController().advance_turn([black, white])

        assert black.remaining("calm-water") == 2
        assert white.remaining("restore") == 0
        assert white.remaining("capture") == USED_SENTINEL

    def test_frozen_color_is_skipped(self):
        turns = TurnController()
        turns.add_freeze(Color.WHITE, 1)

        skipped = turns.advance_turn([])

        assert skipped == [Color.WHITE]
        assert turns.current_turn is Color.BLACK
        assert turns.freeze[Color.WHITE] == 0

    def test_multiple_freeze_turns_wear_off_one_per_advance(self):
        turns = TurnController()
        turns.add_freeze(Color.WHITE, 2)

        assert turns.advance_turn([]) == [Color.WHITE]
        assert turns.advance_turn([]) == [Color.WHITE]
        assert turns.advance_turn([]) == []
        assert turns.current_turn is Color.WHITE

    def test_skip_guard_bounds_mutual_freeze(self):
        """Never more than FREEZE_SKIP_GUARD skips in one advance."""
        turns = TurnController()
        turns.add_freeze(Color.BLACK, 10)
        turns.add_freeze(Color.WHITE, 10)

        skipped = turns.advance_turn([])

        assert len(skipped) == FREEZE_SKIP_GUARD == 4
        assert skipped == [Color.WHITE, Color.BLACK, Color.WHITE, Color.BLACK]
        assert turns.current_turn is Color.WHITE
        assert turns.freeze == {Color.BLACK: 8, Color.WHITE: 8}

    def test_reset(self):
        turns = TurnController()
        turns.advance_turn([])
        turns.turn_number = 9
        turns.add_freeze(Color.BLACK, 2)

        turns.reset()

        assert turns.current_turn is Color.BLACK
        assert turns.turn_number == 0
        assert turns.freeze == {Color.BLACK: 0, Color.WHITE: 0}


class TestCanAct:
    """Tests for actor validation, checked in order."""

    def test_unknown_participant(self):
        with pytest.raises(GameError) as exc:
            TurnController().can_act(None, finished=False)
        assert exc.value.code is ErrorCode.NOT_PLAYER

    def test_spectator(self):
        spectator = Participant(participant_id="s", role=Role.SPECTATOR, display_name="s")

        with pytest.raises(GameError) as exc:
            TurnController().can_act(spectator, finished=True)
        assert exc.value.code is ErrorCode.NOT_PLAYER

    def test_finished_before_turn_check(self):
        with pytest.raises(GameError) as exc:
            TurnController().can_act(_player(Color.WHITE), finished=True)
        assert exc.value.code is ErrorCode.FINISHED

    def test_not_your_turn(self):
        with pytest.raises(GameError) as exc:
            TurnController().can_act(_player(Color.WHITE), finished=False)
        assert exc.value.code is ErrorCode.NOT_YOUR_TURN

    def test_frozen(self):
        turns = TurnController()
        turns.add_freeze(Color.BLACK, 1)

        with pytest.raises(GameError) as exc:
            turns.can_act(_player(Color.BLACK), finished=False)
        assert exc.value.code is ErrorCode.FROZEN

    def test_allowed(self):
        player = _player(Color.BLACK)

        assert TurnController().can_act(player, finished=False) is player
