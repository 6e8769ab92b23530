"""Shared test helpers."""

from ..engine_core.session import GameSession

BLACK_ID = "black-player"
WHITE_ID = "white-player"


class FixedChoice:
    """Random stand-in that always picks the first candidate."""

    def choice(self, seq):
        return seq[0]


def play(session: GameSession, *moves):
    """Place stones alternately starting with whoever is to move."""
    ids = {"black": BLACK_ID, "white": WHITE_ID}
    state = None
    for x, y in moves:
        state = session.place_stone(ids[session.turns.current_turn.value], x, y)
    return state
