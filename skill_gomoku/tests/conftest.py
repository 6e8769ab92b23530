"""
Pytest fixtures for Skill Gomoku tests.
"""

import pytest
from random import Random

from ..engine_core.session import GameSession
from ..session import SessionManager
from ..api.service import GameService
from .helpers import BLACK_ID, WHITE_ID, FixedChoice


@pytest.fixture
def rng() -> Random:
    return Random(1234)


@pytest.fixture
def session(rng) -> GameSession:
    """An empty session nobody has joined."""
    return GameSession("test-room", rng=rng)


@pytest.fixture
def seated_session(session) -> GameSession:
    """A session with Black and White seated."""
    session.attach(BLACK_ID, "Black")
    session.attach(WHITE_ID, "White")
    return session


@pytest.fixture
def fixed_session() -> GameSession:
    """A seated session whose random placement always picks the first empty cell."""
    session = GameSession("fixed-room", rng=FixedChoice())
    session.attach(BLACK_ID, "Black")
    session.attach(WHITE_ID, "White")
    return session


@pytest.fixture
def manager() -> SessionManager:
    return SessionManager(rng_factory=lambda: Random(99))


@pytest.fixture
def service(manager) -> GameService:
    return GameService(session_manager=manager)
