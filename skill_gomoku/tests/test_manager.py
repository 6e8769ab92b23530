"""
Tests for the session manager.
"""

import logging
import time
from random import Random

import pytest

from ..engine_core.errors import ErrorCode, GameError
from ..engine_core.state import Color, Role
from ..session import SessionManager


class TestJoin:
    """Tests for room creation and seating."""

    def test_join_without_room_creates_one(self, manager):
        client = manager.register_client()

        result = manager.join(client)

        assert result.room_id
        assert len(result.room_id) == 8
        assert manager.list_rooms() == [result.room_id]
        assert result.role is Role.PLAYER
        assert result.color is Color.BLACK
        assert result.state.id == result.room_id

    def test_room_id_length_is_configurable(self):
        manager = SessionManager(room_id_length=4)

        assert len(manager.join(manager.register_client()).room_id) == 4

    def test_second_client_joins_same_room(self, manager):
        alice, bob, carol = (manager.register_client() for _ in range(3))

        manager.join(alice, "lobby", "Alice")
        bob_result = manager.join(bob, "lobby", "Bob")
        carol_result = manager.join(carol, "lobby")

        assert bob_result.color is Color.WHITE
        assert bob_result.state.players.black.display_name == "Alice"
        assert carol_result.role is Role.SPECTATOR
        assert manager.list_rooms() == ["lobby"]

    def test_unknown_client_is_registered(self, manager):
        manager.join("walk-in", "lobby")

        assert manager.is_registered("walk-in")
        assert manager.require_session("walk-in").id == "lobby"

    def test_rejoin_same_room_keeps_seat(self, manager):
        client = manager.register_client()
        manager.join(client, "lobby")

        result = manager.join(client, "lobby")

        assert result.color is Color.BLACK
        assert len(manager.get_session("lobby").participants) == 1

    def test_switching_rooms_leaves_the_old_one(self, manager):
        alice, bob = manager.register_client(), manager.register_client()
        manager.join(alice, "first")
        manager.join(bob, "first")

        manager.join(alice, "second")

        first = manager.get_session("first")
        assert first.seats[Color.BLACK] is None
        assert manager.require_session(alice).id == "second"

    def test_rooms_get_their_own_random_source(self):
        seeds = iter(range(10))
        manager = SessionManager(rng_factory=lambda: Random(next(seeds)))

        manager.join("a", "one")
        manager.join("b", "two")

        assert manager.get_session("one").resolver.rng is not manager.get_session("two").resolver.rng


class TestRequireSession:
    """Routing a client to its session."""

    def test_unregistered_client(self, manager):
        with pytest.raises(GameError) as exc:
            manager.require_session("nobody")
        assert exc.value.code is ErrorCode.NO_ACTIVE_SESSION

    def test_registered_but_not_joined(self, manager):
        client = manager.register_client()

        with pytest.raises(GameError) as exc:
            manager.require_session(client)
        assert exc.value.code is ErrorCode.NO_ACTIVE_SESSION

    def test_session_gone(self, manager):
        client = manager.register_client()
        manager.join(client, "lobby")
        manager._sessions.clear()

        with pytest.raises(GameError) as exc:
            manager.require_session(client)
        assert exc.value.code is ErrorCode.SESSION_MISSING


class TestRemoveClient:
    """Leaving and room teardown."""

    def test_last_leaver_destroys_room(self, manager):
        alice, bob = manager.register_client(), manager.register_client()
        manager.join(alice, "lobby")
        manager.join(bob, "lobby")

        manager.remove_client(alice)
        assert manager.get_session("lobby") is not None

        manager.remove_client(bob)
        assert manager.get_session("lobby") is None
        assert manager.list_rooms() == []

    def test_remove_frees_seat_for_next_joiner(self, manager):
        alice, bob, carol = (manager.register_client() for _ in range(3))
        manager.join(alice, "lobby")
        manager.join(bob, "lobby")

        manager.remove_client(alice)
        result = manager.join(carol, "lobby")

        assert result.color is Color.BLACK

    def test_remove_unknown_client_is_noop(self, manager):
        manager.remove_client("ghost")

        assert not manager.is_registered("ghost")

    def test_removed_client_is_forgotten(self, manager):
        client = manager.register_client()
        manager.join(client, "lobby")

        manager.remove_client(client)

        assert not manager.is_registered(client)
        with pytest.raises(GameError):
            manager.require_session(client)

    def test_removal_logs_connection_duration(self, manager, caplog):
        client = manager.register_client()
        manager._clients[client].connected_at = time.time() - 3600

        with caplog.at_level(logging.INFO, logger="skill_gomoku.session.manager"):
            manager.remove_client(client)

        assert f"Client {client} removed after 3600." in caplog.text
