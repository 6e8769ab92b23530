"""
Session Manager - Maps clients to rooms and rooms to game sessions.

LIFECYCLE:
1. A client registers and receives a client id
2. The client joins a room (an unknown room id creates the room)
3. Game operations are routed to the client's session
4. When the last participant leaves, the session is destroyed

PERSISTENCE RULES:
- Sessions are in-memory only
- Nothing survives the process
"""

from __future__ import annotations
from dataclasses import dataclass, field
from random import Random
from typing import Callable
import logging
import time
import uuid

from ..config import get_config
from ..engine_core import ErrorCode, GameError, GameSession, JoinResult

logger = logging.getLogger(__name__)


@dataclass
class ClientRecord:
    """A registered client and the room it has joined."""
    client_id: str
    connected_at: float = field(default_factory=time.time)
    session_id: str | None = None


def _default_rng_factory() -> Random:
    return Random(get_config().random_seed)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Register clients
    - Create rooms on first join
    - Route clients to their session
    - Destroy sessions once empty

    The manager does no locking; callers serialize access per session.
    """

    def __init__(
        self,
        rng_factory: Callable[[], Random] | None = None,
        room_id_length: int | None = None,
    ):
        self._sessions: dict[str, GameSession] = {}
        self._clients: dict[str, ClientRecord] = {}
        self._rng_factory = rng_factory or _default_rng_factory
        self._room_id_length = room_id_length or get_config().room_id_length

    def register_client(self) -> str:
        client_id = str(uuid.uuid4())
        self._clients[client_id] = ClientRecord(client_id=client_id)
        return client_id

    def join(
        self,
        client_id: str,
        room_id: str | None = None,
        display_name: str | None = None,
    ) -> JoinResult:
        """
        Attach a client to a room, creating the room if needed.

        A client that was in another room leaves it first. Unknown client
        ids are registered on the fly.
        """
        record = self._clients.get(client_id)
        if record is None:
            record = ClientRecord(client_id=client_id)
            self._clients[client_id] = record

        target_room = room_id or self._create_room_id()
        if record.session_id and record.session_id != target_room:
            self._leave_session(client_id, record.session_id)

        session = self._sessions.get(target_room)
        if session is None:
            session = GameSession(target_room, rng=self._rng_factory())
            self._sessions[target_room] = session
            logger.info("Room %s created", target_room)

        result = session.attach(client_id, display_name)
        record.session_id = target_room
        return result.model_copy(update={"room_id": target_room})

    def require_session(self, client_id: str) -> GameSession:
        """The session a client has joined, or GameError."""
        record = self._clients.get(client_id)
        if record is None or not record.session_id:
            raise GameError("Client has not joined a room", ErrorCode.NO_ACTIVE_SESSION)

        session = self._sessions.get(record.session_id)
        if session is None:
            raise GameError("The room no longer exists", ErrorCode.SESSION_MISSING)
        return session

    def remove_client(self, client_id: str) -> None:
        """Forget a client, detaching it from its session."""
        record = self._clients.pop(client_id, None)
        if record is None:
            return
        if record.session_id:
            self._leave_session(client_id, record.session_id)
        logger.info(
            "Client %s removed after %.1fs", client_id, time.time() - record.connected_at,
        )

    def get_session(self, room_id: str) -> GameSession | None:
        return self._sessions.get(room_id)

    def list_rooms(self) -> list[str]:
        return list(self._sessions)

    def is_registered(self, client_id: str) -> bool:
        return client_id in self._clients

    def _leave_session(self, client_id: str, room_id: str) -> None:
        session = self._sessions.get(room_id)
        if session is None:
            return
        session.detach(client_id)
        if session.is_empty():
            del self._sessions[room_id]
            logger.info("Room %s destroyed", room_id)

    def _create_room_id(self) -> str:
        return str(uuid.uuid4())[:self._room_id_length]
