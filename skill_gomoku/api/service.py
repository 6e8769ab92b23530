"""
API Service - Translates client messages into engine calls.

The service:
1. Parses and validates `{type, payload}` messages
2. Routes them to the client's session via the SessionManager
3. Converts engine failures into error replies

This layer is framework-agnostic: it never touches sockets, and it does
not broadcast. The transport delivers the returned reply and decides who
else should see the new state.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Union
import json
import logging

from pydantic import ValidationError

from ..engine_core import ErrorCode, GameError, catalog
from ..session import SessionManager
from .schemas import (
    ClientMessage,
    ErrorResponse,
    JoinRequest,
    MessageType,
    MoveRequest,
    Reply,
    ReplyType,
    SkillRequest,
)

logger = logging.getLogger(__name__)

RawMessage = Union[str, bytes, Mapping[str, Any]]


def error_reply(code: ErrorCode, message: str) -> Reply:
    return Reply(
        type=ReplyType.ERROR,
        payload=ErrorResponse(message=message, code=code).model_dump(mode="json"),
    )


@dataclass
class GameService:
    """
    Main message service.

    Usage:
        service = GameService()
        hello = service.connect()
        client_id = hello.payload["clientId"]

        reply = service.handle_message(client_id, '{"type": "join", "payload": {}}')
        reply = service.handle_message(client_id, {"type": "move", "payload": {"x": 7, "y": 7}})

        service.disconnect(client_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def connect(self) -> Reply:
        """Register a new client."""
        client_id = self.session_manager.register_client()
        logger.info("Client %s connected", client_id)
        return Reply(type=ReplyType.CONNECTED, payload={"clientId": client_id})

    def disconnect(self, client_id: str) -> None:
        self.session_manager.remove_client(client_id)
        logger.info("Client %s disconnected", client_id)

    def skills(self) -> list[dict[str, Any]]:
        """The skill catalog, verbatim."""
        return catalog()

    def handle_message(self, client_id: str, raw: RawMessage) -> Reply:
        """Handle one client message and return the reply for that client."""
        try:
            message = self._parse(raw)
        except (ValueError, ValidationError) as e:
            logger.warning("Invalid message from %s: %s", client_id, e)
            return error_reply(ErrorCode.INVALID_MESSAGE, "Invalid message format")

        handler = self._get_handler(message.type)
        if handler is None:
            return error_reply(
                ErrorCode.UNKNOWN_MESSAGE_TYPE,
                f"Unknown message type: {message.type}",
            )

        try:
            return handler(client_id, message.payload or {})
        except GameError as e:
            logger.info("Rejected %s from %s: %s", message.type, client_id, e.code.value)
            return error_reply(e.code, e.message)
        except ValidationError as e:
            logger.info("Invalid %s payload from %s: %s", message.type, client_id, e)
            return error_reply(ErrorCode.INVALID_MESSAGE, f"Invalid {message.type} payload")
        except Exception:
            logger.exception("Unhandled error for %s from %s", message.type, client_id)
            return error_reply(ErrorCode.INTERNAL_ERROR, "Internal server error")

    def _parse(self, raw: RawMessage) -> ClientMessage:
        if isinstance(raw, (str, bytes)):
            raw = json.loads(raw)
        if not isinstance(raw, Mapping):
            raise ValueError("Message must be a JSON object")
        return ClientMessage.model_validate(raw)

    def _get_handler(self, message_type: str) -> Callable[[str, dict[str, Any]], Reply] | None:
        handlers = {
            MessageType.JOIN.value: self.handle_join,
            MessageType.MOVE.value: self.handle_move,
            MessageType.SKILL.value: self.handle_skill,
            MessageType.RESTART.value: self.handle_restart,
            MessageType.STATE.value: self.handle_state,
        }
        return handlers.get(message_type)

    # =========================================================================
    # Handlers
    # =========================================================================

    def handle_join(self, client_id: str, payload: dict[str, Any]) -> Reply:
        request = JoinRequest.model_validate(payload)
        result = self.session_manager.join(
            client_id,
            room_id=request.room_id,
            display_name=request.display_name,
        )
        return Reply(type=ReplyType.JOINED, payload=result.to_wire())

    def handle_move(self, client_id: str, payload: dict[str, Any]) -> Reply:
        session = self.session_manager.require_session(client_id)
        request = MoveRequest.model_validate(payload)
        state = session.place_stone(client_id, request.x, request.y)
        return Reply(type=ReplyType.STATE, payload=state.to_wire())

    def handle_skill(self, client_id: str, payload: dict[str, Any]) -> Reply:
        session = self.session_manager.require_session(client_id)
        request = SkillRequest.model_validate(payload)
        if not request.skill_id:
            raise GameError("A skill id is required", ErrorCode.MISSING_SKILL_ID)

        data = request.data.to_payload() if request.data else {}
        state = session.apply_skill(client_id, request.skill_id, data)
        return Reply(type=ReplyType.STATE, payload=state.to_wire())

    def handle_restart(self, client_id: str, payload: dict[str, Any]) -> Reply:
        session = self.session_manager.require_session(client_id)
        state = session.force_restart()
        return Reply(type=ReplyType.STATE, payload=state.to_wire())

    def handle_state(self, client_id: str, payload: dict[str, Any]) -> Reply:
        session = self.session_manager.require_session(client_id)
        return Reply(type=ReplyType.STATE, payload=session.serialize().to_wire())
