"""
Game Session - The authoritative state machine for one room.

The session is the composition root of the engine. It owns:
- The board and win detection
- Turn order and freeze counters (TurnController)
- Per-color skill ledgers and skill resolution (SkillResolver)
- The snapshot history used by rewind and restore
- The participant registry (two color seats plus spectators)

Every operation either completes or raises GameError with the session
untouched. The session does no locking: callers must serialize all
operations targeting the same session.
"""

from __future__ import annotations
import logging
from copy import deepcopy
from random import Random
from typing import Any, Mapping

from .board import Board
from .errors import ErrorCode, GameError
from .history import History, LedgerRecord, Snapshot
from .skill_resolver import SkillResolver
from .skills import SKILLS, SkillLedger, get_skill
from .state import (
    DEFAULT_NAMES,
    SPECTATOR_NAME_PREFIX,
    Color,
    GameEvent,
    MoveEvent,
    Participant,
    Phase,
    Placement,
    Role,
    SkillEvent,
    SkillPayload,
    SystemEvent,
)
from .turns import TurnController
from .views import (
    EventView,
    FreezeView,
    JoinResult,
    MoveEventView,
    PlacementView,
    PlayerInfo,
    PlayersView,
    SkillEventView,
    SkillsView,
    SkillView,
    StateView,
    StatusView,
    SystemEventView,
)

logger = logging.getLogger(__name__)


def _fresh_ledgers() -> dict[Color, SkillLedger]:
    return {Color.BLACK: SkillLedger(), Color.WHITE: SkillLedger()}


class GameSession:
    """
    One running match.

    Usage:
        session = GameSession("room-1", rng=Random(7))
        session.attach("p1", "Alice")      # Black
        session.attach("p2", "Bob")        # White
        state = session.place_stone("p1", 7, 7)
        state = session.apply_skill("p2", "flying-sand", {"positions": [{"x": 7, "y": 7}]})
    """

    def __init__(self, session_id: str, rng: Random | None = None):
        self.id = session_id

        self.board = Board()
        self.turns = TurnController()
        self.ledgers = _fresh_ledgers()
        self.history = History()
        self.resolver = SkillResolver(rng=rng if rng is not None else Random())

        self.winner: Color | None = None
        self.last_event: GameEvent | None = None
        self.last_placement: Placement | None = None

        self.participants: dict[str, Participant] = {}
        self.seats: dict[Color, str | None] = {Color.BLACK: None, Color.WHITE: None}
        self.spectators: set[str] = set()

        self.record_snapshot("init")

    # =========================================================================
    # Participants
    # =========================================================================

    def attach(self, participant_id: str, display_name: str | None = None) -> JoinResult:
        """
        Seat a participant.

        The first free color slot (Black, then White) is taken; once both
        are filled, joiners become spectators. Re-attaching an id that is
        already present keeps its existing seat.
        """
        participant = self.participants.get(participant_id)
        if participant is None:
            participant = self._admit(participant_id, display_name)

        return JoinResult(
            role=participant.role,
            color=participant.color,
            display_name=participant.display_name,
            state=self.serialize(),
        )

    def _admit(self, participant_id: str, display_name: str | None) -> Participant:
        color = next((c for c in Color if self.seats[c] is None), None)
        name = (display_name or "").strip()

        if color is not None:
            participant = Participant(
                participant_id=participant_id,
                role=Role.PLAYER,
                color=color,
                display_name=name or DEFAULT_NAMES[color],
            )
            self.seats[color] = participant_id
        else:
            participant = Participant(
                participant_id=participant_id,
                role=Role.SPECTATOR,
                display_name=name or f"{SPECTATOR_NAME_PREFIX}-{len(self.spectators) + 1}",
            )
            self.spectators.add(participant_id)

        self.participants[participant_id] = participant
        logger.info(
            "Session %s: %s joined as %s%s",
            self.id, participant_id, participant.role.value,
            f" ({participant.color.value})" if participant.color else "",
        )
        return participant

    def detach(self, participant_id: str) -> None:
        """Remove a participant; a freed seat is not handed to a spectator."""
        participant = self.participants.pop(participant_id, None)
        if participant is None:
            return

        if participant.is_player and participant.color is not None:
            if self.seats[participant.color] == participant_id:
                self.seats[participant.color] = None
        else:
            self.spectators.discard(participant_id)
        logger.info("Session %s: %s left", self.id, participant_id)

    def is_empty(self) -> bool:
        return not self.participants

    def get_participant(self, participant_id: str) -> Participant | None:
        return self.participants.get(participant_id)

    @property
    def phase(self) -> Phase:
        if self.winner is not None:
            return Phase.FINISHED
        if all(self.seats[color] for color in Color):
            return Phase.PLAYING
        return Phase.WAITING

    def can_act(self, participant_id: str) -> Participant:
        return self.turns.can_act(
            self.participants.get(participant_id),
            finished=self.winner is not None,
        )

    # =========================================================================
    # Operations
    # =========================================================================

    def place_stone(self, participant_id: str, x: Any, y: Any) -> StateView:
        player = self.can_act(participant_id)
        color = player.color

        win = self.board.place_stone(color, x, y)
        self.turns.turn_number += 1
        self.last_placement = Placement(x=x, y=y, color=color, by_skill=False)

        skipped: list[Color] = []
        if win:
            self.declare_winner(color)
        else:
            skipped = self.turns.advance_turn(self.ledgers.values())

        self.last_event = MoveEvent(x=x, y=y, color=color, win=win, skipped=tuple(skipped))
        logger.debug("Session %s: %s placed at (%d, %d)", self.id, color.value, x, y)

        self.record_snapshot("move")
        return self.serialize()

    def apply_skill(
        self,
        participant_id: str,
        skill_id: str | None,
        payload: SkillPayload | Mapping[str, Any] | None = None,
    ) -> StateView:
        """
        Cast a skill for the participant's color.

        Validates the caster, looks the skill up, rejects spent or cooling
        skills, then resolves the effect. A skill that consumes the turn
        advances it unless the cast produced a winner.
        """
        if not skill_id:
            raise GameError("A skill id is required", ErrorCode.MISSING_SKILL_ID)

        player = self.can_act(participant_id)
        color = player.color

        skill = get_skill(skill_id)
        if skill is None:
            raise GameError(f"Unknown skill: {skill_id}", ErrorCode.UNKNOWN_SKILL)

        ledger = self.ledgers[color]
        if ledger.is_used(skill.id):
            raise GameError("This skill has already been used", ErrorCode.SKILL_ALREADY_USED)
        if ledger.remaining(skill.id) > 0:
            raise GameError("This skill is still cooling down", ErrorCode.SKILL_ON_COOLDOWN)

        if not isinstance(payload, SkillPayload):
            payload = SkillPayload.from_mapping(payload)

        outcome = self.resolver.resolve(self, color, skill, payload)

        # Undo/restore replace the ledgers, so look the caster's up again.
        self.ledgers[color].mark_used(skill.id)

        skipped: list[Color] = []
        if outcome.turn_consumed and self.winner is None:
            skipped = self.turns.advance_turn(self.ledgers.values())

        self.last_event = SkillEvent(
            skill_id=outcome.event.skill_id,
            actor=outcome.event.actor,
            details=outcome.event.details,
            skipped=tuple(skipped),
        )
        logger.debug("Session %s: %s cast %s", self.id, color.value, skill.id)

        self.record_snapshot("skill", {"skillId": skill.id})
        return self.serialize()

    def force_restart(self) -> StateView:
        """Start a new game with the same participants and seats."""
        self.board = Board()
        self.turns.reset()
        self.ledgers = _fresh_ledgers()
        self.winner = None
        self.last_placement = None
        self.last_event = SystemEvent(action="restart")
        self.history.clear()
        self.record_snapshot("restart")
        logger.info("Session %s: restarted", self.id)
        return self.serialize()

    def declare_winner(self, color: Color) -> None:
        """Set the winner; an existing winner is never replaced."""
        if self.winner is None:
            self.winner = color
            logger.info("Session %s: %s wins", self.id, color.value)

    # =========================================================================
    # History
    # =========================================================================

    def record_snapshot(self, action: str, meta: Mapping[str, Any] | None = None) -> Snapshot:
        snapshot = Snapshot(
            action=action,
            board=self.board.freeze(),
            freeze=tuple(self.turns.freeze.items()),
            ledgers=tuple(
                (color, LedgerRecord.capture(ledger))
                for color, ledger in self.ledgers.items()
            ),
            current_turn=self.turns.current_turn,
            turn_number=self.turns.turn_number,
            winner=self.winner,
            last_event=self.last_event,
            last_placement=self.last_placement,
            meta=dict(meta or {}),
        )
        self.history.append(snapshot)
        return snapshot

    def restore_snapshot(self, snapshot: Snapshot) -> None:
        """Replace all game sub-state with a copy of `snapshot`."""
        self.board = Board.from_rows(snapshot.board)
        self.turns.freeze = snapshot.freeze_map()
        self.turns.current_turn = snapshot.current_turn
        self.turns.turn_number = snapshot.turn_number
        self.ledgers = snapshot.ledger_map()
        self.winner = snapshot.winner
        self.last_event = snapshot.last_event
        self.last_placement = snapshot.last_placement

    # =========================================================================
    # Serialization
    # =========================================================================

    def serialize(self) -> StateView:
        """Read-only view of the current state. No side effects."""
        return StateView(
            id=self.id,
            board=self.board.to_lists(),
            current_turn=self.turns.current_turn,
            turn_number=self.turns.turn_number,
            players=PlayersView(
                black=self._player_info(Color.BLACK),
                white=self._player_info(Color.WHITE),
            ),
            freeze=FreezeView(
                black=self.turns.freeze[Color.BLACK],
                white=self.turns.freeze[Color.WHITE],
            ),
            winner=self.winner,
            last_event=_event_view(self.last_event),
            last_placement=PlacementView(
                x=self.last_placement.x,
                y=self.last_placement.y,
                color=self.last_placement.color,
                by_skill=self.last_placement.by_skill,
            ) if self.last_placement else None,
            skills=SkillsView(
                black=self._skill_views(Color.BLACK),
                white=self._skill_views(Color.WHITE),
            ),
            history_length=len(self.history),
            status=StatusView(phase=self.phase, winner=self.winner),
            spectator_count=len(self.spectators),
        )

    def _player_info(self, color: Color) -> PlayerInfo | None:
        participant_id = self.seats[color]
        if participant_id is None:
            return None
        participant = self.participants[participant_id]
        return PlayerInfo(id=participant_id, display_name=participant.display_name)

    def _skill_views(self, color: Color) -> list[SkillView]:
        ledger = self.ledgers[color]
        views = []
        for skill in SKILLS:
            remaining = ledger.remaining(skill.id)
            used = ledger.is_used(skill.id)
            views.append(SkillView(
                id=skill.id,
                name=skill.name,
                description=skill.description,
                cooldown=skill.cooldown,
                remaining_cooldown=0 if used else max(0, remaining),
                used=used,
                available=not used and remaining <= 0,
            ))
        return views


def _event_view(event: GameEvent | None) -> EventView | None:
    if isinstance(event, MoveEvent):
        return MoveEventView(
            x=event.x, y=event.y, color=event.color, win=event.win,
            skipped=list(event.skipped),
        )
    if isinstance(event, SkillEvent):
        return SkillEventView(
            skill_id=event.skill_id,
            actor=event.actor,
            details=deepcopy(dict(event.details)),
            skipped=list(event.skipped),
        )
    if isinstance(event, SystemEvent):
        return SystemEventView(action=event.action)
    return None
