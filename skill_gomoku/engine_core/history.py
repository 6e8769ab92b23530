"""
History - Append-only snapshot store for rewind and restore.

One Snapshot is appended after every board-affecting action. Only undo
and restore truncate, and truncation discards the tail for good (no redo).
History is unbounded for the life of a session.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from .board import Rows
from .skills import SkillLedger
from .state import Color, GameEvent, Placement


@dataclass(frozen=True)
class LedgerRecord:
    """Frozen copy of one SkillLedger."""
    used: frozenset[str]
    cooldowns: tuple[tuple[str, int], ...]

    @classmethod
    def capture(cls, ledger: SkillLedger) -> LedgerRecord:
        return cls(used=frozenset(ledger.used), cooldowns=tuple(ledger.cooldowns.items()))

    def restore(self) -> SkillLedger:
        return SkillLedger(used=set(self.used), cooldowns=dict(self.cooldowns))


@dataclass(frozen=True)
class Snapshot:
    """Full mutable session state at one point in time."""
    action: str
    board: Rows
    freeze: tuple[tuple[Color, int], ...]
    ledgers: tuple[tuple[Color, LedgerRecord], ...]
    current_turn: Color
    turn_number: int
    winner: Color | None
    last_event: GameEvent | None
    last_placement: Placement | None
    meta: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def freeze_map(self) -> dict[Color, int]:
        return dict(self.freeze)

    def ledger_map(self) -> dict[Color, SkillLedger]:
        return {color: record.restore() for color, record in self.ledgers}


class History:
    """Ordered snapshots of one session."""

    def __init__(self):
        self._snapshots: list[Snapshot] = []

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[Snapshot]:
        return iter(self._snapshots)

    def __getitem__(self, index: int) -> Snapshot:
        return self._snapshots[index]

    @property
    def latest(self) -> Snapshot | None:
        return self._snapshots[-1] if self._snapshots else None

    def append(self, snapshot: Snapshot) -> None:
        self._snapshots.append(snapshot)

    def truncate(self, index: int) -> None:
        """Keep snapshots [0..index] inclusive."""
        del self._snapshots[index + 1:]

    def index_for_turn(self, turn_number: int) -> int | None:
        """Index of the first snapshot taken at `turn_number`."""
        for index, snapshot in enumerate(self._snapshots):
            if snapshot.turn_number == turn_number:
                return index
        return None

    def clear(self) -> None:
        self._snapshots.clear()
