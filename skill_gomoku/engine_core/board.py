"""
Board - Fixed-size stone grid with five-in-a-row detection.

Cells are addressed as (x, y) and stored row-major (`rows[y][x]`).
A cell holds a Color or None when empty.
"""

from __future__ import annotations
from typing import Any, Iterator

from .errors import ErrorCode, GameError
from .state import Color

BOARD_SIZE = 15
WIN_LENGTH = 5

# Horizontal, vertical and both diagonals
AXES = ((1, 0), (0, 1), (1, 1), (1, -1))

Rows = tuple[tuple["Color | None", ...], ...]


class Board:
    """A square board of stones."""

    def __init__(self, size: int = BOARD_SIZE):
        self.size = size
        self._rows: list[list[Color | None]] = [
            [None] * size for _ in range(size)
        ]

    @classmethod
    def from_rows(cls, rows: Rows) -> Board:
        """Rebuild a board from a frozen row tuple."""
        board = cls(size=len(rows))
        board._rows = [list(row) for row in rows]
        return board

    def freeze(self) -> Rows:
        """Immutable copy of the cells."""
        return tuple(tuple(row) for row in self._rows)

    def to_lists(self) -> list[list[Color | None]]:
        return [list(row) for row in self._rows]

    def validate_coordinate(self, x: Any, y: Any) -> None:
        """Raise unless (x, y) is an integral in-range coordinate."""
        if not is_int(x) or not is_int(y):
            raise GameError("Coordinates must be integers", ErrorCode.INVALID_COORDINATE)
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise GameError("Coordinates are outside the board", ErrorCode.OUT_OF_RANGE)

    def get(self, x: int, y: int) -> Color | None:
        return self._rows[y][x]

    def is_empty_at(self, x: int, y: int) -> bool:
        return self._rows[y][x] is None

    def set(self, x: int, y: int, color: Color | None) -> None:
        self._rows[y][x] = color

    def place_stone(self, color: Color, x: Any, y: Any) -> bool:
        """
        Place a stone and report whether it completes a line.

        Raises INVALID_COORDINATE / OUT_OF_RANGE / CELL_OCCUPIED without
        touching the board.
        """
        self.validate_coordinate(x, y)
        if not self.is_empty_at(x, y):
            raise GameError("That cell is already occupied", ErrorCode.CELL_OCCUPIED)
        self._rows[y][x] = color
        return self.check_win(x, y, color)

    def clear(self) -> None:
        for row in self._rows:
            for x in range(self.size):
                row[x] = None

    def cells(self, color: Color | None) -> Iterator[tuple[int, int]]:
        """Yield (x, y) of every cell holding `color` (None for empty)."""
        for y, row in enumerate(self._rows):
            for x, cell in enumerate(row):
                if cell is color:
                    yield x, y

    def empty_cells(self) -> list[tuple[int, int]]:
        return list(self.cells(None))

    def count(self, color: Color) -> int:
        return sum(1 for _ in self.cells(color))

    def check_win(self, x: int, y: int, color: Color) -> bool:
        """True when the stone at (x, y) sits on a line of WIN_LENGTH or more."""
        return any(
            self.line_length(x, y, color, dx, dy) >= WIN_LENGTH
            for dx, dy in AXES
        )

    def line_length(self, x: int, y: int, color: Color, dx: int, dy: int) -> int:
        """Length of the contiguous `color` line through (x, y) along (dx, dy)."""
        return (
            1
            + self._run(x, y, color, dx, dy)
            + self._run(x, y, color, -dx, -dy)
        )

    def _run(self, x: int, y: int, color: Color, dx: int, dy: int) -> int:
        total = 0
        cx, cy = x + dx, y + dy
        while 0 <= cx < self.size and 0 <= cy < self.size and self._rows[cy][cx] is color:
            total += 1
            cx += dx
            cy += dy
        return total

    def __repr__(self) -> str:
        symbols = {None: ".", Color.BLACK: "X", Color.WHITE: "O"}
        return "\n".join("".join(symbols[c] for c in row) for row in self._rows)


def is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
