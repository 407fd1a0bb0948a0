"""The tile map of a scene and its validity rules."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence

from .errors import CubError

TILE_SIZE = 60
SCREEN_WIDTH = 1500
SCREEN_HEIGHT = 1000
MINIMAP_SCALE = 0.2

HEADER_LINES = 6
_VALID_CHARS = frozenset("01NSEW ")
_OPEN_CHARS = frozenset("0NSEW")


class Direction(enum.Enum):
    """The direction the player faces at the start."""

    NO = "N"
    SO = "S"
    WE = "W"
    EA = "E"

    @property
    def char(self) -> str:
        return self.value


_PLAYER_CHARS = frozenset(direction.char for direction in Direction)


class Grid:
    """A rectangular-ish map of characters, one string per row."""

    def __init__(self, rows: Iterable[str]) -> None:
        self.rows: tuple[str, ...] = tuple(rows)

    def __repr__(self) -> str:
        return f"Grid({list(self.rows)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.rows == other.rows

    def __hash__(self) -> int:
        return hash(self.rows)

    @property
    def width(self) -> int:
        """Length of the longest row."""
        return max((len(row) for row in self.rows), default=0)

    @property
    def height(self) -> int:
        """Number of rows."""
        return len(self.rows)

    def cell(self, x: int, y: int) -> str:
        """The character at column ``x`` of row ``y``; a space outside the map."""
        if 0 <= y < len(self.rows):
            row = self.rows[y]
            if 0 <= x < len(row):
                return row[x]
        return " "

    def player_direction(self) -> Direction | None:
        """Direction of the last player mark in reading order, if any."""
        found = None
        for row in self.rows:
            for char in row:
                if char in _PLAYER_CHARS:
                    found = Direction(char)
        return found

    def count(self, char: str) -> int:
        """How many cells hold ``char``."""
        return sum(row.count(char) for row in self.rows)

    def _is_open_neighbour(self, x: int, y: int) -> bool:
        row = self.rows[y]
        if x < 0 or x >= len(row):
            return True
        return row[x] == " "

    def is_closed(self) -> bool:
        """True when every floor or player cell is enclosed by walls."""
        height = self.height
        for y, row in enumerate(self.rows):
            for x, char in enumerate(row):
                if char not in _OPEN_CHARS:
                    continue
                if y - 1 < 0 or y + 1 >= height:
                    return False
                neighbours = ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1))
                if any(self._is_open_neighbour(nx, ny) for nx, ny in neighbours):
                    return False
        return True

    def has_valid_chars(self) -> bool:
        """True when only map characters appear and exactly one player is set."""
        players = 0
        for row in self.rows:
            for char in row:
                if char not in _VALID_CHARS:
                    return False
                if char in _PLAYER_CHARS:
                    players += 1
        return players == 1

    def validate(self) -> None:
        """Raise CubError unless the map is closed and well formed."""
        if not self.is_closed() or not self.has_valid_chars():
            raise CubError("ERROR : Invalid MAP")


def extract_grid(lines: Sequence[str]) -> Grid:
    """Build the grid from the scene lines that follow the six header lines."""
    if len(lines) < HEADER_LINES:
        raise CubError("Invalid Param")
    return Grid(lines[HEADER_LINES:])