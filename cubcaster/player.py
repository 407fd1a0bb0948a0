"""Player state, movement and the wall checks that constrain it."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from .errors import CubError
from .grid import TILE_SIZE, Direction, Grid

MOVE_SPEED = 18.0
PLAYER_RADIUS = 3.0
ROTATION_STEP = 0.1


def to_radians(degree: float) -> float:
    """Convert an angle in degrees to radians."""
    return degree * math.pi / 180


def normalize_angle(angle: float) -> float:
    """Bring an angle into the range [0, 2*pi)."""
    angle = math.remainder(angle, 2 * math.pi)
    if angle < 0:
        angle += 2 * math.pi
    return angle


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two points."""
    return math.sqrt((x2 - x1) * (x2 - x1) + (y2 - y1) * (y2 - y1))


FIELD_OF_VIEW = to_radians(60)

_START_ANGLES = {
    Direction.NO: to_radians(270),
    Direction.SO: to_radians(90),
    Direction.WE: to_radians(0),
    Direction.EA: to_radians(180),
}


class Key(enum.Enum):
    """Keys the game reacts to."""

    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    W = enum.auto()
    A = enum.auto()
    S = enum.auto()
    D = enum.auto()
    ESCAPE = enum.auto()


# Sign applied to the step and angle offset from the facing direction.
_MOVES = {
    Key.W: (1.0, 0.0),
    Key.S: (-1.0, 0.0),
    Key.A: (1.0, -math.pi / 2),
    Key.D: (1.0, math.pi / 2),
}


def blocks_ray(grid: Grid, x: float, y: float) -> bool:
    """True when the point is a wall or lies outside the map for a ray."""
    if not (math.isfinite(x) and math.isfinite(y)):
        return True
    if (
        x <= 0
        or x >= TILE_SIZE * grid.width
        or y <= 0
        or y >= TILE_SIZE * grid.height
    ):
        return True
    col = math.floor(x / TILE_SIZE)
    row = math.floor(y / TILE_SIZE)
    if col <= 0 or col >= grid.width or row < 0 or row >= grid.height:
        return True
    return grid.cell(col, row) == "1"


def can_move_to(grid: Grid, player: Player, x: float, y: float) -> bool:
    """True when the player may step from its position to ``(x, y)``."""
    if not (math.isfinite(x) and math.isfinite(y)):
        return False
    width_px = grid.width * TILE_SIZE
    height_px = grid.height * TILE_SIZE
    if x < 0 or x > width_px or y < 0 or y > height_px:
        return False
    if grid.cell(int(x / TILE_SIZE), int(player.y / TILE_SIZE)) == "1":
        return False
    if grid.cell(int(player.x / TILE_SIZE), int(y / TILE_SIZE)) == "1":
        return False
    col = int(x + 1) // TILE_SIZE
    row = int(y + 1) // TILE_SIZE
    if col <= 0 or col >= width_px or row <= 0 or row >= height_px:
        return False
    return grid.cell(col, row) != "1"


@dataclass
class Player:
    """Position in pixels and viewing angle in radians."""

    x: float
    y: float
    rotation_angle: float
    radius: float = PLAYER_RADIUS
    move_speed: float = MOVE_SPEED
    fov_angle: float = FIELD_OF_VIEW

    @classmethod
    def spawn(cls, grid: Grid) -> Player:
        """Place the player at the centre of its start tile, facing its mark."""
        direction = grid.player_direction() or Direction.EA
        mark = direction.char
        for row_index, row in enumerate(grid.rows):
            column = row.find(mark)
            if column >= 0:
                break
        else:
            raise CubError("ERROR : Invalid MAP")
        half = TILE_SIZE // 2
        return cls(
            x=float(column * TILE_SIZE + half) + 1,
            y=float(row_index * TILE_SIZE + half) + 1,
            rotation_angle=_START_ANGLES[direction],
        )

    def rotate(self, key: Key) -> None:
        """Turn or snap the view for the arrow keys; other keys do nothing."""
        if key is Key.UP:
            self.rotation_angle = 3 * math.pi / 2
        elif key is Key.DOWN:
            self.rotation_angle = math.pi / 2
        elif key is Key.LEFT:
            self.rotation_angle -= ROTATION_STEP
        elif key is Key.RIGHT:
            self.rotation_angle += ROTATION_STEP

    def move(self, key: Key, grid: Grid) -> bool:
        """Step for W, A, S or D unless a wall is in the way; True if moved."""
        if key not in _MOVES:
            return False
        sign, offset = _MOVES[key]
        angle = self.rotation_angle + offset
        new_x = self.x + sign * self.move_speed * math.cos(angle)
        new_y = self.y + sign * self.move_speed * math.sin(angle)
        if not can_move_to(grid, self, new_x, new_y):
            return False
        self.x = new_x
        self.y = new_y
        return True

    def handle_key(self, key: Key, grid: Grid) -> bool:
        """React to a key press; False means the game should close."""
        if key is Key.ESCAPE:
            return False
        if key in _MOVES:
            self.move(key, grid)
        else:
            self.rotate(key)
        return True