"""Casting rays through the grid to find wall hits and wall slice sizes."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .grid import SCREEN_HEIGHT, SCREEN_WIDTH, TILE_SIZE, Direction, Grid
from .player import Player, blocks_ray, distance, normalize_angle

_INT_MAX = 2**31 - 1


def _divide(num: float, den: float) -> float:
    if den == 0:
        if num == 0:
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den


@dataclass(frozen=True)
class Hit:
    """Where a ray met a wall, and the fisheye-corrected distance to it."""

    x: float
    y: float
    distance: float
    vertical: bool
    facing_up: bool
    facing_left: bool

    @property
    def face(self) -> Direction:
        """Which wall texture the hit shows."""
        if self.vertical:
            return Direction.WE if self.facing_left else Direction.EA
        return Direction.NO if self.facing_up else Direction.SO

    @property
    def texture_x(self) -> int:
        """Column within a tile where the ray landed."""
        along = self.y if self.vertical else self.x
        if not math.isfinite(along):
            return 0
        return int(math.fmod(int(along), TILE_SIZE))


@dataclass(frozen=True)
class WallSlice:
    """Vertical extent of a wall column on screen."""

    exact_height: int
    height: int
    top: int
    bottom: int


def horizontal_hit(grid: Grid, player: Player, angle: float) -> tuple[float, float, bool]:
    """First wall crossing on a horizontal grid line: ``(x, y, facing_up)``."""
    facing_up = math.pi < angle < 2 * math.pi
    sign = -1 if facing_up else 1
    tangent = math.tan(angle)
    y = math.floor(player.y / TILE_SIZE) * TILE_SIZE
    if not facing_up:
        y += TILE_SIZE
    x = player.x + _divide(y - player.y, tangent)
    x_step = _divide(sign * TILE_SIZE, tangent)
    while not (
        blocks_ray(grid, x, y) or (facing_up and blocks_ray(grid, x, y - TILE_SIZE))
    ):
        x += x_step
        y += sign * TILE_SIZE
    return x, y, facing_up


def vertical_hit(grid: Grid, player: Player, angle: float) -> tuple[float, float, bool]:
    """First wall crossing on a vertical grid line: ``(x, y, facing_left)``."""
    angle = normalize_angle(angle)
    facing_left = math.pi / 2 < angle < 1.5 * math.pi
    sign = -1 if facing_left else 1
    tangent = math.tan(angle)
    x = math.ceil(player.x / TILE_SIZE) * TILE_SIZE
    if facing_left:
        x -= TILE_SIZE
    y = player.y - (player.x - x) * tangent
    while not (
        blocks_ray(grid, x, y) or (facing_left and blocks_ray(grid, x - TILE_SIZE, y))
    ):
        x += sign * TILE_SIZE
        y += sign * TILE_SIZE * tangent
    return x, y, facing_left


def cast_ray(grid: Grid, player: Player, angle: float) -> Hit:
    """Cast one ray and keep the nearer of the two grid crossings."""
    hx, hy, facing_up = horizontal_hit(grid, player, angle)
    vx, vy, facing_left = vertical_hit(grid, player, normalize_angle(angle))
    dis_v = distance(player.x, player.y, vx, vy)
    dis_h = distance(player.x, player.y, hx, hy)
    if dis_v > dis_h:
        x, y, raw, vertical = hx, hy, dis_h, False
    else:
        x, y, raw, vertical = vx, vy, dis_v, True
    corrected = raw * math.cos(angle - player.rotation_angle)
    return Hit(x, y, corrected, vertical, facing_up, facing_left)


def wall_slice(distance: float, fov: float) -> WallSlice:
    """Projected wall height for a hit at ``distance``, clipped to the screen."""
    if distance <= 0 or not math.isfinite(distance):
        exact = _INT_MAX if not distance > 0 else 0
    else:
        projected = (TILE_SIZE / distance) * (SCREEN_WIDTH // 2) / math.tan(fov / 2)
        exact = int(min(projected, _INT_MAX))
    height = min(exact, SCREEN_HEIGHT)
    half = int(height / 2)
    middle = SCREEN_HEIGHT // 2
    return WallSlice(exact, height, middle - half, middle + half)


def cast_all(grid: Grid, player: Player, count: int = SCREEN_WIDTH) -> list[Hit]:
    """Cast ``count`` rays spread across the player's field of view."""
    angle = normalize_angle(player.rotation_angle - player.fov_angle / 2)
    step = normalize_angle(player.fov_angle / count)
    hits = []
    for _ in range(count):
        hits.append(cast_ray(grid, player, angle))
        angle += step
    return hits