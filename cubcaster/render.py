"""Drawing of the 3D view, the sky, the minimap and textured wall columns."""

from __future__ import annotations

import math
import random
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from .colors import Color
from .errors import CubError
from .grid import MINIMAP_SCALE, SCREEN_HEIGHT, TILE_SIZE, Direction, Grid
from .player import FIELD_OF_VIEW, Player
from .raycast import Hit, cast_all, wall_slice

STAR_COUNT = 70
STAR_RADIUS = 1


def pack_rgba(r: int, g: int, b: int, a: int) -> int:
    """Pack four channels into a 32-bit RRGGBBAA integer."""
    return ((r << 24) | (g << 16) | (b << 8) | a) & 0xFFFFFFFF


WHITE = pack_rgba(255, 255, 255, 255)
_WALL_TILE = pack_rgba(0, 0, 0, 255)
_FLOOR_TILE = pack_rgba(255, 255, 255, 255)
_PLAYER_DOT = pack_rgba(255, 55, 40, 255)


class Canvas:
    """A width x height image of packed RRGGBBAA pixels, initially transparent."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas dimensions must be positive")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint32)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: float, y: float, color: int) -> None:
        """Set one pixel; coordinates outside the canvas are ignored."""
        x, y = int(x), int(y)
        if self._inside(x, y):
            self.pixels[y, x] = color & 0xFFFFFFFF

    def get_pixel(self, x: int, y: int) -> int:
        """The packed colour at ``(x, y)``."""
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) is outside the canvas")
        return int(self.pixels[y, x])

    def _fill_rect(self, left: int, top: int, right: int, bottom: int, color: int) -> None:
        left, right = max(left, 0), min(right, self.width)
        top, bottom = max(top, 0), min(bottom, self.height)
        if left < right and top < bottom:
            self.pixels[top:bottom, left:right] = color & 0xFFFFFFFF

    def to_rgba_bytes(self) -> bytes:
        """The pixels as a row-major R, G, B, A byte string."""
        return self.pixels.astype(">u4").tobytes()


@dataclass(eq=False)
class Texture:
    """A wall image as a flat row-major array of packed RRGGBBAA pixels."""

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        self.pixels = np.asarray(self.pixels, dtype=np.uint32).reshape(-1)
        if self.width <= 0 or self.height <= 0 or self.pixels.size != self.width * self.height:
            raise ValueError("texture size does not match its pixel data")

    @classmethod
    def load(cls, path: str | Path) -> Texture:
        """Read an image file into a texture."""
        try:
            with Image.open(path) as image:
                rgba = np.asarray(image.convert("RGBA"), dtype=np.uint32)
        except (OSError, ValueError) as exc:
            raise CubError("Texture not found") from exc
        height, width, _ = rgba.shape
        packed = rgba[..., 0] << 24 | rgba[..., 1] << 16 | rgba[..., 2] << 8 | rgba[..., 3]
        return cls(width, height, packed.reshape(-1))

    def color_at(self, x: float, y: float) -> int:
        """Packed colour at texel ``(x, y)``; 0 past the end of the data."""
        index = int(x) + int(y) * self.width
        if 0 <= index < self.pixels.size:
            return int(self.pixels[index])
        return 0

    def _colors_at(self, x: int, ys: np.ndarray) -> np.ndarray:
        index = int(x) + ys.astype(np.int64) * self.width
        inside = (index >= 0) & (index < self.pixels.size)
        colors = np.zeros(index.shape, dtype=np.uint32)
        colors[inside] = self.pixels[index[inside]]
        return colors


def load_textures(paths: Mapping[Direction, str]) -> dict[Direction, Texture]:
    """Load the four wall textures; any missing one is an error."""
    textures = {}
    for direction in (Direction.EA, Direction.WE, Direction.SO, Direction.NO):
        path = paths.get(direction)
        if path is None:
            raise CubError("Texture not found")
        textures[direction] = Texture.load(path)
    return textures


def draw_background(canvas: Canvas, ceiling: Color, floor: Color) -> None:
    """Paint the upper half with the ceiling colour and the rest with the floor."""
    half = canvas.height // 2
    canvas.pixels[:half] = ceiling.to_rgba(255)
    canvas.pixels[half:] = floor.to_rgba(255)


def draw_stars(canvas: Canvas, rng: random.Random) -> list[tuple[int, int]]:
    """Scatter small white stars over the sky; returns their centres."""
    sky = canvas.height // 2
    offsets = [
        (dx, dy)
        for dx in range(-STAR_RADIUS, STAR_RADIUS + 1)
        for dy in range(-STAR_RADIUS, STAR_RADIUS + 1)
        if dx * dx + dy * dy <= STAR_RADIUS * STAR_RADIUS
    ]
    centres = []
    for _ in range(STAR_COUNT):
        x = rng.randrange(canvas.width)
        y = rng.randrange(sky)
        centres.append((x, y))
        for dx, dy in offsets:
            px, py = x + dx, y + dy
            if 0 <= px < canvas.width and 0 <= py < sky:
                canvas.put_pixel(px, py, WHITE)
    return centres


def _tile_span(index: int) -> tuple[int, int]:
    start = int(index * TILE_SIZE * MINIMAP_SCALE)
    stop = math.ceil((index * TILE_SIZE + TILE_SIZE) * MINIMAP_SCALE)
    return start, stop


def draw_minimap(canvas: Canvas, grid: Grid) -> None:
    """Draw walls black and everything else white, scaled down."""
    for y, row in enumerate(grid.rows):
        top, bottom = _tile_span(y)
        for x, char in enumerate(row[: grid.width]):
            left, right = _tile_span(x)
            color = _WALL_TILE if char == "1" else _FLOOR_TILE
            canvas._fill_rect(left, top, right, bottom, color)


def draw_player(canvas: Canvas, player: Player) -> None:
    """Draw the player as a small disc on the minimap."""
    radius = player.radius
    steps = int(math.floor(2 * radius)) + 1
    for i in range(steps):
        x = player.x - radius + i
        for j in range(steps):
            y = player.y - radius + j
            dx, dy = x - player.x, y - player.y
            if dx * dx + dy * dy <= radius * radius:
                canvas.put_pixel(int(x * MINIMAP_SCALE), int(y * MINIMAP_SCALE), _PLAYER_DOT)


def draw_wall_column(canvas: Canvas, column: int, hit: Hit, texture: Texture) -> None:
    """Draw one textured wall column for a ray hit."""
    if not 0 <= column < canvas.width:
        return
    piece = wall_slice(hit.distance, FIELD_OF_VIEW)
    if piece.bottom <= piece.top:
        return
    wall_top = SCREEN_HEIGHT // 2 - piece.exact_height // 2
    step = texture.height / piece.exact_height
    rows = np.arange(max(piece.top, 0), min(piece.bottom, canvas.height))
    if rows.size == 0:
        return
    ytx = (rows - wall_top) * step
    ytx[ytx >= texture.height] = 0
    canvas.pixels[rows, column] = texture._colors_at(hit.texture_x, ytx)


def render_frame(
    view: Canvas,
    minimap: Canvas,
    scene,
    player: Player,
    textures: Mapping[Direction, Texture],
    rng: random.Random,
) -> None:
    """Draw a complete frame: sky, floor, stars, minimap, player and walls."""
    draw_background(view, scene.ceiling, scene.floor)
    draw_stars(view, rng)
    draw_minimap(minimap, scene.grid)
    draw_player(minimap, player)
    for column, hit in enumerate(cast_all(scene.grid, player, view.width)):
        draw_wall_column(view, column, hit, textures[hit.face])