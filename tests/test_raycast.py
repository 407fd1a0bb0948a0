import math

import pytest

from cubcaster.grid import SCREEN_HEIGHT, TILE_SIZE, Direction, Grid
from cubcaster.player import Player, distance
from cubcaster.raycast import (
    cast_all,
    cast_ray,
    horizontal_hit,
    vertical_hit,
    wall_slice,
)

ROOM = [
    "11111",
    "10001",
    "10N01",
    "10001",
    "11111",
]


@pytest.fixture
def grid():
    return Grid(ROOM)


@pytest.fixture
def player(grid):
    return Player.spawn(grid)


def test_horizontal_hit_south(grid, player):
    x, y, facing_up = horizontal_hit(grid, player, math.pi / 2)
    assert facing_up is False
    assert y % TILE_SIZE == pytest.approx(0)
    assert x == pytest.approx(player.x)
    assert grid.cell(int(x // TILE_SIZE), int(y // TILE_SIZE)) == "1"


def test_horizontal_hit_north(grid, player):
    x, y, facing_up = horizontal_hit(grid, player, 3 * math.pi / 2)
    assert facing_up is True
    assert y % TILE_SIZE == pytest.approx(0)
    assert grid.cell(int(x // TILE_SIZE), int(y // TILE_SIZE) - 1) == "1"
    assert y < player.y


def test_vertical_hit_east(grid, player):
    x, y, facing_left = vertical_hit(grid, player, 0.0)
    assert facing_left is False
    assert y == pytest.approx(player.y)
    assert grid.cell(int(x // TILE_SIZE), int(y // TILE_SIZE)) == "1"


def test_vertical_hit_west(grid, player):
    x, y, facing_left = vertical_hit(grid, player, math.pi)
    assert facing_left is True
    assert x < player.x
    assert grid.cell(int(x // TILE_SIZE) - 1, int(y // TILE_SIZE)) == "1"


@pytest.mark.parametrize(
    "angle, face",
    [
        (math.pi / 2, Direction.SO),
        (3 * math.pi / 2, Direction.NO),
        (0.0, Direction.EA),
        (math.pi, Direction.WE),
    ],
)
def test_cast_ray_faces(grid, player, angle, face):
    player.rotation_angle = angle
    hit = cast_ray(grid, player, angle)
    assert hit.face is face
    assert hit.distance == pytest.approx(distance(player.x, player.y, hit.x, hit.y))
    assert 0 <= hit.texture_x < TILE_SIZE


def test_cast_ray_south_distance(grid, player):
    player.rotation_angle = math.pi / 2
    hit = cast_ray(grid, player, math.pi / 2)
    assert hit.vertical is False
    assert hit.distance == pytest.approx(hit.y - player.y)


def test_fisheye_correction_shortens(grid, player):
    player.rotation_angle = 0.0
    angle = 0.3
    hit = cast_ray(grid, player, angle)
    raw = distance(player.x, player.y, hit.x, hit.y)
    assert hit.distance == pytest.approx(raw * math.cos(angle))
    assert hit.distance < raw


def test_wall_slice_symmetry_and_clamp():
    near = wall_slice(1.0, math.pi / 3)
    assert near.height == SCREEN_HEIGHT
    assert near.exact_height > SCREEN_HEIGHT
    assert near.top + near.bottom == SCREEN_HEIGHT
    far = wall_slice(500.0, math.pi / 3)
    assert far.height < near.height
    assert far.top + far.bottom == SCREEN_HEIGHT
    assert far.bottom - far.top <= far.height


def test_wall_slice_closer_is_taller():
    heights = [wall_slice(d, math.pi / 3).exact_height for d in (50, 100, 200, 400)]
    assert heights == sorted(heights, reverse=True)


def test_cast_all(grid, player):
    hits = cast_all(grid, player, 64)
    assert len(hits) == 64
    limit = distance(TILE_SIZE, TILE_SIZE, 4 * TILE_SIZE, 4 * TILE_SIZE)
    for hit in hits:
        assert math.isfinite(hit.distance)
        assert 0 < hit.distance <= limit
        assert 0 <= hit.texture_x < TILE_SIZE


def test_cast_all_facing_north_sees_north_wall(grid, player):
    hits = cast_all(grid, player, 9)
    assert hits[len(hits) // 2].face is Direction.NO