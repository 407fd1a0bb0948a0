import numpy as np
import pytest
from PIL import Image

from cubcaster.app import Game, check_size, main
from cubcaster.colors import Color
from cubcaster.errors import CubError
from cubcaster.grid import SCREEN_HEIGHT, SCREEN_WIDTH, TILE_SIZE, Direction, Grid
from cubcaster.player import ROTATION_STEP, Key, Player
from cubcaster.render import Texture, pack_rgba
from cubcaster.scene import Scene

GRID = Grid(["11111", "10001", "10N01", "10001", "11111"])
COLORS = {
    Direction.NO: pack_rgba(200, 0, 0, 255),
    Direction.SO: pack_rgba(0, 200, 0, 255),
    Direction.WE: pack_rgba(0, 0, 200, 255),
    Direction.EA: pack_rgba(200, 200, 0, 255),
}


def make_game():
    textures = {
        d: Texture(TILE_SIZE, TILE_SIZE, np.full(TILE_SIZE * TILE_SIZE, c, dtype=np.uint32))
        for d, c in COLORS.items()
    }
    scene = Scene(floor=Color(1, 1, 1), ceiling=Color(2, 2, 2), grid=GRID)
    return Game(scene, textures)


def write_scene(tmp_path, rows, texture_paths):
    header = [f"{d.name} {texture_paths[d]}" for d in Direction]
    header += ["F 220,100,0", "C 225,30,0"]
    path = tmp_path / "map.cub"
    path.write_text("\n".join(header + rows) + "\n")
    return str(path)


def png_paths(tmp_path):
    paths = {}
    for d in Direction:
        path = tmp_path / f"{d.name}.png"
        Image.new("RGBA", (4, 4), (5, 6, 7, 255)).save(path)
        paths[d] = str(path)
    return paths


def test_check_size_too_wide():
    with pytest.raises(CubError, match="Invalid width or height"):
        check_size(Grid(["1" * (SCREEN_WIDTH + 1)]))


def test_check_size_too_tall():
    with pytest.raises(CubError, match="Invalid width or height"):
        check_size(Grid(["1"] * (SCREEN_HEIGHT + 1)))


def test_game_spawns_player():
    game = make_game()
    assert game.player == Player.spawn(GRID)
    assert (game.mouse_x, game.mouse_y) == (0, 0)


def test_escape_stops_game():
    game = make_game()
    assert game.on_key(Key.ESCAPE) is False
    assert game.running is False


def test_right_key_turns_and_draws():
    game = make_game()
    before = game.player.rotation_angle
    assert game.on_key(Key.RIGHT) is True
    assert game.player.rotation_angle == pytest.approx(before + ROTATION_STEP)
    middle = {int(v) for v in game.view.pixels[SCREEN_HEIGHT // 2]}
    assert middle <= set(COLORS.values())


def test_mouse_moves_turn_view():
    game = make_game()
    before = game.player.rotation_angle
    game.on_mouse(10, 5)
    assert game.player.rotation_angle == pytest.approx(before + ROTATION_STEP)
    assert (game.mouse_x, game.mouse_y) == (10, 5)
    game.on_mouse(3, 0)
    assert game.player.rotation_angle == pytest.approx(before)
    assert game.mouse_x == 3


def test_mouse_without_sideways_motion_keeps_angle():
    game = make_game()
    before = game.player.rotation_angle
    game.on_mouse(0, 40)
    assert game.player.rotation_angle == before
    assert game.mouse_y == 0


def test_draw_fills_minimap():
    game = make_game()
    game.draw()
    assert game.minimap.get_pixel(0, 0) == pack_rgba(0, 0, 0, 255)


def test_main_wrong_arguments(capsys):
    assert main([]) == 1
    assert "Error\nWrong number of arguments" in capsys.readouterr().err


def test_main_leading_blank_line_exits_quietly(tmp_path, capsys):
    path = tmp_path / "blank.cub"
    path.write_text("\nNO a.png\n")
    assert main([str(path)]) == 0
    assert capsys.readouterr().err == ""


def test_main_missing_textures(tmp_path, capsys):
    missing = {d: str(tmp_path / f"none_{d.name}.png") for d in Direction}
    path = write_scene(tmp_path, ["111", "1N1", "111"], missing)
    assert main([path]) == 1
    assert "Texture not found" in capsys.readouterr().err


def test_main_map_too_wide(tmp_path, capsys):
    wide = SCREEN_WIDTH + 1
    rows = ["1" * wide, "1N" + "0" * (wide - 3) + "1", "1" * wide]
    path = write_scene(tmp_path, rows, png_paths(tmp_path))
    assert main([path]) == 1
    assert "Invalid width or height" in capsys.readouterr().err