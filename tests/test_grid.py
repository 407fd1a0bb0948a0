import pytest

from cubcaster.errors import CubError
from cubcaster.grid import Direction, Grid, extract_grid

CLOSED = ["111", "1N1", "111"]


def test_closed_map_is_valid():
    grid = Grid(CLOSED)
    assert grid.is_closed()
    assert grid.has_valid_chars()
    grid.validate()
    assert grid.player_direction() is Direction.NO


def test_dimensions():
    grid = Grid(["1", "111", "11"])
    assert grid.width == 3
    assert grid.height == 3


def test_cell_inside_and_outside():
    grid = Grid(CLOSED)
    assert grid.cell(1, 1) == "N"
    assert grid.cell(5, 1) == " "
    assert grid.cell(-1, 0) == " "
    assert grid.cell(0, 9) == " "


def test_floor_at_row_end_is_open():
    assert not Grid(["111", "1N0", "111"]).is_closed()


def test_player_on_top_row_is_open():
    assert not Grid(["1N1", "111"]).is_closed()


def test_floor_next_to_space_is_open():
    assert not Grid(["1111", "10 1", "1N11", "1111"]).is_closed()


def test_invalid_character():
    assert not Grid(["111", "1X1", "111"]).has_valid_chars()


def test_two_players_rejected():
    grid = Grid(["1111", "1NS1", "1111"])
    assert grid.is_closed()
    assert not grid.has_valid_chars()
    with pytest.raises(CubError) as info:
        grid.validate()
    assert info.value.message == "ERROR : Invalid MAP"


def test_no_player_rejected():
    assert not Grid(["111", "101", "111"]).has_valid_chars()


def test_count_and_direction():
    grid = Grid(["11111", "10W01", "11111"])
    assert grid.count("0") == 2
    assert grid.count("1") == grid.width * grid.height - 3
    assert grid.player_direction() is Direction.WE


def test_player_direction_none_without_player():
    assert Grid(["111"]).player_direction() is None


@pytest.mark.parametrize(
    "char, expected",
    [("N", Direction.NO), ("S", Direction.SO), ("W", Direction.WE), ("E", Direction.EA)],
)
def test_direction_chars(char, expected):
    found = Grid(["111", f"1{char}1", "111"]).player_direction()
    assert found is expected
    assert found.char == char


def test_extract_grid_skips_header():
    header = ["NO a", "SO b", "WE c", "EA d", "F 1,2,3", "C 4,5,6"]
    grid = extract_grid(header + CLOSED)
    assert grid == Grid(CLOSED)


def test_extract_grid_too_short():
    with pytest.raises(CubError) as info:
        extract_grid(["NO a", "SO b"])
    assert info.value.message == "Invalid Param"


def test_extract_grid_header_only_is_empty():
    assert extract_grid(["x"] * 6).height == 0