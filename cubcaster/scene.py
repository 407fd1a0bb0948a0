"""Reading and checking a ``.cub`` scene description."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .colors import Color, parse_color
from .errors import CubError
from .grid import Direction, Grid, extract_grid

EXTENSION = ".cub"
DIRECTION_COUNT = 6
_TEXTURE_KEYS = frozenset(direction.name for direction in Direction)
_COLOR_KEYS = frozenset(("F", "C"))


class LeadingBlankLine(Exception):
    """The scene starts with an empty line; the program stops quietly."""


@dataclass
class Scene:
    """A fully parsed scene: wall textures, floor and ceiling colours and map."""

    textures: dict[Direction, str] = field(default_factory=dict)
    floor: Color = Color(0, 0, 0)
    ceiling: Color = Color(0, 0, 0)
    grid: Grid = field(default_factory=lambda: Grid(()))


def check_extension(path: str) -> None:
    """Raise CubError unless ``path`` ends with ``.cub``."""
    if not str(path).endswith(EXTENSION):
        raise CubError("The string does not end with .cub")


def split_words(text: str, sep: str) -> list[str]:
    """Split ``text`` on ``sep``, dropping the empty pieces."""
    return [word for word in text.split(sep) if word]


def trim(text: str, chars: str) -> str:
    """Strip every character of ``chars`` from both ends of ``text``."""
    return text.strip(chars) if chars else text


def parse_directions(lines: Sequence[str]) -> dict[str, str | Color]:
    """Parse the header lines that come before the map.

    Returns the texture paths under ``NO``, ``SO``, ``WE`` and ``EA`` and the
    colours under ``F`` and ``C``.
    """
    trimmed = [trim(line, " \t") for line in lines]
    end = next(
        (index for index, line in enumerate(trimmed) if line.startswith("1")),
        len(trimmed),
    )
    header = trimmed[:end]
    if len(header) != DIRECTION_COUNT:
        raise CubError("ERROR : Wrong number of directions")

    first_chars = Counter(line[:1] for line in header)
    if any(count > 1 for count in first_chars.values()):
        raise CubError("ERROR : Duplicate key")

    entries: dict[str, str | Color] = {}
    for line in header:
        words = split_words(line.replace("\t", " "), " ")
        if len(words) != 2:
            raise CubError("ERROR : Wrong number of directions arguments")
        key, value = words
        if key in _TEXTURE_KEYS:
            entries[key] = value
            continue
        color = parse_color(value)
        if key not in _COLOR_KEYS:
            raise CubError("ERROR : Wrong key")
        entries[key] = color
    return entries


def parse_scene_text(text: str) -> Scene:
    """Parse the whole content of a scene file."""
    if not text:
        raise CubError("ERROR : Empty MAP")
    if text.startswith("\n"):
        raise LeadingBlankLine()

    lines = split_words(text, "\n")
    grid = extract_grid(lines)
    grid.validate()

    entries = parse_directions(lines)
    missing = (_TEXTURE_KEYS | _COLOR_KEYS) - entries.keys()
    if missing:
        raise CubError("ERROR : Wrong key")

    textures = {direction: str(entries[direction.name]) for direction in Direction}
    floor = entries["F"]
    ceiling = entries["C"]
    assert isinstance(floor, Color) and isinstance(ceiling, Color)
    return Scene(textures=textures, floor=floor, ceiling=ceiling, grid=grid)


def load_scene(path: str | Path) -> Scene:
    """Read and parse the scene file at ``path``."""
    check_extension(str(path))
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise CubError("File not found") from exc
    return parse_scene_text(text)


def scene_from_args(args: Sequence[str]) -> Scene:
    """Load the scene named by the single command-line argument."""
    if len(args) != 1:
        raise CubError("Wrong number of arguments")
    return load_scene(args[0])