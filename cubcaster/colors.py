"""Parsing of floor and ceiling colour values such as ``220,100,0``."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import CubError

_WHITESPACE = " \t\n\v\f\r"


@dataclass(frozen=True)
class Color:
    """An RGB colour with components in 0..255."""

    red: int
    green: int
    blue: int

    def to_rgba(self, alpha: int = 255) -> int:
        """Pack the colour into a 32-bit RRGGBBAA integer."""
        return (
            (self.red & 0xFF) << 24
            | (self.green & 0xFF) << 16
            | (self.blue & 0xFF) << 8
            | (alpha & 0xFF)
        )


def _skip_space(text: str) -> str:
    return text.lstrip(_WHITESPACE)


def _leading_digits(text: str) -> str:
    digits = []
    for char in text:
        if not ("0" <= char <= "9"):
            break
        digits.append(char)
    return "".join(digits)


def lenient_atoi(text: str) -> int:
    """Read an optionally signed integer prefix, ignoring what follows it."""
    rest = _skip_space(text)
    sign = 1
    if rest[:1] in ("+", "-"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    digits = _leading_digits(rest)
    return sign * int(digits) if digits else 0


def parse_component(text: str) -> int:
    """Read one colour component; signs and trailing letters are rejected."""
    rest = _skip_space(text)
    if rest[:1] in ("+", "-"):
        raise CubError("color is not valid")
    digits = _leading_digits(rest)
    tail = rest[len(digits):]
    if tail and tail[0].isascii() and tail[0].isalpha():
        raise CubError("color is not valid")
    return int(digits) if digits else 0


def parse_color(value: str) -> Color:
    """Parse ``R,G,B`` with exactly two commas and components in 0..255."""
    for char in value:
        if char != "," and not ("0" <= char <= "9"):
            raise CubError("ERROR : Invalid Char in Colors")
    if value.count(",") != 2:
        raise CubError("ERROR : Wrong number of commas")
    fields = [field for field in value.split(",") if field]
    if len(fields) < 3:
        raise CubError("ERROR : Wrong color format or range")
    for field in fields[:3]:
        if not 0 <= parse_component(field) <= 255:
            raise CubError("ERROR : Wrong color format or range")
    red, green, blue = (lenient_atoi(field) for field in fields[:3])
    return Color(red, green, blue)