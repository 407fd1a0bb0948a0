"""The error raised for any invalid scene, map or argument."""

from __future__ import annotations

import sys


class CubError(Exception):
    """A fatal problem with the scene description or the program's input."""

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    def report(self) -> None:
        """Write the error to standard error in the program's format."""
        sys.stderr.write("Error\n")
        sys.stderr.write(f"{self.message}\n")
        sys.stderr.flush()