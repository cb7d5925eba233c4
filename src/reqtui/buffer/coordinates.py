"""Two-dimensional cursor coordinates and their clamping rules."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence


def clamp_column(x: int, max_x: int) -> int:
    return min(max(x, 0), max_x)


def clamp_line(y: int, max_y: int) -> int:
    return min(max(y, 0), max_y)


@dataclass(frozen=True, slots=True, order=True)
class Coordinates:
    """Cursor position as ``(x, y)``.

    ``x`` counts characters (Unicode scalar values) from the start of line
    ``y``. A column equal to the line length is the append position.
    """

    x: int = 0
    y: int = 0

    def with_x(self, x: int) -> "Coordinates":
        return replace(self, x=x)

    def with_y(self, y: int) -> "Coordinates":
        return replace(self, y=y)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def clamped(self, lines: Sequence[str]) -> "Coordinates":
        """Return the nearest valid position for text split into ``lines``."""

        if not lines:
            return Coordinates(0, 0)
        y = clamp_line(self.y, len(lines) - 1)
        x = clamp_column(self.x, len(lines[y]))
        if x == self.x and y == self.y:
            return self
        return Coordinates(x, y)


ORIGIN = Coordinates()

__all__ = ["Coordinates", "ORIGIN", "clamp_column", "clamp_line"]
