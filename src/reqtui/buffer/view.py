"""Read-only buffer snapshots handed to renderers and the transport."""

from __future__ import annotations

from dataclasses import dataclass

from .coordinates import Coordinates


@dataclass(frozen=True, slots=True)
class BufferView:
    """Immutable snapshot describing a buffer at one version."""

    text: str
    cursor: Coordinates
    version: int = 0

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self.text.split("\n"))

    def line_at(self, index: int) -> str:
        lines = self.lines
        if 0 <= index < len(lines):
            return lines[index]
        return ""
