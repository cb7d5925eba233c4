"""Editable text buffer with single-line and multi-line edit paths.

A buffer owns its text and one cursor. Every edit goes through
``TextBuffer.apply`` which picks an implementation once, based on whether the
text currently spans more than one line:

* ``apply_single_line`` works on the flat string and never builds a list of
  lines.
* ``apply_multi_line`` splits the text, rewrites only the line under the
  cursor (or the two lines being joined) and joins the result.

Both share the signature ``(command, text, cursor) -> (text, cursor)`` and
both are total: a cursor that is out of range on entry is clamped first, and
no command raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple, cast

from .coordinates import Coordinates, clamp_column, clamp_line
from .view import BufferView

NEWLINE = "\n"


class EditOp(str, Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    LINE_START = "line_start"
    LINE_END = "line_end"
    INSERT_CHAR = "insert_char"
    INSERT_NEWLINE = "insert_newline"
    DELETE_BEFORE = "delete_before"


@dataclass(frozen=True, slots=True)
class EditCommand:
    """One decoded edit request. ``char`` is only used by ``INSERT_CHAR``."""

    op: EditOp
    char: Optional[str] = None

    def __post_init__(self) -> None:
        if self.op is EditOp.INSERT_CHAR:
            if self.char is None or len(self.char) != 1:
                raise ValueError("INSERT_CHAR requires exactly one character")
        elif self.char is not None:
            raise ValueError(f"{self.op.value} does not take a character")

    @classmethod
    def insert(cls, char: str) -> "EditCommand":
        if char == NEWLINE:
            return cls(EditOp.INSERT_NEWLINE)
        return cls(EditOp.INSERT_CHAR, char)


EditResult = Tuple[str, Coordinates]
LineEditor = Callable[[EditCommand, str, Coordinates], EditResult]


def apply_single_line(
    command: EditCommand, text: str, cursor: Coordinates
) -> EditResult:
    """Apply ``command`` to text that holds no newline."""

    length = len(text)
    x = clamp_column(cursor.x, length)
    op = command.op

    if op is EditOp.MOVE_LEFT:
        return text, Coordinates(max(x - 1, 0), 0)
    if op is EditOp.MOVE_RIGHT:
        return text, Coordinates(min(x + 1, length), 0)
    if op in (EditOp.MOVE_UP, EditOp.MOVE_DOWN, EditOp.LINE_START):
        return text, Coordinates(0, 0)
    if op is EditOp.LINE_END:
        return text, Coordinates(length, 0)
    if op is EditOp.INSERT_CHAR:
        char = cast(str, command.char)
        if char == NEWLINE:
            return text[:x] + NEWLINE + text[x:], Coordinates(0, 1)
        return text[:x] + char + text[x:], Coordinates(x + 1, 0)
    if op is EditOp.INSERT_NEWLINE:
        return text[:x] + NEWLINE + text[x:], Coordinates(0, 1)
    if op is EditOp.DELETE_BEFORE:
        if x == 0:
            return text, Coordinates(0, 0)
        return text[: x - 1] + text[x:], Coordinates(x - 1, 0)
    raise AssertionError(f"unhandled edit op {op!r}")  # pragma: no cover


def apply_multi_line(
    command: EditCommand, text: str, cursor: Coordinates
) -> EditResult:
    """Apply ``command`` to text made of two or more lines."""

    lines = text.split(NEWLINE)
    last = len(lines) - 1
    y = clamp_line(cursor.y, last)
    line = lines[y]
    x = clamp_column(cursor.x, len(line))
    op = command.op

    if op is EditOp.MOVE_LEFT:
        return text, Coordinates(max(x - 1, 0), y)
    if op is EditOp.MOVE_RIGHT:
        return text, Coordinates(min(x + 1, len(line)), y)
    if op is EditOp.MOVE_UP:
        return text, Coordinates(0, max(y - 1, 0))
    if op is EditOp.MOVE_DOWN:
        return text, Coordinates(0, min(y + 1, last))
    if op is EditOp.LINE_START:
        return text, Coordinates(0, y)
    if op is EditOp.LINE_END:
        return text, Coordinates(len(line), y)

    if op is EditOp.INSERT_NEWLINE or (
        op is EditOp.INSERT_CHAR and command.char == NEWLINE
    ):
        lines[y : y + 1] = [line[:x], line[x:]]
        return NEWLINE.join(lines), Coordinates(0, y + 1)
    if op is EditOp.INSERT_CHAR:
        lines[y] = line[:x] + cast(str, command.char) + line[x:]
        return NEWLINE.join(lines), Coordinates(x + 1, y)
    if op is EditOp.DELETE_BEFORE:
        if x > 0:
            lines[y] = line[: x - 1] + line[x:]
            return NEWLINE.join(lines), Coordinates(x - 1, y)
        if y == 0:
            return text, Coordinates(0, 0)
        # Join: the previous line absorbs this one.
        previous = lines[y - 1]
        lines[y - 1 : y + 1] = [previous + line]
        return NEWLINE.join(lines), Coordinates(len(previous), y - 1)
    raise AssertionError(f"unhandled edit op {op!r}")  # pragma: no cover


def select_editor(text: str) -> LineEditor:
    return apply_multi_line if NEWLINE in text else apply_single_line


class TextBuffer:
    """Text content plus cursor, kept consistent by ``apply``.

    ``accepts_newlines=False`` turns the buffer into a single-line field:
    newline commands are ignored, so the text never grows a second line.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "field",
        accepts_newlines: bool = True,
        cursor: Coordinates | None = None,
    ) -> None:
        self.name = name
        self.accepts_newlines = accepts_newlines
        if not accepts_newlines:
            text = text.replace(NEWLINE, " ")
        self._text = text
        self._cursor = (cursor or Coordinates()).clamped(text.split(NEWLINE))
        self.version = 0

    @classmethod
    def single_line(cls, text: str = "", *, name: str = "field") -> "TextBuffer":
        return cls(text, name=name, accepts_newlines=False)

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> Coordinates:
        return self._cursor

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._text.split(NEWLINE))

    @property
    def line_count(self) -> int:
        return self._text.count(NEWLINE) + 1

    @property
    def is_multiline(self) -> bool:
        return NEWLINE in self._text

    @property
    def current_line(self) -> str:
        lines = self._text.split(NEWLINE)
        if 0 <= self._cursor.y < len(lines):
            return lines[self._cursor.y]
        return self._text

    def set_text(self, text: str, *, cursor: Coordinates | None = None) -> None:
        """Replace the whole content; the cursor is kept and re-clamped."""

        if not self.accepts_newlines:
            text = text.replace(NEWLINE, " ")
        self._text = text
        self._cursor = (cursor or self._cursor).clamped(text.split(NEWLINE))
        self.version += 1

    def apply(self, command: EditCommand) -> "TextBuffer":
        if not self.accepts_newlines and _is_newline(command):
            return self
        editor = select_editor(self._text)
        text, cursor = editor(command, self._text, self._cursor)
        if text != self._text:
            self._text = text
            self.version += 1
        self._cursor = cursor
        return self

    def snapshot(self) -> BufferView:
        return BufferView(text=self._text, cursor=self._cursor, version=self.version)

    def move_left(self) -> "TextBuffer":
        return self.apply(EditCommand(EditOp.MOVE_LEFT))

    def move_right(self) -> "TextBuffer":
        return self.apply(EditCommand(EditOp.MOVE_RIGHT))

    def move_up(self) -> "TextBuffer":
        return self.apply(EditCommand(EditOp.MOVE_UP))

    def move_down(self) -> "TextBuffer":
        return self.apply(EditCommand(EditOp.MOVE_DOWN))

    def move_to_line_start(self) -> "TextBuffer":
        return self.apply(EditCommand(EditOp.LINE_START))

    def move_to_line_end(self) -> "TextBuffer":
        return self.apply(EditCommand(EditOp.LINE_END))

    def insert_char(self, char: str) -> "TextBuffer":
        return self.apply(EditCommand.insert(char))

    def insert_text(self, text: str) -> "TextBuffer":
        for char in text:
            self.insert_char(char)
        return self

    def insert_newline(self) -> "TextBuffer":
        return self.apply(EditCommand(EditOp.INSERT_NEWLINE))

    def delete_before_cursor(self) -> "TextBuffer":
        return self.apply(EditCommand(EditOp.DELETE_BEFORE))

    def __repr__(self) -> str:
        return (
            f"TextBuffer(name={self.name!r}, text={self._text!r}, "
            f"cursor={self._cursor.as_tuple()})"
        )


def _is_newline(command: EditCommand) -> bool:
    return command.op is EditOp.INSERT_NEWLINE or command.char == NEWLINE


__all__ = [
    "EditCommand",
    "EditOp",
    "TextBuffer",
    "apply_multi_line",
    "apply_single_line",
    "select_editor",
]
