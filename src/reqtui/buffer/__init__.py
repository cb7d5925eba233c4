"""Editable text buffers and the cursor model behind every input field."""

from .coordinates import ORIGIN, Coordinates, clamp_column, clamp_line
from .engine import (
    EditCommand,
    EditOp,
    TextBuffer,
    apply_multi_line,
    apply_single_line,
    select_editor,
)
from .view import BufferView

__all__ = [
    "BufferView",
    "Coordinates",
    "ORIGIN",
    "EditCommand",
    "EditOp",
    "TextBuffer",
    "apply_multi_line",
    "apply_single_line",
    "clamp_column",
    "clamp_line",
    "select_editor",
]
