"""Turn buffer snapshots into styled spans with a single cursor cell.

A span is ``(text, style)`` where ``style`` is a Rich style string; an empty
style means "inherit". Renderers assemble spans into widgets themselves.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from reqtui.buffer import BufferView

Span = Tuple[str, str]
Line = List[Span]

CURSOR_STYLE = "black on green"


def cursor_line_spans(line: str, column: int, active: bool) -> Line:
    return overlay_cursor([(line, "")] if line else [], column, active)


def overlay_cursor(spans: Sequence[Span], column: int, active: bool) -> Line:
    """Mark the cell at ``column`` as the cursor.

    A span that straddles ``column`` is split into left part, cursor cell and
    right part, so the cell keeps exactly one style even when a highlight
    boundary falls on it. A column past the last character gets a blank
    cursor cell appended.
    """

    result: Line = [(text, style) for text, style in spans if text]
    if not active:
        return result

    offset = 0
    for index, (text, style) in enumerate(result):
        end = offset + len(text)
        if offset <= column < end:
            cut = column - offset
            pieces: Line = []
            if cut:
                pieces.append((text[:cut], style))
            pieces.append((text[cut], CURSOR_STYLE))
            if cut + 1 < len(text):
                pieces.append((text[cut + 1 :], style))
            return result[:index] + pieces + result[index + 1 :]
        offset = end

    result.append((" ", CURSOR_STYLE))
    return result


def render_buffer(
    view: BufferView,
    *,
    focused: bool,
    editing: bool,
    highlighted: Optional[Sequence[Sequence[Span]]] = None,
) -> List[Line]:
    """Render every line of ``view``; the cursor shows only while editing."""

    active = focused and editing
    cursor = view.cursor
    rendered: List[Line] = []
    for index, line in enumerate(view.lines):
        spans = _line_spans(line, index, highlighted)
        rendered.append(overlay_cursor(spans, cursor.x, active and index == cursor.y))
    return rendered


def _line_spans(
    line: str, index: int, highlighted: Optional[Sequence[Sequence[Span]]]
) -> Line:
    if highlighted is not None and index < len(highlighted):
        candidate = list(highlighted[index])
        if "".join(text for text, _ in candidate) == line:
            return candidate
    return [(line, "")] if line else []


def plain_text(line: Sequence[Span]) -> str:
    return "".join(text for text, _ in line)


__all__ = [
    "CURSOR_STYLE",
    "Line",
    "Span",
    "cursor_line_spans",
    "overlay_cursor",
    "plain_text",
    "render_buffer",
]
