"""Renderer-agnostic presentation: styled spans, highlighting, pane slices."""

from .panes import (
    METHOD_STYLES,
    ResponsePage,
    body_lines,
    border_style,
    endpoint_lines,
    response_page,
    status_style,
    tab_spans,
)
from .spans import (
    CURSOR_STYLE,
    Line,
    Span,
    cursor_line_spans,
    overlay_cursor,
    plain_text,
    render_buffer,
)
from .syntax import CacheStats, HighlightCache, highlight, lexer_for

__all__ = [
    "CURSOR_STYLE",
    "CacheStats",
    "HighlightCache",
    "Line",
    "METHOD_STYLES",
    "ResponsePage",
    "Span",
    "body_lines",
    "border_style",
    "cursor_line_spans",
    "endpoint_lines",
    "highlight",
    "lexer_for",
    "overlay_cursor",
    "plain_text",
    "render_buffer",
    "response_page",
    "status_style",
    "tab_spans",
]
