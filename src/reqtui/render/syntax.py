"""Pygments-based highlighting with an explicit LRU cache."""

from __future__ import annotations

import hashlib
from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, Tuple

from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .spans import Span

HighlightedLines = Tuple[Tuple[Span, ...], ...]

LEXER_ALIASES: Dict[str, str] = {
    "application/json": "json",
    "text/json": "json",
    "application/xml": "xml",
    "text/xml": "xml",
    "text/html": "html",
    "application/javascript": "javascript",
    "text/javascript": "javascript",
    "text/css": "css",
    "application/x-yaml": "yaml",
    "text/plain": "text",
}


def lexer_for(content_type: str) -> Lexer:
    media = content_type.split(";", 1)[0].strip().lower()
    alias = LEXER_ALIASES.get(media)
    if alias is None and media.endswith("+json"):
        alias = "json"
    if alias is None and media.endswith("+xml"):
        alias = "xml"
    # Keep leading/trailing newlines so lines map 1:1 onto the source text.
    options = {"stripnl": False, "ensurenl": False}
    if alias is None or alias == "text":
        return TextLexer(**options)
    try:
        return get_lexer_by_name(alias, **options)
    except ClassNotFound:
        return TextLexer(**options)


def _rich_style(token_style: Dict[str, object]) -> str:
    parts = []
    if token_style.get("bold"):
        parts.append("bold")
    if token_style.get("italic"):
        parts.append("italic")
    if token_style.get("underline"):
        parts.append("underline")
    color = token_style.get("color")
    if color:
        parts.append(f"#{color}")
    return " ".join(parts)


def highlight(text: str, content_type: str, *, theme: str = "monokai") -> HighlightedLines:
    """Split ``text`` into lines of styled spans."""

    try:
        style = get_style_by_name(theme)
    except ClassNotFound:
        style = get_style_by_name("default")

    styles: Dict[object, str] = {}
    lines: list[list[Span]] = [[]]
    for token_type, value in lex(text, lexer_for(content_type)):
        if token_type not in styles:
            styles[token_type] = _rich_style(style.style_for_token(token_type))
        for index, part in enumerate(value.split("\n")):
            if index:
                lines.append([])
            if part:
                lines[-1].append((part, styles[token_type]))
    return tuple(tuple(line) for line in lines)


@dataclass(slots=True)
class CacheStats:
    hits: int
    misses: int
    size: int
    capacity: int


class HighlightCache:
    """Least-recently-used cache of highlighted text keyed by content hash."""

    def __init__(self, capacity: int = 32, *, theme: str = "monokai") -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self.theme = theme
        self._entries: "OrderedDict[str, HighlightedLines]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def key(text: str, content_type: str) -> str:
        digest = hashlib.sha256()
        digest.update(content_type.encode("utf-8"))
        digest.update(b"\0")
        digest.update(text.encode("utf-8"))
        return digest.hexdigest()

    def get(self, text: str, content_type: str) -> HighlightedLines:
        key = self.key(text, content_type)
        cached = self._entries.get(key)
        if cached is not None:
            self._hits += 1
            self._entries.move_to_end(key)
            return cached

        self._misses += 1
        lines = highlight(text, content_type, theme=self.theme)
        self._entries[key] = lines
        while len(self._entries) > self.capacity:
            self._entries.popitem(last=False)
        return lines

    def __contains__(self, item: Tuple[str, str]) -> bool:
        text, content_type = item
        return self.key(text, content_type) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> CacheStats:
        return CacheStats(
            hits=self._hits,
            misses=self._misses,
            size=len(self._entries),
            capacity=self.capacity,
        )


__all__ = ["CacheStats", "HighlightCache", "highlight", "lexer_for"]
