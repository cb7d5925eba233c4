"""Fixed orderings for the selectors the user cycles through."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, TypeVar

T = TypeVar("T")


class InputMode(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"


class RequestMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, value: str) -> "RequestMethod":
        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            raise ValueError(f"Unsupported HTTP method '{value}'") from exc


class AppBlock(str, Enum):
    METHOD = "method"
    ENDPOINT = "endpoint"
    REQUEST = "request"
    REQUEST_CONTENT = "request_content"
    RESPONSE = "response"


class RequestTab(str, Enum):
    BODY = "body"
    QUERY = "query"
    HEADERS = "headers"


class BodyContentType(str, Enum):
    TEXT = "text"
    FORM = "form"


METHOD_ORDER: tuple[RequestMethod, ...] = tuple(RequestMethod)
BLOCK_ORDER: tuple[AppBlock, ...] = tuple(AppBlock)
TAB_ORDER: tuple[RequestTab, ...] = tuple(RequestTab)
CONTENT_TYPE_ORDER: tuple[BodyContentType, ...] = tuple(BodyContentType)


def cycle_index(index: int, length: int, step: int) -> int:
    if length <= 0:
        return 0
    return (index + step) % length


def cycle(order: Sequence[T], current: T, step: int = 1) -> T:
    return order[cycle_index(order.index(current), len(order), step)]


def next_in(order: Sequence[T], current: T) -> T:
    return cycle(order, current, 1)


def previous_in(order: Sequence[T], current: T) -> T:
    return cycle(order, current, -1)


__all__ = [
    "AppBlock",
    "BLOCK_ORDER",
    "BodyContentType",
    "CONTENT_TYPE_ORDER",
    "InputMode",
    "METHOD_ORDER",
    "RequestMethod",
    "RequestTab",
    "TAB_ORDER",
    "cycle",
    "cycle_index",
    "next_in",
    "previous_in",
]
