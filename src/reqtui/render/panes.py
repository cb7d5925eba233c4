"""Pure helpers computing what each pane of the screen shows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from reqtui.state import AppBlock, AppState, InputMode, RequestMethod, RequestTab

from .spans import Line, Span, render_buffer
from .syntax import HighlightCache

METHOD_STYLES = {
    RequestMethod.GET: "green",
    RequestMethod.POST: "blue",
    RequestMethod.PUT: "yellow",
    RequestMethod.DELETE: "red",
    RequestMethod.PATCH: "magenta",
}

TAB_TITLES = {
    RequestTab.BODY: "Body",
    RequestTab.QUERY: "Query",
    RequestTab.HEADERS: "Headers",
}


def border_style(state: AppState, block: AppBlock) -> str:
    selected = block is state.selected_block and state.popup is None
    if selected and state.input_mode is InputMode.INSERT:
        return "green"
    if selected:
        return "blue"
    return "white"


def endpoint_lines(state: AppState) -> List[Line]:
    return render_buffer(
        state.endpoint.snapshot(),
        focused=state.popup is None and state.selected_block is AppBlock.ENDPOINT,
        editing=state.input_mode is InputMode.INSERT,
    )


def body_lines(state: AppState, cache: Optional[HighlightCache] = None) -> List[Line]:
    view = state.body.snapshot()
    highlighted = None
    if cache is not None and view.text:
        content_type = state.headers.get("Content-Type", "text/plain")
        highlighted = cache.get(view.text, content_type)
    return render_buffer(
        view,
        focused=state.popup is None and state.body_is_editable(),
        editing=state.input_mode is InputMode.INSERT,
        highlighted=highlighted,
    )


def tab_spans(state: AppState) -> List[Span]:
    spans: List[Span] = []
    for index, (tab, title) in enumerate(TAB_TITLES.items()):
        if index:
            spans.append((" | ", ""))
        spans.append((title, "green" if tab is state.request_tab else "white"))
    return spans


@dataclass(frozen=True, slots=True)
class ResponsePage:
    title: str
    lines: Sequence[Sequence[Span]]
    scroll: int


def response_page(
    state: AppState, cache: HighlightCache, *, height: int
) -> ResponsePage:
    """Visible slice of the response; clamps ``state.response_scroll``."""

    if state.is_loading:
        return ResponsePage("Response (loading...)", [], 0)
    response = state.response
    if response is None:
        return ResponsePage("Response", [], 0)

    if response.error is not None:
        lines = tuple(((line, "red"),) for line in response.text.split("\n"))
    else:
        lines = cache.get(response.text, response.content_type)
    visible = max(height, 1)
    scroll = state.clamp_response_scroll(len(lines) - visible)
    return ResponsePage(
        title=f"Response {response.status_line}",
        lines=lines[scroll : scroll + visible],
        scroll=scroll,
    )


def status_style(status_code: int) -> str:
    if status_code == 0 or status_code >= 500:
        return "red"
    if status_code >= 400:
        return "yellow"
    return "green"


__all__ = [
    "METHOD_STYLES",
    "ResponsePage",
    "TAB_TITLES",
    "body_lines",
    "border_style",
    "endpoint_lines",
    "response_page",
    "status_style",
    "tab_spans",
]
