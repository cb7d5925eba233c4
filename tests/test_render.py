from __future__ import annotations

import pytest

from reqtui.buffer import BufferView, Coordinates
from reqtui.render import (
    CURSOR_STYLE,
    HighlightCache,
    cursor_line_spans,
    border_style,
    body_lines,
    endpoint_lines,
    highlight,
    overlay_cursor,
    plain_text,
    render_buffer,
    response_page,
    status_style,
    tab_spans,
)
from reqtui.state import AppBlock, AppState, InputMode
from reqtui.transport import Response


def cursor_cells(line):
    return [text for text, style in line if style == CURSOR_STYLE]


def test_cursor_on_span_boundary_is_split_out() -> None:
    spans = [("ab", "red"), ("cd", "blue")]

    assert overlay_cursor(spans, 2, True) == [
        ("ab", "red"),
        ("c", CURSOR_STYLE),
        ("d", "blue"),
    ]
    assert overlay_cursor(spans, 1, True) == [
        ("a", "red"),
        ("b", CURSOR_STYLE),
        ("cd", "blue"),
    ]


def test_cursor_at_append_position_adds_blank_cell() -> None:
    assert overlay_cursor([("ab", "")], 2, True) == [("ab", ""), (" ", CURSOR_STYLE)]
    assert overlay_cursor([], 0, True) == [(" ", CURSOR_STYLE)]


def test_inactive_cursor_leaves_spans_alone() -> None:
    spans = [("ab", "red"), ("", "x")]

    assert overlay_cursor(spans, 0, False) == [("ab", "red")]


def test_render_buffer_marks_exactly_one_cell() -> None:
    view = BufferView("ab\ncd", Coordinates(1, 1))

    lines = render_buffer(view, focused=True, editing=True)

    assert [plain_text(line) for line in lines] == ["ab", "cd"]
    assert sum(len(cursor_cells(line)) for line in lines) == 1
    assert cursor_cells(lines[1]) == ["d"]

    idle = render_buffer(view, focused=True, editing=False)
    assert sum(len(cursor_cells(line)) for line in idle) == 0


def test_render_buffer_ignores_stale_highlighting() -> None:
    view = BufferView("abc", Coordinates(0, 0))

    lines = render_buffer(
        view, focused=False, editing=False, highlighted=((("xyz", "red"),),)
    )

    assert lines == [[("abc", "")]]


def test_highlight_preserves_text_line_by_line() -> None:
    source = '{\n  "name": "box",\n  "count": 2\n}'

    lines = highlight(source, "application/json; charset=utf-8")

    assert [plain_text(line) for line in lines] == source.split("\n")
    assert any(style for line in lines for _, style in line)


def test_unknown_content_type_falls_back_to_plain_text() -> None:
    lines = highlight("a\nb", "application/x-unknown")

    assert [plain_text(line) for line in lines] == ["a", "b"]


def test_highlight_cache_evicts_least_recently_used() -> None:
    cache = HighlightCache(capacity=2)
    cache.get("a", "text/plain")
    cache.get("b", "text/plain")
    cache.get("a", "text/plain")
    cache.get("c", "text/plain")

    assert ("a", "text/plain") in cache
    assert ("b", "text/plain") not in cache
    assert len(cache) == 2
    stats = cache.stats()
    assert (stats.hits, stats.misses) == (1, 3)


def test_highlight_cache_keys_on_content_type() -> None:
    assert HighlightCache.key("x", "application/json") != HighlightCache.key(
        "x", "text/plain"
    )
    with pytest.raises(ValueError):
        HighlightCache(capacity=0)


def test_response_page_clamps_scroll_to_content() -> None:
    state = AppState(response_scroll=10)
    state.receive_response(Response(200, "l0\nl1\nl2\nl3\nl4"))
    state.response_scroll = 10

    page = response_page(state, HighlightCache(), height=2)

    assert page.scroll == 3
    assert state.response_scroll == 3
    assert [plain_text(line) for line in page.lines] == ["l3", "l4"]
    assert page.title.startswith("Response 200")


def test_response_page_shows_loading_and_errors() -> None:
    state = AppState(is_loading=True)
    assert response_page(state, HighlightCache(), height=5).title == (
        "Response (loading...)"
    )

    state.receive_response(Response(0, "connection refused", error="connection refused"))
    page = response_page(state, HighlightCache(), height=5)

    assert page.title == "Response ERROR connection refused"
    assert list(page.lines) == [(("connection refused", "red"),)]


def test_endpoint_and_body_lines_follow_focus() -> None:
    state = AppState(input_mode=InputMode.INSERT)
    state.endpoint.set_text("http://x")
    state.endpoint.move_to_line_end()
    state.body.set_text('{"a": 1}')

    assert cursor_cells(endpoint_lines(state)[0]) == [" "]
    body = body_lines(state, HighlightCache())
    assert plain_text(body[0]) == '{"a": 1}'
    assert not cursor_cells(body[0])


def test_border_style_reflects_focus_and_mode() -> None:
    state = AppState()

    assert border_style(state, AppBlock.ENDPOINT) == "blue"
    assert border_style(state, AppBlock.METHOD) == "white"
    state.input_mode = InputMode.INSERT
    assert border_style(state, AppBlock.ENDPOINT) == "green"
    state.open_method_popup()
    assert border_style(state, AppBlock.ENDPOINT) == "white"


def test_tab_strip_and_status_colors() -> None:
    assert plain_text(tab_spans(AppState())) == "Body | Query | Headers"
    assert status_style(0) == "red"
    assert status_style(404) == "yellow"
    assert status_style(201) == "green"


def test_cursor_line_spans_on_plain_lines() -> None:
    assert cursor_line_spans("", 0, True) == [(" ", CURSOR_STYLE)]
    assert cursor_line_spans("ab", 0, True) == [("a", CURSOR_STYLE), ("b", "")]
    assert cursor_line_spans("ab", 0, False) == [("ab", "")]
