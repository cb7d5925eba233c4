"""Selector cycling and scrolling in normal mode."""

from __future__ import annotations

from reqtui.keymaps.resolver import ResolutionMatch
from reqtui.modes.base_mode import ModeContext, ModeResult


def scroll_response_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.scroll_response(1)
    return ModeResult(consumed=True, status="scroll")


def scroll_response_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.scroll_response(-1)
    return ModeResult(consumed=True, status="scroll")


def next_request_tab(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.cycle_tab(1)
    return ModeResult(consumed=True, message=context.state.request_tab.value)


def previous_request_tab(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.cycle_tab(-1)
    return ModeResult(consumed=True, message=context.state.request_tab.value)


def next_method(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.cycle_method(1)
    return ModeResult(consumed=True, message=context.state.method.value)


def previous_method(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.cycle_method(-1)
    return ModeResult(consumed=True, message=context.state.method.value)


def next_row(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.move_row_selection(1)
    return ModeResult(consumed=True)


def previous_row(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.move_row_selection(-1)
    return ModeResult(consumed=True)


def toggle_body_content_type(
    context: ModeContext, match: ResolutionMatch
) -> ModeResult:
    del match
    context.state.toggle_body_content_type()
    return ModeResult(consumed=True, message=context.state.body_content_type.value)


__all__ = [
    "next_method",
    "next_request_tab",
    "next_row",
    "previous_method",
    "previous_request_tab",
    "previous_row",
    "scroll_response_down",
    "scroll_response_up",
    "toggle_body_content_type",
]
