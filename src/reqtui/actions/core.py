"""Mode switches, block focus, and request submission."""

from __future__ import annotations

from reqtui.keymaps.resolver import ResolutionMatch
from reqtui.modes.base_mode import ModeContext, ModeResult
from reqtui.state import AppBlock
from reqtui.transport import DispatcherBusyError, RequestDispatcher


def require_dispatcher(context: ModeContext) -> RequestDispatcher:
    dispatcher = context.extras.get("dispatcher")
    if not isinstance(dispatcher, RequestDispatcher):
        raise RuntimeError("ModeContext.extras missing 'dispatcher'")
    return dispatcher


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.state
    buffer = state.focused_buffer()
    if buffer is None:
        return ModeResult(consumed=True, status="noop", message="not_editable")
    if state.form is not None or state.selected_block is AppBlock.ENDPOINT:
        buffer.move_to_line_end()
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="exit_insert")


def quit_or_close(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.state
    if state.popup is not None:
        state.close_popup()
        return ModeResult(consumed=True, message="popup_closed")
    state.should_quit = True
    context.bus.emit("app.quit", None)
    return ModeResult(consumed=True, status="quit")


def next_block(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.next_block()
    return ModeResult(consumed=True, message=context.state.selected_block.value)


def previous_block(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.previous_block()
    return ModeResult(consumed=True, message=context.state.selected_block.value)


def activate_block(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Enter in normal mode: open, descend into, or send."""

    state = context.state
    if state.selected_block is AppBlock.METHOD:
        state.open_method_popup()
        return ModeResult(consumed=True, message="method_popup")
    if state.selected_block is AppBlock.REQUEST:
        state.selected_block = AppBlock.REQUEST_CONTENT
        return ModeResult(consumed=True, message=state.selected_block.value)
    return send_request(context, match)


def send_request(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.state
    spec = state.build_request()
    if not spec.url:
        return ModeResult(consumed=True, status="noop", message="empty_endpoint")
    try:
        require_dispatcher(context).submit(spec)
    except DispatcherBusyError:
        return ModeResult(consumed=True, status="busy", message="request_in_flight")
    state.is_loading = True
    context.bus.emit("request.submit", spec)
    return ModeResult(consumed=True, status="sent", message=f"{spec.method} {spec.url}")


def send_and_exit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    result = send_request(context, match)
    result.switch_to = "normal"
    return result


__all__ = [
    "activate_block",
    "enter_insert_mode",
    "exit_to_normal_mode",
    "next_block",
    "previous_block",
    "quit_or_close",
    "require_dispatcher",
    "send_and_exit",
    "send_request",
]
