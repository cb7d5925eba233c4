from __future__ import annotations

import time
from typing import List

from reqtui.adapters.textual import TextualRequestAdapter, TextualUIHooks
from reqtui.modes.mode_manager import create_default_manager
from reqtui.state import AppState, InputMode
from reqtui.transport import RequestDispatcher, RequestSpec, Response


class EchoTransport:
    def send(self, spec: RequestSpec) -> Response:
        return Response(200, f"{spec.method} {spec.url}")


def make_adapter(hooks: TextualUIHooks, *, with_dispatcher: bool = False):
    dispatcher = RequestDispatcher(EchoTransport()) if with_dispatcher else None
    manager = create_default_manager(AppState(), dispatcher=dispatcher)
    return TextualRequestAdapter(manager, hooks), dispatcher


def test_adapter_pushes_state_and_status() -> None:
    states: List[InputMode] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_state=lambda state: states.append(state.input_mode),
        update_status=statuses.append,
    )
    adapter, _ = make_adapter(hooks)

    adapter.handle_textual_key("i", text="i")
    adapter.handle_textual_key("ESC")

    assert states[0] is InputMode.NORMAL
    assert InputMode.INSERT in states
    assert "enter_insert" in statuses
    assert "exit_insert" in statuses


def test_adapter_requests_quit() -> None:
    quits: List[bool] = []
    events: List[str] = []
    hooks = TextualUIHooks(
        update_state=lambda state: None,
        request_quit=lambda: quits.append(True),
        handle_event=lambda name, payload: events.append(name),
    )
    adapter, _ = make_adapter(hooks)

    adapter.handle_textual_key("q", text="q")

    assert quits == [True]
    assert events == ["app.quit"]


def test_adapter_folds_finished_responses_into_state() -> None:
    statuses: List[str] = []
    hooks = TextualUIHooks(update_state=lambda state: None, update_status=statuses.append)
    adapter, dispatcher = make_adapter(hooks, with_dispatcher=True)
    assert dispatcher is not None
    adapter.state.endpoint.set_text("http://api.test")

    adapter.handle_textual_key("ENTER")
    assert adapter.state.is_loading

    response = dispatcher.wait(timeout=2.0)
    assert response is not None
    # wait() already collected it; nothing left for the next poll.
    assert adapter.process_responses() is None
    adapter.state.receive_response(response)

    adapter.handle_textual_key("ENTER")
    for _ in range(200):
        received = adapter.process_responses()
        if received is not None:
            break
        time.sleep(0.01)
    assert received is not None
    assert adapter.state.response is received
    assert adapter.state.is_loading is False
    assert statuses[-1] == received.status_line
    dispatcher.stop()


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    hooks = TextualUIHooks(update_state=lambda state: None, log=logs.append)
    adapter, _ = make_adapter(hooks)

    adapter.handle_textual_key("i", text="i")

    assert any(line.startswith("key ->") for line in logs)
    assert any("mode='insert'" in line for line in logs)
    assert adapter.process_responses() is None
