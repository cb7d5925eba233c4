"""Textual adapter that wires ModeManager events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from reqtui.modes import KeyInput, ModeResult
from reqtui.modes.mode_manager import ModeManager
from reqtui.runtime import telemetry
from reqtui.state import AppState
from reqtui.transport import RequestDispatcher, Response


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_state: Callable[[AppState], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_quit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualRequestAdapter:
    """Bridges ModeManager, bus events and the dispatcher to a Textual host."""

    EVENTS = ("request.submit", "form.submit", "row.deleted", "app.quit")

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_state()

    @property
    def state(self) -> AppState:
        return self.manager.context.state

    @property
    def dispatcher(self) -> Optional[RequestDispatcher]:
        dispatcher = self.manager.context.extras.get("dispatcher")
        if isinstance(dispatcher, RequestDispatcher):
            return dispatcher
        return None

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
        )
        return result

    def process_responses(self) -> Optional[Response]:
        """Fold a finished request into the state, if one has completed."""

        dispatcher = self.dispatcher
        if dispatcher is None:
            return None
        response = dispatcher.poll()
        if response is None:
            return None
        self.state.receive_response(response)
        self.hooks.update_status(response.status_line)
        self._log_state("response <-", status=response.status_code)
        self._refresh_state()
        return response

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_state()
        if self.state.should_quit:
            self.hooks.request_quit()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in self.EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        telemetry.record_event(name, data={"payload": payload})
        self.hooks.handle_event(name, payload)

    def _refresh_state(self) -> None:
        self.hooks.update_state(self.state)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        state = self.state
        buffer = state.focused_buffer()
        return {
            "mode": state.input_mode.value,
            "block": state.selected_block.value,
            "popup": state.popup.kind.value if state.popup else None,
            "cursor": buffer.cursor.as_tuple() if buffer else None,
            "loading": state.is_loading,
        }


__all__ = ["TextualRequestAdapter", "TextualUIHooks"]
