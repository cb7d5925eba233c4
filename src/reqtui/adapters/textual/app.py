"""Executable Textual app that hosts the request editor."""

from __future__ import annotations

import argparse
from typing import Iterable, List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use reqtui.adapters.textual.app"
    ) from exc

from reqtui.modes.mode_manager import ModeManager, create_default_manager
from reqtui.render import (
    METHOD_STYLES,
    HighlightCache,
    body_lines,
    border_style,
    endpoint_lines,
    render_buffer,
    response_page,
    status_style,
    tab_spans,
)
from reqtui.render.spans import Span
from reqtui.runtime.settings import Settings, load_settings
from reqtui.state import (
    METHOD_ORDER,
    AppBlock,
    AppState,
    InputMode,
    PopupKind,
    RequestMethod,
    RequestTab,
)
from reqtui.transport import HttpTransport, RequestDispatcher

from .controller import TextualRequestAdapter, TextualUIHooks

HELP_NORMAL = (
    "q quit | tab/shift+tab switch block | i insert | enter activate | "
    "j/k scroll, cycle | a/e/d add, edit, delete | t body type"
)
HELP_INSERT = "esc normal | enter send/newline | arrows move | backspace delete"

_TEXTUAL_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "tab": "TAB",
    "shift+tab": "BACKTAB",
    "backspace": "BACKSPACE",
    "ctrl+h": "BACKSPACE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
}


def to_text(lines: Iterable[Sequence[Span]]) -> Text:
    return Text("\n").join(Text.assemble(*line) for line in lines)


def build_manager(settings: Settings) -> ModeManager:
    """Wire state, transport, dispatcher and both modes together."""

    transport = HttpTransport(timeout_s=settings.timeout_s)
    dispatcher = RequestDispatcher(transport)
    return create_default_manager(
        AppState.from_settings(settings), dispatcher=dispatcher
    )


class ReqTuiApp(App[None]):
    """Terminal HTTP client: method, endpoint, request tabs and response."""

    CSS = """
	Screen {
		layout: vertical;
		layers: base overlay;
	}

	#top-row {
		height: 3;
	}

	#method {
		width: 12;
		border: round white;
		content-align: center middle;
	}

	#endpoint {
		width: 1fr;
		border: round white;
	}

	#request {
		height: 1fr;
		border: round white;
	}

	#tabs {
		height: 1;
	}

	#request-content {
		height: 1fr;
		border: round white;
		overflow: auto;
	}

	#response {
		height: 1fr;
		border: round white;
	}

	#popup {
		display: none;
		layer: overlay;
		dock: top;
		margin: 6 20;
		width: 1fr;
		height: auto;
		border: double yellow;
		background: $surface;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#help-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.settings = settings or load_settings()
        self.manager: ModeManager | None = None
        self.adapter: TextualRequestAdapter | None = None
        self.highlight_cache = HighlightCache(
            self.settings.highlight_cache_size, theme=self.settings.highlight_theme
        )

    def compose(self) -> ComposeResult:
        with Horizontal(id="top-row"):
            yield Static("", id="method")
            yield Static("", id="endpoint")
        with Vertical(id="request"):
            yield Static("", id="tabs")
            yield Static("", id="request-content")
        yield Static("", id="response")
        yield Static("", id="popup")
        yield Static("", id="status-line")
        yield Static("", id="help-line")

    def on_mount(self) -> None:
        self.manager = build_manager(self.settings)
        hooks = TextualUIHooks(
            update_state=self._render_state,
            update_status=self._update_status,
            request_quit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualRequestAdapter(self.manager, hooks)
        self.set_interval(0.1, self._process_responses)

    def on_unmount(self) -> None:
        if self.adapter and self.adapter.dispatcher:
            self.adapter.dispatcher.stop()

    def on_resize(self, event: events.Resize) -> None:
        del event
        if self.adapter:
            self._render_state(self.adapter.state)

    def _process_responses(self) -> None:
        if self.adapter:
            self.adapter.process_responses()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.prevent_default()
        event.stop()

    # -- rendering ---------------------------------------------------------

    def _render_state(self, state: AppState) -> None:
        method = self.query_one("#method", Static)
        method.border_title = "Method"
        method.styles.border = ("round", border_style(state, AppBlock.METHOD))
        method.update(Text(state.method.value, style=METHOD_STYLES[state.method]))

        endpoint = self.query_one("#endpoint", Static)
        endpoint.border_title = "Endpoint"
        endpoint.styles.border = ("round", border_style(state, AppBlock.ENDPOINT))
        endpoint.update(to_text(endpoint_lines(state)))

        request = self.query_one("#request", Vertical)
        request.border_title = "Request"
        request.styles.border = ("round", border_style(state, AppBlock.REQUEST))
        self.query_one("#tabs", Static).update(Text.assemble(*tab_spans(state)))

        content = self.query_one("#request-content", Static)
        content.styles.border = (
            "round",
            border_style(state, AppBlock.REQUEST_CONTENT),
        )
        content.border_title = self._content_title(state)
        content.update(to_text(self._content_lines(state)))

        self._render_response(state)
        self._render_popup(state)

        help_text = HELP_INSERT if state.input_mode is InputMode.INSERT else HELP_NORMAL
        self.query_one("#help-line", Static).update(help_text)

    def _content_title(self, state: AppState) -> str:
        title = state.request_tab.value.capitalize()
        if state.request_tab is RequestTab.BODY:
            title = f"{title} ({state.body_content_type.value})"
        return title

    def _content_lines(self, state: AppState) -> List[List[Span]]:
        rows = state.active_rows()
        if rows is None:
            return body_lines(state, self.highlight_cache)
        if not rows:
            return [[("(empty, press a to add)", "dim")]]
        selected = state.selected_row_index()
        focused = state.selected_block is AppBlock.REQUEST_CONTENT
        lines: List[List[Span]] = []
        for index, (key, value) in enumerate(rows):
            style = "reverse" if focused and index == selected else ""
            lines.append([(f"{key}: ", f"bold {style}".strip()), (value, style)])
        return lines

    def _render_response(self, state: AppState) -> None:
        widget = self.query_one("#response", Static)
        widget.styles.border = ("round", border_style(state, AppBlock.RESPONSE))
        page = response_page(
            state, self.highlight_cache, height=max(widget.size.height - 2, 1)
        )
        widget.border_title = page.title
        if state.response is not None and not state.is_loading:
            widget.styles.border_title_color = status_style(
                state.response.status_code
            )
        widget.update(to_text(page.lines))

    def _render_popup(self, state: AppState) -> None:
        widget = self.query_one("#popup", Static)
        popup = state.popup
        widget.display = popup is not None
        if popup is None:
            return
        lines: List[List[Span]] = []
        if popup.kind is PopupKind.METHOD:
            widget.border_title = "Method"
            for method in METHOD_ORDER:
                lines.append(self._method_option(method, state.method))
        elif popup.form is not None:
            form = popup.form
            widget.border_title = form.title
            current = form.selected()
            editing = state.input_mode is InputMode.INSERT
            for form_field in form.visible_fields():
                is_current = form_field is current
                rendered = render_buffer(
                    form_field.buffer.snapshot(), focused=is_current, editing=editing
                )
                label_style = "bold green" if is_current else "bold"
                lines.append([(f"{form_field.label}: ", label_style)] + rendered[0])
        widget.update(to_text(lines))

    @staticmethod
    def _method_option(method: RequestMethod, current: RequestMethod) -> List[Span]:
        marker = "> " if method is current else "  "
        style = METHOD_STYLES[method]
        if method is current:
            style = f"bold reverse {style}"
        return [(marker, ""), (method.value, style)]

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)

    def _log_line(self, line: str) -> None:
        self.log.debug(line)

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q"}:
            return None
        if key in _TEXTUAL_KEYS:
            return (_TEXTUAL_KEYS[key], None, ())
        character = event.character
        if character and len(character) == 1 and character.isprintable():
            return (character, character, ())
        modifiers = tuple(part.upper() for part in key.split("+")[:-1])
        return (key.split("+")[-1].upper(), None, modifiers)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = load_settings()
    parser = argparse.ArgumentParser(
        prog="reqtui", description="Compose and send HTTP requests from the terminal."
    )
    parser.add_argument(
        "url",
        nargs="?",
        default=defaults.endpoint,
        help="Initial endpoint (default: $REQTUI_ENDPOINT or %(default)s)",
    )
    parser.add_argument(
        "-m",
        "--method",
        type=str.upper,
        choices=[method.value for method in METHOD_ORDER],
        default=defaults.method,
        help="Initial HTTP method (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=defaults.timeout_s,
        help="Request timeout in seconds (default: %(default)s)",
    )
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> Settings:
    defaults = load_settings()
    return Settings(
        endpoint=args.url,
        method=args.method,
        timeout_s=args.timeout,
        highlight_theme=defaults.highlight_theme,
        highlight_cache_size=defaults.highlight_cache_size,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = ReqTuiApp(settings_from_args(args))
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
