"""Mutable application state shared by modes, actions, and the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from reqtui.buffer import TextBuffer
from reqtui.runtime.settings import DEFAULT_ENDPOINT, Settings
from reqtui.transport.models import RequestSpec, Response

from .form import Form, FormKind, build_form
from .navigation import (
    BLOCK_ORDER,
    CONTENT_TYPE_ORDER,
    METHOD_ORDER,
    TAB_ORDER,
    AppBlock,
    BodyContentType,
    InputMode,
    RequestMethod,
    RequestTab,
    cycle,
    cycle_index,
)

Pair = Tuple[str, str]

RESPONSE_SCROLL_STEP = 2


def default_headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


class PopupKind(str, Enum):
    METHOD = "method"
    FORM = "form"


@dataclass(slots=True)
class Popup:
    kind: PopupKind
    form: Optional[Form] = None


@dataclass
class AppState:
    endpoint: TextBuffer = field(
        default_factory=lambda: TextBuffer.single_line(
            DEFAULT_ENDPOINT, name="endpoint"
        )
    )
    body: TextBuffer = field(default_factory=lambda: TextBuffer(name="body"))
    method: RequestMethod = RequestMethod.GET
    input_mode: InputMode = InputMode.NORMAL
    selected_block: AppBlock = AppBlock.ENDPOINT
    request_tab: RequestTab = RequestTab.BODY
    body_content_type: BodyContentType = BodyContentType.TEXT
    headers: Dict[str, str] = field(default_factory=default_headers)
    query_params: List[Pair] = field(default_factory=list)
    body_form: List[Pair] = field(default_factory=list)
    selected_header: int = 0
    selected_query_param: int = 0
    selected_form_field: int = 0
    response: Optional[Response] = None
    response_scroll: int = 0
    popup: Optional[Popup] = None
    is_loading: bool = False
    should_quit: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppState":
        state = cls()
        state.endpoint.set_text(settings.endpoint)
        state.method = RequestMethod.parse(settings.method)
        return state

    # -- focus -------------------------------------------------------------

    @property
    def form(self) -> Optional[Form]:
        if self.popup is not None and self.popup.kind is PopupKind.FORM:
            return self.popup.form
        return None

    def focused_buffer(self) -> Optional[TextBuffer]:
        """Buffer that receives edits, or ``None`` when nothing is editable."""

        form = self.form
        if form is not None:
            return form.selected().buffer
        if self.popup is not None:
            return None
        if self.selected_block is AppBlock.ENDPOINT:
            return self.endpoint
        if self.body_is_editable():
            return self.body
        return None

    def body_is_editable(self) -> bool:
        return (
            self.selected_block is AppBlock.REQUEST_CONTENT
            and self.request_tab is RequestTab.BODY
            and self.body_content_type is BodyContentType.TEXT
        )

    def flags(self) -> Dict[str, bool]:
        """Boolean context consumed by keymap ``when`` clauses."""

        popup_kind = self.popup.kind if self.popup else None
        flags: Dict[str, bool] = {
            "popup": self.popup is not None,
            "popup.method": popup_kind is PopupKind.METHOD,
            "popup.form": popup_kind is PopupKind.FORM,
            "editable": self.focused_buffer() is not None,
            "body.form": self.body_content_type is BodyContentType.FORM,
        }
        for block in BLOCK_ORDER:
            flags[f"block.{block.value}"] = self.selected_block is block
        for tab in TAB_ORDER:
            flags[f"tab.{tab.value}"] = self.request_tab is tab
        return flags

    # -- selectors ---------------------------------------------------------

    def next_block(self) -> None:
        self.selected_block = cycle(BLOCK_ORDER, self.selected_block, 1)

    def previous_block(self) -> None:
        self.selected_block = cycle(BLOCK_ORDER, self.selected_block, -1)

    def cycle_tab(self, step: int) -> None:
        self.request_tab = cycle(TAB_ORDER, self.request_tab, step)

    def cycle_method(self, step: int) -> None:
        self.method = cycle(METHOD_ORDER, self.method, step)

    def toggle_body_content_type(self) -> None:
        self.body_content_type = cycle(CONTENT_TYPE_ORDER, self.body_content_type)

    def scroll_response(self, steps: int) -> None:
        offset = self.response_scroll + steps * RESPONSE_SCROLL_STEP
        self.response_scroll = max(offset, 0)

    def clamp_response_scroll(self, max_scroll: int) -> int:
        self.response_scroll = min(max(self.response_scroll, 0), max(max_scroll, 0))
        return self.response_scroll

    # -- key/value tables --------------------------------------------------

    def active_rows(self) -> Optional[List[Pair]]:
        """Rows shown by the content pane for the current tab, if any."""

        if self.request_tab is RequestTab.HEADERS:
            return list(self.headers.items())
        if self.request_tab is RequestTab.QUERY:
            return list(self.query_params)
        if self.body_content_type is BodyContentType.FORM:
            return list(self.body_form)
        return None

    def selected_row_index(self) -> int:
        if self.request_tab is RequestTab.HEADERS:
            return self.selected_header
        if self.request_tab is RequestTab.QUERY:
            return self.selected_query_param
        return self.selected_form_field

    def _set_selected_row_index(self, index: int) -> None:
        if self.request_tab is RequestTab.HEADERS:
            self.selected_header = index
        elif self.request_tab is RequestTab.QUERY:
            self.selected_query_param = index
        else:
            self.selected_form_field = index

    def move_row_selection(self, step: int) -> None:
        rows = self.active_rows()
        if not rows:
            return
        self._set_selected_row_index(
            cycle_index(self.selected_row_index(), len(rows), step)
        )

    def delete_selected_row(self) -> Optional[Pair]:
        rows = self.active_rows()
        if not rows:
            return None
        index = min(self.selected_row_index(), len(rows) - 1)
        removed = rows[index]
        if self.request_tab is RequestTab.HEADERS:
            self.headers.pop(removed[0], None)
        elif self.request_tab is RequestTab.QUERY:
            del self.query_params[index]
        else:
            del self.body_form[index]
        self._set_selected_row_index(max(min(index, len(rows) - 2), 0))
        return removed

    # -- popups ------------------------------------------------------------

    def open_method_popup(self) -> None:
        self.popup = Popup(PopupKind.METHOD)

    def open_add_form(self) -> Optional[Form]:
        kind = self._form_kind(editing=False)
        if kind is None:
            return None
        return self._open_form(build_form(kind))

    def open_edit_form(self) -> Optional[Form]:
        kind = self._form_kind(editing=True)
        rows = self.active_rows()
        if kind is None or not rows:
            return None
        key, value = rows[min(self.selected_row_index(), len(rows) - 1)]
        return self._open_form(build_form(kind, key, value))

    def _open_form(self, form: Form) -> Form:
        self.popup = Popup(PopupKind.FORM, form)
        return form

    def _form_kind(self, *, editing: bool) -> Optional[FormKind]:
        if self.request_tab is RequestTab.HEADERS:
            return FormKind.EDIT_HEADER if editing else FormKind.ADD_HEADER
        if self.request_tab is RequestTab.QUERY:
            return FormKind.EDIT_QUERY_PARAM if editing else FormKind.ADD_QUERY_PARAM
        if self.body_content_type is BodyContentType.FORM:
            return FormKind.EDIT_FORM_FIELD if editing else FormKind.ADD_FORM_FIELD
        return None

    def close_popup(self) -> None:
        self.popup = None
        self.input_mode = InputMode.NORMAL

    def submit_form(self, form: Form) -> bool:
        """Fold ``form`` into the state. Returns ``False`` for an empty key."""

        values = form.values()
        key = values.get("key", "").strip()
        value = values.get("value", "")
        if not key:
            return False

        kind = form.kind
        if kind is FormKind.ADD_HEADER:
            self.headers[key] = value
        elif kind is FormKind.EDIT_HEADER:
            current_key = values.get("current_key", key)
            if current_key != key:
                self.headers.pop(current_key, None)
            self.headers[key] = value
        elif kind is FormKind.ADD_QUERY_PARAM:
            self.query_params.append((key, value))
        elif kind is FormKind.EDIT_QUERY_PARAM:
            self._replace_pair(self.query_params, self.selected_query_param, key, value)
        elif kind is FormKind.ADD_FORM_FIELD:
            self.body_form.append((key, value))
        elif kind is FormKind.EDIT_FORM_FIELD:
            self._replace_pair(self.body_form, self.selected_form_field, key, value)
        return True

    @staticmethod
    def _replace_pair(rows: List[Pair], index: int, key: str, value: str) -> None:
        if 0 <= index < len(rows):
            rows[index] = (key, value)
        else:
            rows.append((key, value))

    # -- transport ---------------------------------------------------------

    def build_request(self) -> RequestSpec:
        send_form = self.body_content_type is BodyContentType.FORM
        return RequestSpec(
            method=self.method.value,
            url=self.endpoint.text.strip(),
            headers=dict(self.headers),
            query_params=tuple(self.query_params),
            body="" if send_form else self.body.text,
            form=tuple(self.body_form) if send_form else (),
            send_form=send_form,
        )

    def receive_response(self, response: Response) -> None:
        self.response = response
        self.response_scroll = 0
        self.is_loading = False


__all__ = ["AppState", "Popup", "PopupKind", "default_headers"]
