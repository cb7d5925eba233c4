"""Application state: selectors, forms, and the request being composed."""

from .app_state import AppState, Popup, PopupKind, default_headers
from .form import Form, FormField, FormKind, build_form
from .navigation import (
    BLOCK_ORDER,
    METHOD_ORDER,
    TAB_ORDER,
    AppBlock,
    BodyContentType,
    InputMode,
    RequestMethod,
    RequestTab,
    cycle,
    cycle_index,
    next_in,
    previous_in,
)

__all__ = [
    "AppBlock",
    "AppState",
    "BLOCK_ORDER",
    "BodyContentType",
    "Form",
    "FormField",
    "FormKind",
    "InputMode",
    "METHOD_ORDER",
    "Popup",
    "PopupKind",
    "RequestMethod",
    "RequestTab",
    "TAB_ORDER",
    "build_form",
    "cycle",
    "cycle_index",
    "default_headers",
    "next_in",
    "previous_in",
]
