"""Action handlers bound to keys; each takes ``(context, match)``."""

from . import core, editing, navigation, popup
from .core import (
    activate_block,
    enter_insert_mode,
    exit_to_normal_mode,
    quit_or_close,
    send_request,
)

__all__ = [
    "activate_block",
    "core",
    "editing",
    "enter_insert_mode",
    "exit_to_normal_mode",
    "navigation",
    "popup",
    "quit_or_close",
    "send_request",
]
