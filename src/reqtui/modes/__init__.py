"""Input modes and the manager that dispatches key events to them."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .keymap_mode import InsertMode, KeymapMode, NormalMode

__all__ = [
    "InsertMode",
    "KeyInput",
    "KeymapMode",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
]
