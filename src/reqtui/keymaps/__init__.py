"""Keymap registry, resolver and binding models.

The built-in bindings live in :mod:`reqtui.keymaps.defaults`, which pulls in
the action handlers and is therefore imported on demand.
"""

from .models import ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "RegistryStats",
    "ResolutionMatch",
    "WhenClause",
]
