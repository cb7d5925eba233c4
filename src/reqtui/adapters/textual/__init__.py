"""Textual host for reqtui.

Only the controller is imported eagerly; ``reqtui.adapters.textual.app``
requires the ``textual`` package at import time.
"""

from .controller import TextualRequestAdapter, TextualUIHooks

__all__ = ["TextualRequestAdapter", "TextualUIHooks"]
