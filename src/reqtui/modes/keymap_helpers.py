"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from reqtui.keymaps.resolver import KeymapResolver

from .base_mode import KeyInput, ModeContext


def key_to_token(key: KeyInput) -> str:
    if key.modifiers:
        return "+".join(key.modifiers) + "+" + key.key
    return key.key


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


__all__ = ["key_to_token", "require_keymap_resolver"]
