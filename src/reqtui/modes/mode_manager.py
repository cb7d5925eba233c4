"""Mode manager coordinating the normal/insert pipelines."""

from __future__ import annotations

from typing import Dict, Optional, Type

from reqtui.keymaps import KeymapRegistry, KeymapResolver
from reqtui.keymaps.defaults import load_default_keymaps
from reqtui.runtime import telemetry
from reqtui.state import AppState, InputMode
from reqtui.transport import RequestDispatcher

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .keymap_mode import InsertMode, NormalMode


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    The active mode name is mirrored into ``AppState.input_mode`` so the
    renderer never needs to know about the manager.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("reqtui.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="reqtui.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="reqtui.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def register_mode(self, mode_cls: Type[Mode], /, **mode_kwargs: object) -> Mode:
        mode = mode_cls(self.context, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            self._sync_input_mode(mode.name)
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._sync_input_mode(name)
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.mode_switched(previous.name if previous else None, name)

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        # Popups may close the form that insert mode was editing.
        wanted = self.context.state.input_mode.value
        if mode.name != wanted:
            self.switch_mode(wanted)
            mode = self._modes[wanted]
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result

    def _sync_input_mode(self, name: str) -> None:
        try:
            self.context.state.input_mode = InputMode(name)
        except ValueError:
            pass


def create_default_manager(
    state: AppState | None = None,
    *,
    dispatcher: RequestDispatcher | None = None,
    bus: ModeBus | None = None,
) -> ModeManager:
    """Build a ModeManager with both modes and the default keymaps."""

    context = ModeContext(
        state=state or AppState(),
        bus=bus or ModeBus(),
        extras={},
    )
    if dispatcher is not None:
        context.extras["dispatcher"] = dispatcher
    manager = ModeManager(context)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    return manager


__all__ = ["ModeManager", "create_default_manager"]
