"""Normal and insert modes, both resolved through the keymap registry."""

from __future__ import annotations

from reqtui.keymaps.resolver import ResolutionMatch
from reqtui.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, require_keymap_resolver


class KeymapMode(Mode):
    """Looks up each key in the registry under the current app flags."""

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"reqtui.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        match = self._resolver.resolve(
            self.name, key_to_token(key), context=self.context.state.flags()
        )
        if match is not None:
            return self._execute_match(match)
        return self.handle_unmatched(key)

    def handle_unmatched(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


class NormalMode(KeymapMode):
    name = "normal"


class InsertMode(KeymapMode):
    """Unbound printable keys are typed into the focused buffer."""

    name = "insert"

    def handle_unmatched(self, key: KeyInput) -> ModeResult:
        text = key.text
        if not text or not text.isprintable():
            return ModeResult(consumed=False, status="miss")
        buffer = self.context.state.focused_buffer()
        if buffer is None:
            return ModeResult(consumed=False, status="miss", message="not_editable")
        buffer.insert_text(text)
        return ModeResult(consumed=True, status="editing")


__all__ = ["InsertMode", "KeymapMode", "NormalMode"]
