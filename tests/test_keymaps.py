from __future__ import annotations

import pytest

from reqtui.keymaps import (
    ActionRef,
    Binding,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
)
from reqtui.keymaps.defaults import (
    DEFAULT_ACTIONS,
    DEFAULT_BINDINGS,
    load_default_keymaps,
    rebind,
)
from reqtui.state import AppBlock, AppState


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "normal",
    key: str = "j",
    action_id: str = "core.test",
    when: tuple[str | WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        stroke=KeyStroke.parse(key),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in {binding.action_id for binding in bindings}:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_keystroke_parse_normalizes_modifiers() -> None:
    stroke = KeyStroke.parse("shift+ctrl+s")

    assert stroke.key == "s"
    assert stroke.modifiers == ("CTRL", "SHIFT")
    assert stroke.token == "CTRL+SHIFT+s"
    assert KeyStroke.parse("+").token == "+"


def test_when_clause_parse_and_evaluate() -> None:
    negated = WhenClause.parse("!popup")

    assert negated == WhenClause("popup", False)
    assert negated.evaluate({}) is True
    assert negated.evaluate({"popup": True}) is False
    with pytest.raises(ValueError):
        WhenClause.parse("  ")


def test_binding_accepts_string_stroke_and_when() -> None:
    binding = Binding(
        id="b", mode="normal", stroke="ENTER", action_id="a", when=("block.method",)
    )

    assert binding.token == "ENTER"
    assert dict(binding.when_map) == {"block.method": True}


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding("orphan"))


def test_same_key_same_context_conflicts() -> None:
    registry = build_registry([make_binding("first")])

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding("second"))

    assert [b.id for b in excinfo.value.conflicts] == ["first"]


def test_disjoint_contexts_share_a_key() -> None:
    registry = build_registry(
        [
            make_binding("scroll", when=("block.response",)),
            make_binding("tabs", when=("block.request",)),
        ]
    )

    assert {b.id for b in registry.bindings_for("normal", "j")} == {"scroll", "tabs"}


def test_replace_drops_conflicting_binding() -> None:
    registry = build_registry([make_binding("first")])

    registry.register_binding(make_binding("second"), replace=True)

    assert [b.id for b in registry.bindings_for("normal", "j")] == ["second"]
    assert registry.unregister_binding("second") is not None
    assert registry.bindings_for("normal", "j") == []
    assert registry.stats().binding_count == 0


def test_resolver_prefers_priority_then_specificity() -> None:
    registry = build_registry(
        [
            make_binding("general", action_id="core.general"),
            make_binding("specific", when=("popup",), action_id="core.specific"),
        ]
    )
    resolver = KeymapResolver(registry)

    assert resolver.resolve("normal", "j", context={"popup": True}).binding.id == (
        "specific"
    )
    assert resolver.resolve("normal", "j", context={}).binding.id == "general"

    registry.register_action(make_action("core.urgent"))
    registry.register_binding(
        make_binding("urgent", action_id="core.urgent", when=("x",), priority=5)
    )
    match = resolver.resolve("normal", "j", context={"popup": True, "x": True})
    assert match is not None
    assert match.action.id == "core.urgent"


def test_resolver_returns_none_when_nothing_applies() -> None:
    registry = build_registry([make_binding("gated", when=("popup",))])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("normal", "j", context={}) is None
    assert resolver.resolve("insert", "j", context={"popup": True}) is None


def test_defaults_load_without_conflicts() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.action_count == len(DEFAULT_ACTIONS)
    assert stats.binding_count == len(DEFAULT_BINDINGS)
    assert stats.modes == ("insert", "normal")


def test_default_j_depends_on_selected_block() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    state = AppState()

    expected = {
        AppBlock.METHOD: "nav.next_method",
        AppBlock.REQUEST: "nav.previous_tab",
        AppBlock.REQUEST_CONTENT: "nav.next_row",
        AppBlock.RESPONSE: "nav.scroll_down",
    }
    for block, action_id in expected.items():
        state.selected_block = block
        match = resolver.resolve("normal", "j", context=state.flags())
        assert match is not None
        assert match.action.id == action_id

    state.selected_block = AppBlock.ENDPOINT
    assert resolver.resolve("normal", "j", context=state.flags()) is None


def test_extra_bindings_override_defaults() -> None:
    registry = KeymapRegistry()
    quit_binding = next(b for b in DEFAULT_BINDINGS if b.action_id == "core.quit")
    remapped = rebind(quit_binding, "x")
    custom = Binding(
        id="normal.custom.q",
        mode="normal",
        stroke="q",
        action_id="core.next_block",
    )

    load_default_keymaps(
        registry,
        extra_bindings=[custom, remapped],
        exclude_bindings=[],
    )

    resolver = KeymapResolver(registry)
    assert resolver.resolve("normal", "q").action.id == "core.next_block"
    assert resolver.resolve("normal", "x").action.id == "core.quit"
