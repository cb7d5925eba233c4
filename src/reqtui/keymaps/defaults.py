"""Built-in actions and the bindings that seed both modes."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from reqtui.actions import core as core_actions
from reqtui.actions import editing as editing_actions
from reqtui.actions import navigation as nav_actions
from reqtui.actions import popup as popup_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.enter_insert", core_actions.enter_insert_mode, "Enter insert mode"),
    ActionRef("core.exit_to_normal", core_actions.exit_to_normal_mode, "Leave insert mode"),
    ActionRef("core.quit", core_actions.quit_or_close, "Quit, or close the open popup"),
    ActionRef("core.next_block", core_actions.next_block, "Focus the next block"),
    ActionRef("core.previous_block", core_actions.previous_block, "Focus the previous block"),
    ActionRef("core.activate", core_actions.activate_block, "Open, descend, or send"),
    ActionRef("core.send", core_actions.send_request, "Send the request"),
    ActionRef("core.send_and_exit", core_actions.send_and_exit, "Send and leave insert mode"),
    ActionRef("nav.scroll_down", nav_actions.scroll_response_down, "Scroll response down"),
    ActionRef("nav.scroll_up", nav_actions.scroll_response_up, "Scroll response up"),
    ActionRef("nav.next_tab", nav_actions.next_request_tab, "Next request tab"),
    ActionRef("nav.previous_tab", nav_actions.previous_request_tab, "Previous request tab"),
    ActionRef("nav.next_method", nav_actions.next_method, "Next HTTP method"),
    ActionRef("nav.previous_method", nav_actions.previous_method, "Previous HTTP method"),
    ActionRef("nav.next_row", nav_actions.next_row, "Select next row"),
    ActionRef("nav.previous_row", nav_actions.previous_row, "Select previous row"),
    ActionRef("nav.toggle_body", nav_actions.toggle_body_content_type, "Toggle text/form body"),
    ActionRef("edit.left", editing_actions.move_left, "Cursor left"),
    ActionRef("edit.right", editing_actions.move_right, "Cursor right"),
    ActionRef("edit.up", editing_actions.move_up, "Cursor up"),
    ActionRef("edit.down", editing_actions.move_down, "Cursor down"),
    ActionRef("edit.line_start", editing_actions.move_to_line_start, "Start of line"),
    ActionRef("edit.line_end", editing_actions.move_to_line_end, "End of line"),
    ActionRef("edit.backspace", editing_actions.delete_before_cursor, "Delete before cursor"),
    ActionRef("edit.newline", editing_actions.insert_newline, "Insert newline"),
    ActionRef("edit.indent", editing_actions.insert_indent, "Insert two spaces"),
    ActionRef("rows.add", popup_actions.add_row, "Add a row"),
    ActionRef("rows.edit", popup_actions.edit_row, "Edit the selected row"),
    ActionRef("rows.delete", popup_actions.delete_row, "Delete the selected row"),
    ActionRef("form.next_field", popup_actions.next_field, "Next form field"),
    ActionRef("form.previous_field", popup_actions.previous_field, "Previous form field"),
    ActionRef("form.next_field_editing", popup_actions.next_field_editing, "Next form field"),
    ActionRef(
        "form.previous_field_editing",
        popup_actions.previous_field_editing,
        "Previous form field",
    ),
    ActionRef("form.submit", popup_actions.submit_form, "Accept the form"),
    ActionRef("popup.close", popup_actions.close_popup, "Close the popup"),
)


def _bind(
    mode: str,
    key: str,
    action_id: str,
    *when: str,
    name: str | None = None,
) -> Binding:
    suffix = name or key.lower()
    return Binding(
        id=f"{mode}.{action_id}.{suffix}",
        mode=mode,
        stroke=KeyStroke.parse(key),
        action_id=action_id,
        when=tuple(when),
    )


_MAIN = "!popup"
_ROWS = ("block.request_content", _MAIN)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    # normal mode, main screen
    _bind("normal", "q", "core.quit"),
    _bind("normal", "TAB", "core.next_block", _MAIN),
    _bind("normal", "BACKTAB", "core.previous_block", _MAIN),
    _bind("normal", "i", "core.enter_insert", "editable"),
    _bind("normal", "ENTER", "core.activate", _MAIN),
    _bind("normal", "j", "nav.scroll_down", "block.response", _MAIN),
    _bind("normal", "k", "nav.scroll_up", "block.response", _MAIN),
    _bind("normal", "j", "nav.previous_tab", "block.request", _MAIN),
    _bind("normal", "k", "nav.next_tab", "block.request", _MAIN),
    _bind("normal", "j", "nav.next_method", "block.method", _MAIN),
    _bind("normal", "k", "nav.previous_method", "block.method", _MAIN),
    _bind("normal", "j", "nav.next_row", *_ROWS),
    _bind("normal", "k", "nav.previous_row", *_ROWS),
    _bind("normal", "a", "rows.add", *_ROWS),
    _bind("normal", "e", "rows.edit", *_ROWS),
    _bind("normal", "d", "rows.delete", *_ROWS),
    _bind("normal", "t", "nav.toggle_body", "tab.body", *_ROWS),
    # normal mode, popups
    _bind("normal", "j", "nav.next_method", "popup.method", name="popup"),
    _bind("normal", "k", "nav.previous_method", "popup.method", name="popup"),
    _bind("normal", "ENTER", "popup.close", "popup.method"),
    _bind("normal", "ESC", "popup.close", "popup"),
    _bind("normal", "j", "form.next_field", "popup.form"),
    _bind("normal", "k", "form.previous_field", "popup.form"),
    _bind("normal", "ENTER", "form.submit", "popup.form"),
    # insert mode
    _bind("insert", "ESC", "core.exit_to_normal"),
    _bind("insert", "LEFT", "edit.left", "editable"),
    _bind("insert", "RIGHT", "edit.right", "editable"),
    _bind("insert", "UP", "edit.up", *_ROWS),
    _bind("insert", "DOWN", "edit.down", *_ROWS),
    _bind("insert", "HOME", "edit.line_start", "editable"),
    _bind("insert", "END", "edit.line_end", "editable"),
    _bind("insert", "BACKSPACE", "edit.backspace", "editable"),
    _bind("insert", "ENTER", "core.send_and_exit", "block.endpoint", _MAIN),
    _bind("insert", "ENTER", "edit.newline", *_ROWS),
    _bind("insert", "ENTER", "form.submit", "popup.form"),
    _bind("insert", "TAB", "edit.indent", *_ROWS),
    _bind("insert", "TAB", "form.next_field_editing", "popup.form"),
    _bind("insert", "BACKTAB", "form.previous_field_editing", "popup.form"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace_existing: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings, then ``extra_bindings``.

    Extra bindings replace any default they collide with, which is how a
    user remaps a key.
    """

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace_existing)
    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace_existing)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


def rebind(binding: Binding, key: str) -> Binding:
    """Copy ``binding`` onto another key."""

    return replace(binding, stroke=KeyStroke.parse(key))


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps", "rebind"]
