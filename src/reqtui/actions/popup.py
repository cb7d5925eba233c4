"""Key/value rows and the popups that edit them."""

from __future__ import annotations

from reqtui.keymaps.resolver import ResolutionMatch
from reqtui.modes.base_mode import ModeContext, ModeResult


def add_row(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    form = context.state.open_add_form()
    if form is None:
        return ModeResult(consumed=True, status="noop")
    return ModeResult(consumed=True, message=form.title)


def edit_row(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    form = context.state.open_edit_form()
    if form is None:
        return ModeResult(consumed=True, status="noop")
    return ModeResult(consumed=True, message=form.title)


def delete_row(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    removed = context.state.delete_selected_row()
    if removed is None:
        return ModeResult(consumed=True, status="noop")
    context.bus.emit("row.deleted", removed)
    return ModeResult(consumed=True, message=f"deleted {removed[0]}")


def next_field(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    form = context.state.form
    if form is None:
        return ModeResult(consumed=False, status="miss")
    form.next()
    return ModeResult(consumed=True)


def previous_field(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    form = context.state.form
    if form is None:
        return ModeResult(consumed=False, status="miss")
    form.previous()
    return ModeResult(consumed=True)


def next_field_editing(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    result = next_field(context, match)
    form = context.state.form
    if form is not None:
        form.selected().buffer.move_to_line_end()
    return result


def previous_field_editing(
    context: ModeContext, match: ResolutionMatch
) -> ModeResult:
    result = previous_field(context, match)
    form = context.state.form
    if form is not None:
        form.selected().buffer.move_to_line_end()
    return result


def submit_form(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.state
    form = state.form
    if form is None:
        return ModeResult(consumed=False, status="miss")
    accepted = state.submit_form(form)
    state.close_popup()
    if accepted:
        context.bus.emit("form.submit", form.values())
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status="form_submit" if accepted else "form_discarded",
        message=form.title,
    )


def close_popup(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.close_popup()
    return ModeResult(consumed=True, switch_to="normal", message="popup_closed")


__all__ = [
    "add_row",
    "close_popup",
    "delete_row",
    "edit_row",
    "next_field",
    "next_field_editing",
    "previous_field",
    "previous_field_editing",
    "submit_form",
]
