"""Insert-mode verbs routed to whichever buffer currently has focus."""

from __future__ import annotations

from reqtui.buffer import EditCommand, EditOp
from reqtui.keymaps.resolver import ResolutionMatch
from reqtui.modes.base_mode import ModeContext, ModeResult

INDENT = "  "


def _edit(context: ModeContext, command: EditCommand) -> ModeResult:
    buffer = context.state.focused_buffer()
    if buffer is None:
        return ModeResult(consumed=False, status="miss", message="not_editable")
    buffer.apply(command)
    return ModeResult(consumed=True, status="editing")


def _op_action(op: EditOp):
    def action(context: ModeContext, match: ResolutionMatch) -> ModeResult:
        del match
        return _edit(context, EditCommand(op))

    action.__name__ = op.value
    return action


move_left = _op_action(EditOp.MOVE_LEFT)
move_right = _op_action(EditOp.MOVE_RIGHT)
move_up = _op_action(EditOp.MOVE_UP)
move_down = _op_action(EditOp.MOVE_DOWN)
move_to_line_start = _op_action(EditOp.LINE_START)
move_to_line_end = _op_action(EditOp.LINE_END)
delete_before_cursor = _op_action(EditOp.DELETE_BEFORE)
insert_newline = _op_action(EditOp.INSERT_NEWLINE)


def insert_indent(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.state.focused_buffer()
    if buffer is None:
        return ModeResult(consumed=False, status="miss", message="not_editable")
    buffer.insert_text(INDENT)
    return ModeResult(consumed=True, status="editing")


__all__ = [
    "delete_before_cursor",
    "insert_indent",
    "insert_newline",
    "move_down",
    "move_left",
    "move_right",
    "move_to_line_end",
    "move_to_line_start",
    "move_up",
]
