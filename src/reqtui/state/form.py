"""Popup forms used to add and edit key/value rows."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from reqtui.buffer import TextBuffer

from .navigation import cycle_index


class FormKind(str, Enum):
    ADD_HEADER = "add_header"
    EDIT_HEADER = "edit_header"
    ADD_QUERY_PARAM = "add_query_param"
    EDIT_QUERY_PARAM = "edit_query_param"
    ADD_FORM_FIELD = "add_form_field"
    EDIT_FORM_FIELD = "edit_form_field"

    @property
    def is_edit(self) -> bool:
        return self.value.startswith("edit_")


_TITLES: Dict[FormKind, str] = {
    FormKind.ADD_HEADER: "Add Header",
    FormKind.EDIT_HEADER: "Edit Header",
    FormKind.ADD_QUERY_PARAM: "Add Query Parameter",
    FormKind.EDIT_QUERY_PARAM: "Edit Query Parameter",
    FormKind.ADD_FORM_FIELD: "Add Form Field",
    FormKind.EDIT_FORM_FIELD: "Edit Form Field",
}


@dataclass(slots=True)
class FormField:
    label: str
    name: str
    hidden: bool = False
    buffer: TextBuffer = field(default_factory=TextBuffer.single_line)

    @classmethod
    def create(
        cls, label: str, name: str, *, value: str = "", hidden: bool = False
    ) -> "FormField":
        return cls(
            label=label,
            name=name,
            hidden=hidden,
            buffer=TextBuffer.single_line(value, name=name),
        )

    @property
    def value(self) -> str:
        return self.buffer.text


@dataclass(slots=True)
class Form:
    kind: FormKind
    fields: List[FormField]
    title: str = ""
    selected_field: int = 0

    def visible_fields(self) -> List[FormField]:
        return [f for f in self.fields if not f.hidden]

    def selected(self) -> FormField:
        visible = self.visible_fields()
        self.selected_field = min(max(self.selected_field, 0), len(visible) - 1)
        return visible[self.selected_field]

    def next(self) -> None:
        self.selected_field = cycle_index(
            self.selected_field, len(self.visible_fields()), 1
        )

    def previous(self) -> None:
        self.selected_field = cycle_index(
            self.selected_field, len(self.visible_fields()), -1
        )

    def values(self) -> Dict[str, str]:
        return {f.name: f.value for f in self.fields}


def build_form(kind: FormKind, key: str = "", value: str = "") -> Form:
    """Return the key/value form for ``kind``, pre-filled when editing."""

    fields = [
        FormField.create("Key", "key", value=key),
        FormField.create("Value", "value", value=value),
    ]
    if kind is FormKind.EDIT_HEADER:
        fields.append(FormField.create("", "current_key", value=key, hidden=True))
    return Form(kind=kind, fields=fields, title=_TITLES[kind])


__all__ = ["Form", "FormField", "FormKind", "build_form"]
