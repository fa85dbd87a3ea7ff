from __future__ import annotations

from textual import on
from textual.containers import Horizontal
from textual.widgets import Button, Input

from jot.core.messages import SubmitTaskRequest

ADD_LABEL = "Add"
UPDATE_LABEL = "Update"


class TaskEntry(Horizontal):
    """Single text field plus the add/update button."""

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id or "task_entry")
    def compose(self):
        yield Input(id="task_input", placeholder="What needs doing?")
        yield Button(ADD_LABEL, id="task_submit", variant="primary")

    @property
    def input(self) -> Input:
        return self.query_one("#task_input", Input)

    @property
    def value(self) -> str:
        return self.input.value

    def submit(self) -> None:
        self.post_message(SubmitTaskRequest(self.input.value))

    def enter_edit_mode(self, text: str) -> None:
        area = self.input
        area.value = text
        area.cursor_position = len(text)
        area.focus()
        self.query_one("#task_submit", Button).label = UPDATE_LABEL
        self.set_class(True, "task_entry--editing")

    def reset(self) -> None:
        self.input.value = ""
        self.query_one("#task_submit", Button).label = ADD_LABEL
        self.set_class(False, "task_entry--editing")

    @on(Input.Submitted, "#task_input")
    def _handle_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.submit()

    @on(Button.Pressed, "#task_submit")
    def _handle_button(self, event: Button.Pressed) -> None:
        event.stop()
        self.submit()
