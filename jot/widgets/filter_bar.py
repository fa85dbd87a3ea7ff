from __future__ import annotations

from textual import on
from textual.containers import Horizontal
from textual.widgets import RadioButton, RadioSet

from jot.core.messages import FilterChangeRequest
from jot.core.state import TaskFilter


class FilterBar(Horizontal):
    """Three mutually exclusive filter selectors."""

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id or "filter_bar")

    def compose(self):
        with RadioSet(id="filter_set"):
            for task_filter in TaskFilter:
                yield RadioButton(
                    task_filter.label,
                    value=task_filter is TaskFilter.ALL,
                    id=f"filter_{task_filter.value}",
                )

    def select(self, task_filter: TaskFilter) -> None:
        button = self.query_one(f"#filter_{task_filter.value}", RadioButton)
        if not button.value:
            button.value = True

    @on(RadioSet.Changed, "#filter_set")
    def _handle_changed(self, event: RadioSet.Changed) -> None:
        event.stop()
        pressed_id = event.pressed.id or ""
        self.post_message(FilterChangeRequest(pressed_id.removeprefix("filter_")))
