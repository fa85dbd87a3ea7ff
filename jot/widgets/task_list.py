from __future__ import annotations

from datetime import datetime

from rich.markup import escape
from textual import on
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Checkbox, Label, ListItem, ListView

from jot.core.messages import DeleteTaskRequest, EditTaskRequest, ToggleTaskRequest
from jot.core.state import TaskListSnapshot
from jot.core.task_store import Task


class TaskListItem(ListItem):
    """Visual row representing a task."""

    def __init__(self, task: Task, *, editing: bool = False) -> None:
        self._task_model = task
        classes = ["task_item"]
        if task.completed:
            classes.append("task_item--completed")
        if editing:
            classes.append("task_item--editing")

        checkbox = Checkbox("", value=task.completed, classes="task_item_check")
        edit_button = Button("Edit", classes="task_item_edit")
        delete_button = Button("Delete", classes="task_item_delete", variant="error")
        # Keyboard focus stays on the list; rows are driven by its bindings.
        for widget in (checkbox, edit_button, delete_button):
            widget.can_focus = False

        super().__init__(
            Horizontal(
                checkbox,
                Label(self.render_text_markup(task), classes="task_item_text"),
                Label(self.render_meta(task), classes="task_item_meta"),
                edit_button,
                delete_button,
            ),
            classes=" ".join(classes),
        )

    @property
    def task_model(self) -> Task:
        return self._task_model

    @on(Checkbox.Changed, ".task_item_check")
    def _handle_check(self, event: Checkbox.Changed) -> None:
        event.stop()
        if event.value != self._task_model.completed:
            self.post_message(ToggleTaskRequest(self._task_model.id))

    @on(Button.Pressed, ".task_item_edit")
    def _handle_edit(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(EditTaskRequest(self._task_model.id))

    @on(Button.Pressed, ".task_item_delete")
    def _handle_delete(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(DeleteTaskRequest(self._task_model.id))

    @staticmethod
    def render_text_markup(task: Task) -> str:
        safe = escape(task.text)
        if task.completed:
            return f"[strike dim]{safe}[/]"
        return safe

    @staticmethod
    def render_meta(task: Task) -> str:
        return f"added {TaskListItem._format_timestamp(task.created_at)}"

    @staticmethod
    def _format_timestamp(stamp: datetime) -> str:
        local = stamp.astimezone()
        return local.strftime("%b %d %H:%M")


class TaskList(Vertical):
    """List of task rows, rebuilt from scratch on every render."""

    BINDINGS = [
        Binding("space", "toggle_task", "Toggle", show=True),
        Binding("e", "edit_task", "Edit", show=True),
        Binding("delete", "delete_task", "Delete", show=True),
        Binding("j", "cursor_down", "Next", show=False),
        Binding("k", "cursor_up", "Previous", show=False),
    ]

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._index_assignment_token = 0

    def compose(self):
        yield ListView(id="task_list_view")

    def on_mount(self) -> None:
        self.query_one(ListView).border_title = "Tasks"

    @property
    def list_view(self) -> ListView:
        return self.query_one(ListView)

    def show_snapshot(self, snapshot: TaskListSnapshot) -> None:
        list_view = self.list_view
        previous = list_view.index
        list_view.border_title = f"Tasks · {snapshot.current_filter.label}"
        list_view.index = None
        list_view.clear()

        if snapshot.is_empty:
            placeholder = ListItem(
                Label(snapshot.empty_title, classes="task_empty_title"),
                Label(snapshot.empty_description, classes="task_empty_description"),
                classes="task_item task_item--empty",
            )
            placeholder.disabled = True
            list_view.append(placeholder)
            self._queue_index_assignment(list_view, None)
            return

        for task in snapshot.tasks:
            list_view.append(
                TaskListItem(task, editing=task.id == snapshot.editing_task_id)
            )
        target = 0 if previous is None else min(previous, len(snapshot.tasks) - 1)
        self._queue_index_assignment(list_view, target)

    def task_items(self) -> list[TaskListItem]:
        return [
            child for child in self.list_view.children if isinstance(child, TaskListItem)
        ]

    def _selected_task(self) -> Task | None:
        item = self.list_view.highlighted_child
        if isinstance(item, TaskListItem):
            return item.task_model
        return None

    def _queue_index_assignment(self, list_view: ListView, target: int | None) -> None:
        self._index_assignment_token += 1
        token = self._index_assignment_token

        def assign(idx=target, token=token) -> None:
            if token != self._index_assignment_token:
                return
            if idx is None or not self.task_items():
                list_view.index = None
                return
            list_view.index = max(0, min(idx, len(list_view.children) - 1))

        list_view.call_after_refresh(assign)

    def action_toggle_task(self) -> None:
        task = self._selected_task()
        if task:
            self.post_message(ToggleTaskRequest(task.id))

    def action_edit_task(self) -> None:
        task = self._selected_task()
        if task:
            self.post_message(EditTaskRequest(task.id))

    def action_delete_task(self) -> None:
        task = self._selected_task()
        if task:
            self.post_message(DeleteTaskRequest(task.id))

    def action_cursor_down(self) -> None:
        if self.task_items():
            self.list_view.action_cursor_down()

    def action_cursor_up(self) -> None:
        if self.task_items():
            self.list_view.action_cursor_up()
