from __future__ import annotations

from typing import Callable, Protocol

from jot.core.errors import Severity
from jot.core.state import TaskListSnapshot


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class TaskView(Protocol):
    """What the controller needs from whatever draws the task list."""

    def render_tasks(self, snapshot: TaskListSnapshot) -> None: ...
    def show_notification(self, message: str, severity: Severity) -> None: ...
    def confirm(self, message: str, callback: Callable[[bool | None], None]) -> None: ...
    def enter_edit_mode(self, text: str) -> None: ...
    def leave_edit_mode(self) -> None: ...
