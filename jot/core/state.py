from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from jot.core.task_store import Task


class TaskFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def empty_title(self) -> str:
        return _EMPTY_STATES[self][0]

    @property
    def empty_description(self) -> str:
        return _EMPTY_STATES[self][1]


_EMPTY_STATES: dict[TaskFilter, tuple[str, str]] = {
    TaskFilter.ALL: ("No tasks yet", "Add your first task to get started!"),
    TaskFilter.ACTIVE: ("No active tasks", "Everything is done!"),
    TaskFilter.COMPLETED: ("No completed tasks", "Start checking things off!"),
}


@dataclass(frozen=True, slots=True)
class TaskListState:
    current_filter: TaskFilter = TaskFilter.ALL
    editing_task_id: str | None = None


@dataclass(frozen=True, slots=True)
class TaskListSnapshot:
    """Everything needed to draw the list once."""

    tasks: tuple[Task, ...]
    current_filter: TaskFilter
    completed_count: int
    total_count: int
    editing_task_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.tasks

    @property
    def pending_count(self) -> int:
        return self.total_count - self.completed_count

    @property
    def summary(self) -> str:
        return f"{self.completed_count} / {self.total_count}"

    @property
    def empty_title(self) -> str:
        return self.current_filter.empty_title

    @property
    def empty_description(self) -> str:
        return self.current_filter.empty_description


class TaskListStateStore:
    def __init__(self, initial: TaskListState | None = None) -> None:
        self._state = initial or TaskListState()
        self._listeners: set[Callable[[TaskListState], None]] = set()

    @property
    def state(self) -> TaskListState:
        return self._state

    def subscribe(self, callback: Callable[[TaskListState], None]) -> None:
        self._listeners.add(callback)
        callback(self._state)

    def unsubscribe(self, callback: Callable[[TaskListState], None]) -> None:
        self._listeners.discard(callback)

    def set_filter(self, value: TaskFilter) -> None:
        self._update_state(current_filter=value)

    def set_editing_task_id(self, value: str | None) -> None:
        self._update_state(editing_task_id=value)

    def _update_state(self, **changes: object) -> None:
        new_state = replace(self._state, **changes)
        if new_state == self._state:
            return
        self._state = new_state
        for callback in list(self._listeners):
            callback(self._state)
