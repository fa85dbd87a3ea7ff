from __future__ import annotations

from jot.core.errors import (
    PersistenceError,
    ReferenceNotFound,
    ValidationError,
    format_error,
)
from jot.core.logging import get_logger, log_event, log_failure
from jot.core.protocols import TaskView
from jot.core.state import TaskFilter, TaskListSnapshot, TaskListStateStore
from jot.core.task_store import Task, TaskStore, filter_tasks

logger = get_logger(__name__)


class TaskController:
    """Turns UI intents into task mutations, then persists and re-renders.

    Every mutating operation runs to completion before returning (apart from
    :meth:`delete`, which resumes in the confirmation callback). The view is
    redrawn from a fresh snapshot after each one.
    """

    def __init__(
        self,
        store: TaskStore,
        view: TaskView,
        *,
        state_store: TaskListStateStore | None = None,
    ) -> None:
        self._store = store
        self._view = view
        self._state = state_store or TaskListStateStore()

    @property
    def store(self) -> TaskStore:
        return self._store

    @property
    def state_store(self) -> TaskListStateStore:
        return self._state

    @property
    def current_filter(self) -> TaskFilter:
        return self._state.state.current_filter

    @property
    def editing_task_id(self) -> str | None:
        return self._state.state.editing_task_id

    def start(self) -> None:
        self._store.load()
        self.render()

    def submit(self, raw_text: str) -> None:
        editing_id = self.editing_task_id
        try:
            if editing_id is None:
                task = self._store.add(raw_text)
            else:
                task = self._store.update_text(editing_id, raw_text)
        except ValidationError as exc:
            self._view.show_notification(*format_error(exc))
            return
        except ReferenceNotFound as exc:
            # The task under edit vanished; drop the edit rather than recreate it.
            log_event(logger, "task.edit_dropped", task_id=exc.task_id)
            self._finish_edit()
            self._view.show_notification(*format_error(exc))
            self.render()
            return

        if editing_id is None:
            log_event(logger, "task.added", task_id=task.id)
            message = "Task added"
        else:
            log_event(logger, "task.updated", task_id=task.id)
            message = "Task updated"
            self._state.set_editing_task_id(None)

        self._persist()
        self.render()
        self._view.leave_edit_mode()
        self._view.show_notification(message, "information")

    def toggle_completion(self, task_id: str) -> None:
        try:
            task = self._store.toggle(task_id)
        except ReferenceNotFound:
            logger.debug("Ignoring toggle for missing task %s", task_id)
            return
        log_event(logger, "task.toggled", task_id=task.id, completed=task.completed)
        self._persist()
        self.render()

    def delete(self, task_id: str) -> None:
        def after(confirmed: bool | None) -> None:
            if not confirmed:
                return
            removed = self._store.delete(task_id)
            if self.editing_task_id == task_id:
                self._finish_edit()
            log_event(logger, "task.deleted", task_id=task_id, removed=removed)
            self._persist()
            self.render()
            self._view.show_notification("Task deleted", "information")

        self._view.confirm("Delete this task?", after)

    def begin_edit(self, task_id: str) -> None:
        task = self._store.find(task_id)
        if task is None:
            logger.debug("Ignoring edit for missing task %s", task_id)
            return
        self._state.set_editing_task_id(task.id)
        self._view.enter_edit_mode(task.text)
        self.render()

    def cancel_edit(self) -> None:
        if self.editing_task_id is None:
            return
        self._finish_edit()
        self.render()

    def set_filter(self, filter_name: str | TaskFilter) -> None:
        self._state.set_filter(TaskFilter(filter_name))
        self.render()

    def filtered_view(self) -> list[Task]:
        return filter_tasks(self._store.all(), self.current_filter)

    def snapshot(self) -> TaskListSnapshot:
        stats = self._store.stats()
        return TaskListSnapshot(
            tasks=tuple(self.filtered_view()),
            current_filter=self.current_filter,
            completed_count=stats.completed,
            total_count=stats.total,
            editing_task_id=self.editing_task_id,
        )

    def render(self) -> None:
        self._view.render_tasks(self.snapshot())

    def _finish_edit(self) -> None:
        self._state.set_editing_task_id(None)
        self._view.leave_edit_mode()

    def _persist(self) -> None:
        # Best effort: memory stays authoritative until the next good save.
        try:
            self._store.save()
        except PersistenceError as exc:
            log_failure(
                logger,
                "tasks.persist_failed",
                key=self._store.key,
                error=str(exc),
                count=len(self._store),
            )
