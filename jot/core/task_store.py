from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable, NamedTuple

from jot.core.errors import PersistenceError, ReferenceNotFound, ValidationError
from jot.core.logging import get_logger, log_event, log_failure
from jot.core.protocols import KeyValueStore
from jot.core.state import TaskFilter

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _epoch_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass(slots=True)
class Task:
    id: str
    text: str
    completed: bool = False
    created_at: datetime = field(default_factory=_utcnow)

    def to_json(self) -> dict[str, object]:
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_json(cls, payload: dict[str, object]) -> Task:
        created_at = payload.get("createdAt")
        return cls(
            id=str(payload.get("id") or ""),
            text=str(payload.get("text") or "").strip(),
            completed=payload.get("completed") is True,
            created_at=_parse_timestamp(created_at),
        )


def _parse_timestamp(value: object) -> datetime:
    if not isinstance(value, str):
        return _utcnow()
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return _utcnow()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class TaskStats(NamedTuple):
    total: int
    completed: int
    pending: int


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter) -> list[Task]:
    if task_filter is TaskFilter.ACTIVE:
        return [task for task in tasks if not task.completed]
    if task_filter is TaskFilter.COMPLETED:
        return [task for task in tasks if task.completed]
    return list(tasks)


def normalize_text(text: str) -> str:
    normalized = text.strip()
    if not normalized:
        raise ValidationError("Please enter a task")
    return normalized


class TaskStore:
    """Ordered, most-recent-first task list backed by a key-value store.

    Mutations only touch memory; callers flush with :meth:`save`.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        *,
        key: str = "todoTasks",
        clock: Callable[[], int] = _epoch_ms,
    ) -> None:
        self.backend = backend
        self.key = key
        self._clock = clock
        self._last_id = 0
        self._tasks: list[Task] = []

    def load(self) -> list[Task]:
        try:
            raw = self.backend.get(self.key)
        except PersistenceError as exc:
            log_failure(logger, "tasks.load_failed", key=self.key, error=str(exc))
            self._tasks = []
            return []

        if raw is None:
            self._tasks = []
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            log_failure(logger, "tasks.load_failed", key=self.key, error=str(exc))
            self._tasks = []
            return []

        if not isinstance(data, list):
            log_failure(
                logger,
                "tasks.load_failed",
                key=self.key,
                error=f"expected a list, got {type(data).__name__}",
            )
            self._tasks = []
            return []

        tasks: list[Task] = []
        seen: set[str] = set()
        declared = {
            str(raw_task["id"])
            for raw_task in data
            if isinstance(raw_task, dict) and raw_task.get("id")
        }
        for raw_task in data:
            if not isinstance(raw_task, dict):
                continue
            task = Task.from_json(raw_task)
            if not task.text:
                continue
            if not task.id:
                task.id = self._next_id(seen | declared)
            if task.id in seen:
                logger.debug("Dropping duplicate task id %s", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)
        self._tasks = tasks
        log_event(logger, "tasks.loaded", key=self.key, count=len(tasks))
        return list(self._tasks)

    def save(self) -> None:
        payload = [task.to_json() for task in self._tasks]
        self.backend.set(self.key, json.dumps(payload, indent=2, ensure_ascii=False))

    def all(self) -> list[Task]:
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def stats(self) -> TaskStats:
        completed = sum(1 for task in self._tasks if task.completed)
        total = len(self._tasks)
        return TaskStats(total=total, completed=completed, pending=total - completed)

    def find(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def get(self, task_id: str) -> Task:
        task = self.find(task_id)
        if task is None:
            raise ReferenceNotFound(task_id)
        return task

    def add(self, text: str) -> Task:
        new_task = Task(
            id=self._next_id(),
            text=normalize_text(text),
            completed=False,
            created_at=_utcnow(),
        )
        self._tasks.insert(0, new_task)
        return new_task

    def update_text(self, task_id: str, new_text: str) -> Task:
        normalized = normalize_text(new_text)
        task = self.get(task_id)
        task.text = normalized
        return task

    def toggle(self, task_id: str) -> Task:
        task = self.get(task_id)
        task.completed = not task.completed
        return task

    def delete(self, task_id: str) -> bool:
        before = len(self._tasks)
        self._tasks = [task for task in self._tasks if task.id != task_id]
        return len(self._tasks) != before

    def _next_id(self, taken: Iterable[str] = ()) -> str:
        taken = set(taken) | {task.id for task in self._tasks}
        candidate = max(self._clock(), self._last_id + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last_id = candidate
        return str(candidate)
