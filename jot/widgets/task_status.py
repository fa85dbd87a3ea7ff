from __future__ import annotations

from textual.widgets import Static

from jot.core.state import TaskListSnapshot


class TaskStatusIndicator(Static):
    """One-line tally for the whole collection, whatever the filter shows."""

    def __init__(self, id: str | None = None) -> None:
        super().__init__("", id=id or "task_status")
        self._totals = (0, 0)
        self.tally = ""
        self._render_tally(0, 0)

    def show_snapshot(self, snapshot: TaskListSnapshot) -> None:
        self._totals = (snapshot.completed_count, snapshot.total_count)
        self._render_tally(snapshot.completed_count, snapshot.total_count)
        self.set_class(snapshot.total_count > 0 and snapshot.pending_count == 0, "-all-done")

    def _render_tally(self, completed: int, total: int) -> None:
        if total == 0:
            self.tally = "nothing to do"
        elif completed == total:
            self.tally = f"✓ {completed} / {total} completed, all done"
        else:
            pending = total - completed
            self.tally = f"✓ {completed} / {total} completed · {pending} pending"
        self.update(self.tally)

    @property
    def totals(self) -> tuple[int, int]:
        return self._totals
