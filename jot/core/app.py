from __future__ import annotations

from pathlib import Path
from typing import Callable

from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.theme import Theme
from textual.widgets import Footer, Label

from jot import __version__
from jot.core.config import RuntimeConfig, get_runtime_config
from jot.core.errors import Severity
from jot.core.logging import get_logger, log_event
from jot.core.messages import (
    DeleteTaskRequest,
    EditTaskRequest,
    FilterChangeRequest,
    SubmitTaskRequest,
    ToggleTaskRequest,
)
from jot.core.notify import NotifyTimeouts
from jot.core.paths import AppPaths
from jot.core.settings_store import SettingsStore
from jot.core.state import TaskFilter, TaskListSnapshot, TaskListState
from jot.core.storage import FileKeyValueStore
from jot.core.task_controller import TaskController
from jot.core.task_store import TaskStore
from jot.themes.themes import ALL_THEMES
from jot.widgets import ConfirmDialog, FilterBar, TaskEntry, TaskList, TaskStatusIndicator

logger = get_logger(__name__)


class Jot(App):
    TITLE = "jot"
    CSS_PATH = Path(__file__).parent.parent / "styles" / "index.tcss"

    BINDINGS = [
        Binding("ctrl+enter", "submit_task", "Save task", show=True, priority=True),
        Binding("escape", "cancel_edit", "Cancel edit", show=False),
        Binding("1", "filter('all')", "All", show=False),
        Binding("2", "filter('active')", "Active", show=False),
        Binding("3", "filter('completed')", "Completed", show=False),
        Binding("ctrl+n", "focus_input", "New task", show=True),
        Binding("ctrl+l", "focus_list", "Tasks", show=True),
    ]

    def __init__(
        self,
        *,
        paths: AppPaths | None = None,
        config: RuntimeConfig | None = None,
    ) -> None:
        self.runtime_config = config or get_runtime_config()
        self._paths = (paths or AppPaths.resolve(self.runtime_config.data_dir)).ensure()
        self.settings_store = SettingsStore(self._paths.settings_file)
        self.settings = self.settings_store.load()
        self.notify_timeouts = NotifyTimeouts.from_normal(self.runtime_config.notify_timeout)
        self.task_store = TaskStore(
            FileKeyValueStore(self._paths.data_dir),
            key=self.runtime_config.storage_key,
        )
        super().__init__()
        self.controller = TaskController(self.task_store, self)

    def compose(self) -> ComposeResult:
        with Vertical(id="app_main_container"):
            yield Horizontal(
                Label(self.TITLE, id="topbar_app_name"),
                Label(f"v{__version__}", id="topbar_app_version"),
                Label("", id="topbar_mode"),
                id="topbar",
            )
            yield TaskEntry(id="task_entry")
            yield FilterBar(id="filter_bar")
            yield TaskList(id="task_list")
            yield TaskStatusIndicator()
        yield Footer()

    def on_mount(self) -> None:
        for theme in ALL_THEMES:
            self.register_theme(theme)
        self.theme_changed_signal.subscribe(self, self.on_theme_changed)
        preferred = self.settings.get("userPreferences", {}).get("theme", "")
        if preferred in self.available_themes:
            self.theme = preferred
        self.controller.state_store.subscribe(self._handle_state_update)
        self.controller.start()
        self.query_one(TaskEntry).input.focus()
        log_event(
            logger,
            "app.started",
            data_dir=str(self._paths.data_dir),
            tasks=len(self.task_store),
        )

    def on_theme_changed(self, theme: Theme) -> None:
        self.settings_store.update_theme(self.settings, theme.name)

    def _handle_state_update(self, state: TaskListState) -> None:
        mode = f"showing {state.current_filter.value}"
        if state.editing_task_id is not None:
            mode = f"{mode} · editing"
        self.query_one("#topbar_mode", Label).update(mode)

    def on_unmount(self) -> None:
        self.controller.state_store.unsubscribe(self._handle_state_update)

    # TaskView

    def render_tasks(self, snapshot: TaskListSnapshot) -> None:
        self.query_one(TaskList).show_snapshot(snapshot)
        self.query_one(TaskStatusIndicator).show_snapshot(snapshot)
        self.query_one(FilterBar).select(snapshot.current_filter)

    def show_notification(self, message: str, severity: Severity) -> None:
        timeout = self.notify_timeouts.for_severity(severity)
        self.notify(message, severity=severity, timeout=timeout)

    def confirm(self, message: str, callback: Callable[[bool | None], None]) -> None:
        self.push_screen(ConfirmDialog(message), callback)

    def enter_edit_mode(self, text: str) -> None:
        self.query_one(TaskEntry).enter_edit_mode(text)

    def leave_edit_mode(self) -> None:
        self.query_one(TaskEntry).reset()

    # UI intents

    @on(SubmitTaskRequest)
    def handle_submit(self, event: SubmitTaskRequest) -> None:
        self.controller.submit(event.text)

    @on(ToggleTaskRequest)
    def handle_toggle(self, event: ToggleTaskRequest) -> None:
        self.controller.toggle_completion(event.task_id)

    @on(EditTaskRequest)
    def handle_edit(self, event: EditTaskRequest) -> None:
        self.controller.begin_edit(event.task_id)

    @on(DeleteTaskRequest)
    def handle_delete(self, event: DeleteTaskRequest) -> None:
        self.controller.delete(event.task_id)

    @on(FilterChangeRequest)
    def handle_filter_change(self, event: FilterChangeRequest) -> None:
        if event.filter_name == self.controller.current_filter.value:
            return
        self.controller.set_filter(event.filter_name)

    def action_submit_task(self) -> None:
        entry = self.query_one(TaskEntry)
        if entry.value.strip():
            entry.submit()

    def action_cancel_edit(self) -> None:
        self.controller.cancel_edit()

    def action_filter(self, filter_name: str) -> None:
        self.controller.set_filter(TaskFilter(filter_name))

    def action_focus_input(self) -> None:
        self.query_one(TaskEntry).input.focus()

    def action_focus_list(self) -> None:
        self.query_one(TaskList).list_view.focus()
