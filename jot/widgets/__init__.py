from .dialogs import ConfirmDialog
from .filter_bar import FilterBar
from .task_entry import TaskEntry
from .task_list import TaskList, TaskListItem
from .task_status import TaskStatusIndicator

__all__ = [
    "ConfirmDialog",
    "FilterBar",
    "TaskEntry",
    "TaskList",
    "TaskListItem",
    "TaskStatusIndicator",
]
