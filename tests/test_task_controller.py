from __future__ import annotations

import json
import logging

import pytest

from jot.core.state import TaskFilter
from jot.core.task_controller import TaskController
from jot.core.task_store import TaskStore

from .fakes import BrokenKeyValueStore, FakeView, MemoryKeyValueStore


def _texts(controller: TaskController) -> list[str]:
    return [task.text for task in controller.store.all()]


def _stored(backend: MemoryKeyValueStore) -> list[dict]:
    return json.loads(backend.data["todoTasks"])


def test_start_loads_and_renders_once(
    backend: MemoryKeyValueStore, view: FakeView
) -> None:
    backend.data["todoTasks"] = json.dumps(
        [{"id": "1", "text": "from disk", "completed": False, "createdAt": "2024-01-01T00:00:00+00:00"}]
    )
    controller = TaskController(TaskStore(backend), view)

    controller.start()

    assert len(view.renders) == 1
    assert [task.text for task in view.last_render.tasks] == ["from disk"]
    assert backend.writes == 0


@pytest.mark.parametrize("text", ["Buy milk", "  padded  ", "x"])
def test_submit_adds_one_task_at_front(
    controller: TaskController, view: FakeView, backend: MemoryKeyValueStore, text: str
) -> None:
    controller.submit("existing")
    before = len(controller.store)

    controller.submit(text)

    tasks = controller.store.all()
    assert len(tasks) == before + 1
    assert tasks[0].text == text.strip()
    assert tasks[0].completed is False
    assert _stored(backend)[0]["text"] == text.strip()
    assert view.last_notification == ("Task added", "information")
    assert view.input_text == ""


@pytest.mark.parametrize("text", ["", " ", "\t \n"])
def test_submit_blank_reports_validation_error(
    controller: TaskController, view: FakeView, backend: MemoryKeyValueStore, text: str
) -> None:
    renders = len(view.renders)

    controller.submit(text)

    assert len(controller.store) == 0
    assert view.last_notification == ("Please enter a task", "error")
    assert backend.writes == 0
    assert len(view.renders) == renders


def test_toggle_twice_restores_state(
    controller: TaskController, backend: MemoryKeyValueStore
) -> None:
    controller.submit("flip")
    task = controller.store.all()[0]

    controller.toggle_completion(task.id)
    assert task.completed is True
    assert _stored(backend)[0]["completed"] is True

    controller.toggle_completion(task.id)
    assert task.completed is False
    assert _stored(backend)[0]["completed"] is False


def test_toggle_unknown_id_is_silent_noop(
    controller: TaskController, view: FakeView, backend: MemoryKeyValueStore
) -> None:
    renders = len(view.renders)

    controller.toggle_completion("does-not-exist")

    assert len(view.renders) == renders
    assert view.notifications == []
    assert backend.writes == 0


def test_confirmed_delete_removes_only_target(
    controller: TaskController, view: FakeView, backend: MemoryKeyValueStore
) -> None:
    for name in ("A", "B", "C"):
        controller.submit(name)
    target = controller.store.all()[1]  # "B"

    controller.delete(target.id)

    assert view.confirmations == ["Delete this task?"]
    assert _texts(controller) == ["C", "A"]
    assert [record["text"] for record in _stored(backend)] == ["C", "A"]
    assert view.last_notification == ("Task deleted", "information")


@pytest.mark.parametrize("answer", [False, None])
def test_rejected_delete_changes_nothing(
    controller: TaskController, view: FakeView, backend: MemoryKeyValueStore, answer
) -> None:
    controller.submit("A")
    controller.submit("B")
    writes = backend.writes
    renders = len(view.renders)
    view.confirm_answer = answer

    controller.delete(controller.store.all()[0].id)

    assert _texts(controller) == ["B", "A"]
    assert backend.writes == writes
    assert len(view.renders) == renders


def test_filters_partition_the_collection(controller: TaskController) -> None:
    for name in ("A", "B", "C", "D", "E"):
        controller.submit(name)
    for task in controller.store.all()[1::2]:
        controller.toggle_completion(task.id)

    controller.set_filter("active")
    active = controller.filtered_view()
    controller.set_filter("completed")
    completed = controller.filtered_view()
    controller.set_filter("all")
    everything = controller.filtered_view()

    active_ids = {task.id for task in active}
    completed_ids = {task.id for task in completed}
    assert active_ids.isdisjoint(completed_ids)
    assert active_ids | completed_ids == {task.id for task in everything}
    assert [task.text for task in everything] == ["E", "D", "C", "B", "A"]


def test_set_filter_renders_without_persisting(
    controller: TaskController, view: FakeView, backend: MemoryKeyValueStore
) -> None:
    controller.submit("A")
    writes = backend.writes

    controller.set_filter(TaskFilter.COMPLETED)

    assert controller.current_filter is TaskFilter.COMPLETED
    assert view.last_render.current_filter is TaskFilter.COMPLETED
    assert backend.writes == writes


def test_set_filter_rejects_unknown_name(controller: TaskController) -> None:
    with pytest.raises(ValueError):
        controller.set_filter("someday")
    assert controller.current_filter is TaskFilter.ALL


def test_summary_counts_ignore_filter(controller: TaskController, view: FakeView) -> None:
    controller.submit("A")
    controller.submit("B")
    controller.toggle_completion(controller.store.all()[0].id)

    controller.set_filter("active")

    snapshot = view.last_render
    assert len(snapshot.tasks) == 1
    assert (snapshot.completed_count, snapshot.total_count) == (1, 2)
    assert snapshot.summary == "1 / 2"
    assert snapshot.pending_count == 1


def test_buy_milk_scenario(controller: TaskController, view: FakeView) -> None:
    controller.submit("Buy milk")
    (task,) = controller.store.all()
    assert (task.text, task.completed) == ("Buy milk", False)

    controller.toggle_completion(task.id)
    assert task.completed is True

    controller.set_filter("active")
    assert controller.filtered_view() == []
    assert view.last_render.is_empty
    assert view.last_render.empty_title == TaskFilter.ACTIVE.empty_title

    controller.set_filter("completed")
    assert controller.filtered_view() == [task]
    assert not view.last_render.is_empty


def test_front_insertion_scenario(controller: TaskController) -> None:
    controller.submit("Task A")
    controller.submit("Task B")

    assert _texts(controller) == ["Task B", "Task A"]


def test_edit_scenario_updates_in_place(
    controller: TaskController, view: FakeView, backend: MemoryKeyValueStore
) -> None:
    controller.submit("Task A")
    controller.submit("Task B")
    task_a = controller.store.all()[1]

    controller.begin_edit(task_a.id)
    assert controller.editing_task_id == task_a.id
    assert (view.input_text, view.submit_label) == ("Task A", "Update")

    controller.submit("Task A renamed")

    assert _texts(controller) == ["Task B", "Task A renamed"]
    assert controller.store.all()[1] is task_a
    assert controller.editing_task_id is None
    assert (view.input_text, view.submit_label) == ("", "Add")
    assert view.last_notification == ("Task updated", "information")
    assert _stored(backend)[1]["text"] == "Task A renamed"


def test_blank_submit_while_editing_keeps_edit_open(
    controller: TaskController, view: FakeView
) -> None:
    controller.submit("Task A")
    task = controller.store.all()[0]
    controller.begin_edit(task.id)

    controller.submit("   ")

    assert controller.editing_task_id == task.id
    assert task.text == "Task A"
    assert view.last_notification == ("Please enter a task", "error")
    assert view.submit_label == "Update"


def test_begin_edit_unknown_id_is_noop(controller: TaskController, view: FakeView) -> None:
    controller.begin_edit("missing")

    assert controller.editing_task_id is None
    assert view.submit_label == "Add"


def test_cancel_edit_restores_add_mode(controller: TaskController, view: FakeView) -> None:
    controller.submit("Task A")
    controller.begin_edit(controller.store.all()[0].id)

    controller.cancel_edit()

    assert controller.editing_task_id is None
    assert (view.input_text, view.submit_label) == ("", "Add")
    assert _texts(controller) == ["Task A"]


def test_deleting_task_under_edit_clears_reference(
    controller: TaskController, view: FakeView
) -> None:
    controller.submit("Task A")
    task = controller.store.all()[0]
    controller.begin_edit(task.id)

    controller.delete(task.id)

    assert controller.editing_task_id is None
    assert view.submit_label == "Add"


def test_stale_edit_submit_is_dropped(
    controller: TaskController, view: FakeView, backend: MemoryKeyValueStore
) -> None:
    controller.submit("Task A")
    controller.submit("Task B")
    task_a = controller.store.all()[1]
    controller.begin_edit(task_a.id)
    # Removed behind the controller's back, so the edit reference dangles.
    controller.store.delete(task_a.id)
    writes = backend.writes

    controller.submit("Task A renamed")

    assert _texts(controller) == ["Task B"]
    assert controller.editing_task_id is None
    assert (view.input_text, view.submit_label) == ("", "Add")
    assert view.last_notification == ("Task no longer exists", "warning")
    assert backend.writes == writes


def test_persistence_failure_is_logged_and_memory_wins(
    view: FakeView, caplog: pytest.LogCaptureFixture
) -> None:
    controller = TaskController(TaskStore(BrokenKeyValueStore()), view)
    controller.start()

    with caplog.at_level(logging.WARNING, logger="jot"):
        controller.submit("survives")
        controller.toggle_completion(controller.store.all()[0].id)

    assert _texts(controller) == ["survives"]
    assert controller.store.all()[0].completed is True
    assert view.last_render.total_count == 1
    failures = [r for r in caplog.records if "tasks.persist_failed" in r.getMessage()]
    assert len(failures) == 2


def test_state_subscribers_see_filter_and_edit_changes(controller: TaskController) -> None:
    seen = []
    controller.state_store.subscribe(seen.append)
    controller.submit("Task A")
    task = controller.store.all()[0]

    controller.set_filter("completed")
    controller.set_filter("completed")
    controller.begin_edit(task.id)
    controller.cancel_edit()

    assert [(s.current_filter, s.editing_task_id) for s in seen] == [
        (TaskFilter.ALL, None),
        (TaskFilter.COMPLETED, None),
        (TaskFilter.COMPLETED, task.id),
        (TaskFilter.COMPLETED, None),
    ]
