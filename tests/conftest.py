# tests/conftest.py

from __future__ import annotations

from itertools import count
from pathlib import Path

import pytest

from jot.core.config import RuntimeConfig
from jot.core.paths import AppPaths
from jot.core.task_controller import TaskController
from jot.core.task_store import TaskStore

from .fakes import FakeView, MemoryKeyValueStore


@pytest.fixture()
def clock():
    """Deterministic millisecond clock that always moves forward."""
    ticks = count(1_700_000_000_000)
    return lambda: next(ticks)


@pytest.fixture()
def backend() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def store(backend: MemoryKeyValueStore, clock) -> TaskStore:
    return TaskStore(backend, key="todoTasks", clock=clock)


@pytest.fixture()
def view() -> FakeView:
    return FakeView()


@pytest.fixture()
def controller(store: TaskStore, view: FakeView) -> TaskController:
    controller = TaskController(store, view)
    controller.start()
    return controller


@pytest.fixture()
def paths(tmp_path: Path) -> AppPaths:
    return AppPaths.resolve(tmp_path / "jot").ensure()


@pytest.fixture()
def runtime_config() -> RuntimeConfig:
    return RuntimeConfig(log_level="debug", log_format="text", notify_timeout=1.0)
