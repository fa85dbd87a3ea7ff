from __future__ import annotations

import json
import logging

import pytest

from jot.core.logging import get_logger, log_event, log_failure
from jot.core.notify import NotifyTimeouts


def test_log_event_emits_one_json_object(caplog: pytest.LogCaptureFixture) -> None:
    logger = get_logger("jot.test")

    with caplog.at_level(logging.INFO, logger="jot"):
        log_event(logger, "task.added", task_id="42")
        log_failure(logger, "tasks.persist_failed", error="disk full")

    info, warning = caplog.records
    assert json.loads(info.getMessage()) == {"event": "task.added", "task_id": "42"}
    assert warning.levelno == logging.WARNING
    assert json.loads(warning.getMessage())["error"] == "disk full"


def test_notify_timeouts_scale_from_default() -> None:
    timeouts = NotifyTimeouts.from_normal(3.0)

    assert timeouts.normal == 3.0
    assert timeouts.quick < timeouts.normal < timeouts.long
    assert NotifyTimeouts.from_normal(0).normal == 0.5


@pytest.mark.parametrize(
    ("severity", "expected"),
    [("information", 2.0), ("warning", 3.0), ("error", 6.0)],
)
def test_notify_timeout_follows_severity(severity: str, expected: float) -> None:
    assert NotifyTimeouts.from_normal(3.0).for_severity(severity) == pytest.approx(expected)
