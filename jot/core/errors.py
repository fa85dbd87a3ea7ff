from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal

Severity = Literal["error", "warning", "information"]


@dataclass
class JotError(Exception):
    code: str
    message: str
    detail: str | None = None
    severity: Severity = "error"

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class ValidationError(JotError):
    """Rejected user input (for example empty task text)."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(code="validation", message=message, detail=detail)


class PersistenceError(JotError):
    """The key-value store could not be read or written."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(code="persistence", message=message, detail=detail)


class ReferenceNotFound(JotError):
    """An operation targeted a task id that is no longer held."""

    def __init__(self, task_id: str) -> None:
        super().__init__(
            code="not_found",
            message="Task no longer exists",
            detail=task_id,
            severity="warning",
        )
        self.task_id = task_id


def format_error(error: BaseException) -> tuple[str, Severity]:
    """Toast text and severity for any exception raised under the controller."""
    if isinstance(error, JotError):
        return error.message, error.severity
    return f"{error}", "error"


def wrap_error(
    error: BaseException,
    *,
    message: str,
    kind: Callable[[str, str | None], JotError] = PersistenceError,
) -> JotError:
    if isinstance(error, JotError):
        return error
    return kind(message, str(error))
