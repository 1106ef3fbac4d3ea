# src/timekeeper/core/errors.py

"""
Error kinds raised by the task engine.

The core never prints; the CLI turns these into messages and exit codes.
"""

from __future__ import annotations

from pathlib import Path


class TimekeeperError(Exception):
    """Base class for every failure surfaced to the command layer."""


class TaskNotFound(TimekeeperError):
    def __init__(self, task_id: int | None = None, *, name: str | None = None) -> None:
        self.task_id = task_id
        self.name = name
        if name is not None:
            msg = f"No task named '{name}'"
        else:
            msg = f"Task with id {task_id} does not exist"
        super().__init__(msg)


class AlreadyRunning(TimekeeperError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} is already running")


class NotRunning(TimekeeperError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} is not currently running")


class InvalidDurationLiteral(TimekeeperError, ValueError):
    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid duration {text!r}: {reason} (expected e.g. 1h30m)")


class InvalidTaskName(TimekeeperError, ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("Task name must not be empty")


class PersistenceFailure(TimekeeperError):
    def __init__(self, path: str | Path, detail: str) -> None:
        self.path = Path(path)
        super().__init__(f"Task file {self.path}: {detail}")


class ConfirmationDeclined(TimekeeperError):
    def __init__(self, message: str = "Clearing canceled.") -> None:
        super().__init__(message)


class ArchiveNotAllowed(TimekeeperError):
    def __init__(self) -> None:
        super().__init__("Cannot archive archived tasks")
