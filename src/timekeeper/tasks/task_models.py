# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Timer state of a task.

    Notes:
    - RUNNING is pure data: the start timestamp lives on the Task and the
      elapsed interval is computed on read, nothing ticks in the background.
    """

    STOPPED = "stopped"
    RUNNING = "running"

    @classmethod
    def from_db(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.STOPPED
        return cls(raw)


class TaskType(StrEnum):
    """Which of the two independently numbered stores an invocation targets."""

    CURRENT = "current"
    ARCHIVE = "archive"


@dataclass(slots=True)
class Task:
    id: int
    name: str
    accumulated_seconds: int = 0
    status: TaskStatus = TaskStatus.STOPPED

    # Epoch seconds; set only while RUNNING.
    started_at: float | None = None
    # Epoch seconds of the most recent start (kept after stop/archive).
    last_run: float | None = None

    @property
    def is_running(self) -> bool:
        return self.status is TaskStatus.RUNNING

    def elapsed_seconds(self, now: float) -> int:
        """Length of the in-flight interval; 0 when stopped or if the clock went backwards."""
        if not self.is_running or self.started_at is None:
            return 0
        return max(0, int(now - self.started_at))

    def displayed_seconds(self, now: float) -> int:
        return self.accumulated_seconds + self.elapsed_seconds(now)


@dataclass(frozen=True, slots=True)
class TaskView:
    """Read-only row produced by TaskStore.list()."""

    id: int
    name: str
    is_running: bool
    displayed_seconds: int
    last_run: float | None = None
