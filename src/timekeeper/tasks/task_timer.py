# tasks/task_timer.py

"""
Per-task timer state machine on top of a TaskStore.

    STOPPED --start--> RUNNING(started_at)
    RUNNING --stop---> STOPPED   (elapsed folded into accumulated_seconds)
    RUNNING --cancel-> STOPPED   (elapsed discarded)

add/sub/set only touch accumulated_seconds and never the running interval.
Durations arrive already parsed to seconds.
"""

from __future__ import annotations

import logging

from ..core.errors import AlreadyRunning, NotRunning
from .task_models import Task, TaskStatus
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def _check_seconds(value: int) -> int:
    if value < 0:
        raise ValueError("seconds must be non-negative")
    return int(value)


class TaskTimer:
    def __init__(self, store: TaskStore) -> None:
        self._store = store

    @property
    def store(self) -> TaskStore:
        return self._store

    def start(self, task_id: int) -> Task:
        task = self._store.get(task_id)
        if task.is_running:
            raise AlreadyRunning(task_id)
        now = self._store.now()
        task.status = TaskStatus.RUNNING
        task.started_at = now
        task.last_run = now
        logger.debug("Task started id=%s at=%s", task_id, now)
        return task

    def stop(self, task_id: int) -> int:
        """Stop a running task; returns the seconds folded into its total."""
        task = self._store.get(task_id)
        if not task.is_running:
            raise NotRunning(task_id)
        elapsed = task.elapsed_seconds(self._store.now())
        task.accumulated_seconds += elapsed
        task.status = TaskStatus.STOPPED
        task.started_at = None
        logger.debug("Task stopped id=%s elapsed=%s total=%s", task_id, elapsed, task.accumulated_seconds)
        return elapsed

    def cancel(self, task_id: int) -> int:
        """Stop a running task without keeping the interval; returns the seconds dropped."""
        task = self._store.get(task_id)
        if not task.is_running:
            raise NotRunning(task_id)
        discarded = task.elapsed_seconds(self._store.now())
        task.status = TaskStatus.STOPPED
        task.started_at = None
        logger.debug("Task canceled id=%s discarded=%s", task_id, discarded)
        return discarded

    def add(self, task_id: int, delta_seconds: int) -> int:
        delta_seconds = _check_seconds(delta_seconds)
        task = self._store.get(task_id)
        task.accumulated_seconds += delta_seconds
        logger.debug("Task time added id=%s delta=%s", task_id, delta_seconds)
        return task.displayed_seconds(self._store.now())

    def sub(self, task_id: int, delta_seconds: int) -> int:
        """Subtract time, flooring the durable total at zero."""
        delta_seconds = _check_seconds(delta_seconds)
        task = self._store.get(task_id)
        task.accumulated_seconds = max(0, task.accumulated_seconds - delta_seconds)
        logger.debug("Task time subtracted id=%s delta=%s", task_id, delta_seconds)
        return task.displayed_seconds(self._store.now())

    def set(self, task_id: int, total_seconds: int) -> int:
        # A running interval keeps going on top of the new baseline.
        total_seconds = _check_seconds(total_seconds)
        task = self._store.get(task_id)
        task.accumulated_seconds = total_seconds
        logger.debug("Task time set id=%s total=%s running=%s", task_id, total_seconds, task.is_running)
        return task.displayed_seconds(self._store.now())
