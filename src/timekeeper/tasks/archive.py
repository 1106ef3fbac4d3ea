# tasks/archive.py

from __future__ import annotations

import logging

from .task_models import Task, TaskStatus
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def archive_task(source: TaskStore, dest: TaskStore, task_id: int) -> int:
    """
    Move a task from `source` into `dest` and return its id in `dest`.

    A running task is stopped first (elapsed time is kept, as with stop).
    The archived copy is always stopped and numbered by dest's own counter.
    """
    task = source.get(task_id)

    accumulated = task.displayed_seconds(source.now())
    archived = Task(
        id=0,
        name=task.name,
        accumulated_seconds=accumulated,
        status=TaskStatus.STOPPED,
        started_at=None,
        last_run=task.last_run,
    )

    source.remove(task_id)
    new_id = dest.insert(archived).id
    logger.info(
        "Task archived id=%s -> archive id=%s total=%s was_running=%s",
        task_id,
        new_id,
        accumulated,
        task.is_running,
    )
    return new_id
