"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, TaskType, TaskView)
- task_store.py: ordered in-memory store + JSON persistence handle
- task_timer.py: start/stop/cancel state machine and time arithmetic
- archive.py: moves a task from the current store into the archive store
"""

from .archive import archive_task
from .task_models import Task, TaskStatus, TaskType, TaskView
from .task_store import JsonTaskFile, TaskStore
from .task_timer import TaskTimer

__all__ = [
    "JsonTaskFile",
    "Task",
    "TaskStatus",
    "TaskStore",
    "TaskTimer",
    "TaskType",
    "TaskView",
    "archive_task",
]
