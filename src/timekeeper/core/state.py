# src/timekeeper/core/state.py

from __future__ import annotations

import time
from dataclasses import dataclass, field

from ..tasks.task_models import TaskType
from .ports import Clock, Confirm, TaskFile


@dataclass
class AppState:
    """Everything one invocation needs: the selected task type and both task files."""

    # Settings object (real Settings or a test namespace).
    settings: object

    task_type: TaskType
    files: dict[TaskType, TaskFile]
    confirm: Confirm
    clock: Clock = field(default=time.time)

    def file_for(self, task_type: TaskType) -> TaskFile:
        return self.files[task_type]
