# src/timekeeper/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- resolves the two task files (current, archive),
- wires the confirmation source and clock into AppState,
- runs one load -> mutate -> save cycle per command.
"""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Callable, Iterator

from ..config import get_settings
from ..core.ports import Clock, Confirm, TaskFile
from ..core.state import AppState
from ..tasks.task_models import TaskType
from ..tasks.task_store import JsonTaskFile, TaskStore

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}
_NO = {"n", "no"}


def console_confirm(
    question: str,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> bool:
    """Ask until the answer is Y or N. EOF counts as no."""
    while True:
        try:
            answer = read(f"{question} ").strip().lower()
        except EOFError:
            return False
        if answer in _YES:
            return True
        if answer in _NO:
            return False
        write("Invalid input. Please enter 'Y' or 'N'.")


def create_initial_state(
    *,
    settings=None,
    task_type: TaskType | None = None,
    confirm: Confirm | None = None,
    clock: Clock | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    files: dict[TaskType, TaskFile] = {
        TaskType.CURRENT: JsonTaskFile(settings.current_path),
        TaskType.ARCHIVE: JsonTaskFile(settings.archive_path),
    }
    return AppState(
        settings=settings,
        task_type=task_type or getattr(settings, "default_task_type", TaskType.CURRENT),
        files=files,
        confirm=confirm or console_confirm,
        clock=clock or time.time,
    )


@contextlib.contextmanager
def task_session(handle: TaskFile, *, clock: Clock, save: bool = True) -> Iterator[TaskStore]:
    """
    Load a store, hand it to the caller, save it back only if no error escaped.

    There is no file locking: two concurrent invocations on the same file
    resolve as last writer wins.
    """
    store = handle.load(clock=clock)
    yield store
    if save:
        handle.save(store)
