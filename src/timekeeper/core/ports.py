# src/timekeeper/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task engine depends on these Protocols instead of concrete files,
clocks or terminals, which keeps it testable with in-memory fakes.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_store import TaskStore

Clock = Callable[[], float]
# Wall-clock time in epoch seconds (time.time in production).

Confirm = Callable[[str], bool]
# Yes/no decision source; receives the question, returns True to proceed.


class TaskFile(Protocol):
    """Durable location of one task store (current or archive)."""

    def load(self, *, clock: Clock | None = None) -> TaskStore: ...
    def save(self, store: TaskStore) -> None: ...
