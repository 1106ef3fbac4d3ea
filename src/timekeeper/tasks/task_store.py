# tasks/task_store.py

from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from ..core.errors import InvalidTaskName, PersistenceFailure, TaskNotFound
from ..core.ports import Clock, TaskFile
from .task_models import Task, TaskStatus, TaskView

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def _clean_name(name: str) -> str:
    if not name or not name.strip():
        raise InvalidTaskName(name)
    return name


def _checked(task: Task) -> Task:
    """Reject a loaded record that breaks the Task invariants."""
    if task.id < 1:
        raise ValueError(f"task id {task.id} is not positive")
    if not isinstance(task.name, str) or not task.name.strip():
        raise ValueError(f"task {task.id} has no name")
    if task.accumulated_seconds < 0:
        raise ValueError(f"task {task.id} has negative accumulated_seconds")
    return task


class TaskStore:
    """
    Ordered task collection for one task type (current or archive).

    Ids come from a monotonic counter scoped to this store and are never
    reused, not even after delete() or clear().

    Every mutating method validates before it changes anything, so a raised
    error leaves the store as it was.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        next_id: int = 1,
        clock: Clock | None = None,
    ) -> None:
        self._tasks: list[Task] = list(tasks)
        self._clock: Clock = clock or time.time

        ids = [t.id for t in self._tasks]
        if len(set(ids)) != len(ids):
            raise ValueError("duplicate task ids")
        self._next_id = max([next_id, *(i + 1 for i in ids)])

    # ---- low-level helpers ----

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def now(self) -> float:
        return self._clock()

    def allocate_id(self) -> int:
        task_id = self._next_id
        self._next_id += 1
        return task_id

    def get(self, task_id: int) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFound(task_id)

    def insert(self, task: Task) -> Task:
        """Append a task built elsewhere (archive), giving it a fresh id."""
        task.id = self.allocate_id()
        self._tasks.append(task)
        return task

    def remove(self, task_id: int) -> Task:
        task = self.get(task_id)
        self._tasks.remove(task)
        return task

    # ---- public API ----

    def create(self, name: str, start_running: bool = False) -> int:
        name = _clean_name(name)
        task_id = self.allocate_id()
        task = Task(id=task_id, name=name)
        if start_running:
            now = self.now()
            task.status = TaskStatus.RUNNING
            task.started_at = now
            task.last_run = now
        self._tasks.append(task)
        logger.debug("Task created id=%s name=%r running=%s", task_id, name, start_running)
        return task_id

    def delete(self, task_id: int) -> None:
        self.remove(task_id)
        logger.debug("Task deleted id=%s", task_id)

    def delete_by_name(self, name: str) -> int:
        """Delete the first task (store order) called `name`; returns its id."""
        for task in self._tasks:
            if task.name == name:
                self._tasks.remove(task)
                logger.debug("Task deleted by name id=%s name=%r", task.id, name)
                return task.id
        raise TaskNotFound(name=name)

    def rename(self, task_id: int, new_name: str) -> None:
        new_name = _clean_name(new_name)
        task = self.get(task_id)
        logger.debug("Task renamed id=%s %r -> %r", task_id, task.name, new_name)
        task.name = new_name

    def list(self, include_all: bool = True) -> list[TaskView]:
        now = self.now()
        views = [
            TaskView(
                id=t.id,
                name=t.name,
                is_running=t.is_running,
                displayed_seconds=t.displayed_seconds(now),
                last_run=t.last_run,
            )
            for t in self._tasks
        ]
        return views if include_all else self.running_only(views)

    @staticmethod
    def running_only(views: Iterable[TaskView]) -> list[TaskView]:
        return [v for v in views if v.is_running]

    @staticmethod
    def total_seconds(views: Iterable[TaskView]) -> int:
        return sum(v.displayed_seconds for v in views)

    def clear(self) -> int:
        removed = len(self._tasks)
        self._tasks.clear()
        logger.info("Task store cleared removed=%s next_id=%s", removed, self._next_id)
        return removed

    # ---- persistence ----

    @classmethod
    def load(cls, handle: TaskFile, *, clock: Clock | None = None) -> TaskStore:
        return handle.load(clock=clock)

    def save(self, handle: TaskFile) -> None:
        handle.save(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": FORMAT_VERSION,
            "next_id": self._next_id,
            "tasks": [
                {
                    "id": t.id,
                    "name": t.name,
                    "status": t.status.value,
                    "accumulated_seconds": t.accumulated_seconds,
                    "started_at": t.started_at,
                    "last_run": t.last_run,
                }
                for t in self._tasks
            ],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, clock: Clock | None = None) -> TaskStore:
        """Build a store from to_dict() output, or from a legacy id-keyed map."""
        if "version" not in data and "tasks" not in data:
            return cls._from_legacy(data, clock=clock)

        raw_tasks = data.get("tasks")
        if not isinstance(raw_tasks, list):
            raise ValueError("'tasks' must be a list")

        tasks: list[Task] = []
        for raw in raw_tasks:
            status = TaskStatus.from_db(raw.get("status"))
            started_at = raw.get("started_at")
            if status is TaskStatus.RUNNING and started_at is None:
                raise ValueError(f"running task {raw.get('id')} has no start time")
            task = Task(
                id=int(raw["id"]),
                name=raw["name"],
                accumulated_seconds=int(raw.get("accumulated_seconds", 0)),
                status=status,
                started_at=float(started_at) if started_at is not None else None,
                last_run=float(raw["last_run"]) if raw.get("last_run") is not None else None,
            )
            tasks.append(_checked(task))
        return cls(tasks, next_id=int(data.get("next_id", 1)), clock=clock)

    @classmethod
    def _from_legacy(cls, data: dict[str, Any], *, clock: Clock | None = None) -> TaskStore:
        # Earlier releases wrote {"<id>": {id, name, total_duration_seconds,
        # running, last_run: {secs_since_epoch, nanos_since_epoch}}}.
        def to_epoch(raw: Any) -> float | None:
            if raw is None:
                return None
            return int(raw["secs_since_epoch"]) + int(raw.get("nanos_since_epoch", 0)) / 1e9

        tasks: list[Task] = []
        for raw in sorted(data.values(), key=lambda r: int(r["id"])):
            last_run = to_epoch(raw.get("last_run"))
            running = bool(raw.get("running")) and last_run is not None
            task = Task(
                id=int(raw["id"]),
                name=raw["name"],
                accumulated_seconds=int(raw.get("total_duration_seconds", 0)),
                status=TaskStatus.RUNNING if running else TaskStatus.STOPPED,
                started_at=last_run if running else None,
                last_run=last_run,
            )
            tasks.append(_checked(task))
        logger.info("Imported %d tasks from legacy task file format", len(tasks))
        return cls(tasks, clock=clock)


class JsonTaskFile:
    """
    JSON persistence handle for one TaskStore.

    Saves are full rewrites: the store is written to a temp file next to the
    target and swapped in with os.replace.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self, *, clock: Clock | None = None) -> TaskStore:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.debug("Task file %s missing, starting empty", self._path)
            return TaskStore(clock=clock)
        except UnicodeDecodeError as exc:
            raise PersistenceFailure(self._path, f"not valid UTF-8: {exc}") from exc
        except OSError as exc:
            raise PersistenceFailure(self._path, f"cannot read: {exc}") from exc

        if not raw.strip():
            return TaskStore(clock=clock)

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceFailure(self._path, f"corrupted JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceFailure(self._path, "expected a JSON object")

        try:
            store = TaskStore.from_dict(data, clock=clock)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise PersistenceFailure(self._path, f"invalid task data: {exc}") from exc

        logger.debug("Loaded %d tasks from %s next_id=%s", len(store), self._path, store.next_id)
        return store

    def save(self, store: TaskStore) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(store.to_dict(), ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            raise PersistenceFailure(self._path, f"cannot write: {exc}") from exc
        logger.debug("Saved %d tasks to %s next_id=%s", len(store), self._path, store.next_id)
