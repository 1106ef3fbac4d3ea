# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from timekeeper.tasks.task_models import TaskType
from timekeeper.tasks.task_store import TaskStore

from .fakes import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the CLI bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any .env file.
    """
    return SimpleNamespace(
        log_level="WARNING",
        log_dir=tmp_path / "logs",
        log_to_file=False,
        data_dir=tmp_path,
        current_path=tmp_path / "current.json",
        archive_path=tmp_path / "archive.json",
        default_task_type=TaskType.CURRENT,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock: FakeClock) -> TaskStore:
    return TaskStore(clock=clock)
