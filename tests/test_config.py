# tests/test_config.py

from __future__ import annotations

import os
from pathlib import Path

import pytest

from timekeeper.config import Settings
from timekeeper.tasks.task_models import TaskType

_VARS = (
    "TIMEKEEPER_DATA_DIR",
    "TIMEKEEPER_CURRENT_PATH",
    "TIMEKEEPER_ARCHIVE_PATH",
    "TIMEKEEPER_LOG_LEVEL",
    "TIMEKEEPER_LOG_DIR",
    "TIMEKEEPER_LOG_FILE",
    "TIMEKEEPER_DEFAULT_TASK_TYPE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_derive_from_data_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TIMEKEEPER_DATA_DIR", str(tmp_path))
    s = Settings.from_env(dotenv=False)
    assert s.current_path == tmp_path / "current.json"
    assert s.archive_path == tmp_path / "archive.json"
    assert s.log_dir == tmp_path
    assert s.log_level == "WARNING"
    assert s.log_to_file is True
    assert s.default_task_type is TaskType.CURRENT


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TIMEKEEPER_CURRENT_PATH", str(tmp_path / "c.json"))
    monkeypatch.setenv("TIMEKEEPER_ARCHIVE_PATH", str(tmp_path / "a.json"))
    monkeypatch.setenv("TIMEKEEPER_LOG_FILE", "no")
    monkeypatch.setenv("TIMEKEEPER_DEFAULT_TASK_TYPE", "Archive")
    s = Settings.from_env(dotenv=False)
    assert s.current_path == tmp_path / "c.json"
    assert s.archive_path == tmp_path / "a.json"
    assert s.log_to_file is False
    assert s.default_task_type is TaskType.ARCHIVE


def test_invalid_task_type_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMEKEEPER_DEFAULT_TASK_TYPE", "someday")
    assert Settings.from_env(dotenv=False).default_task_type is TaskType.CURRENT


def test_dotenv_file_is_loaded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("TIMEKEEPER_LOG_LEVEL=DEBUG\n", "utf-8")
    monkeypatch.chdir(tmp_path)
    try:
        assert Settings.from_env().log_level == "DEBUG"
    finally:
        os.environ.pop("TIMEKEEPER_LOG_LEVEL", None)
