# src/timekeeper/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Environment variables (all optional):
- TIMEKEEPER_DATA_DIR: where task files live (default: ~/.local/share/timekeeper).
- TIMEKEEPER_CURRENT_PATH: current tasks file (default: <data_dir>/current.json).
- TIMEKEEPER_ARCHIVE_PATH: archived tasks file (default: <data_dir>/archive.json).
- TIMEKEEPER_DEFAULT_TASK_TYPE: "current" or "archive" (default: current).
- TIMEKEEPER_LOG_LEVEL: console log level (default: WARNING).
- TIMEKEEPER_LOG_DIR: log directory (default: <data_dir>).
- TIMEKEEPER_LOG_FILE: write timekeeper.log (default: true).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .tasks.task_models import TaskType

ENV_PREFIX = "TIMEKEEPER"

DEFAULT_DATA_DIR = Path("~/.local/share/timekeeper")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_task_type(name: str, default: TaskType) -> TaskType:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return TaskType(raw.strip().lower())
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    log_level: str
    log_dir: Path
    log_to_file: bool

    # ---- Task files ----
    data_dir: Path
    current_path: Path
    archive_path: Path
    default_task_type: TaskType

    @staticmethod
    def from_env(*, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        data_dir = _env_path(_k("DATA_DIR"), DEFAULT_DATA_DIR.expanduser())

        return Settings(
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            log_dir=_env_path(_k("LOG_DIR"), data_dir),
            log_to_file=_env_bool(_k("LOG_FILE"), True),
            data_dir=data_dir,
            current_path=_env_path(_k("CURRENT_PATH"), data_dir / "current.json"),
            archive_path=_env_path(_k("ARCHIVE_PATH"), data_dir / "archive.json"),
            default_task_type=_env_task_type(_k("DEFAULT_TASK_TYPE"), TaskType.CURRENT),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
