# tests/fakes.py

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field

from timekeeper.tasks.task_store import TaskStore


class FakeClock:
    """
    Controllable wall clock for unit tests.

    Call it like time.time(); move it with advance().
    """

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MemoryTaskFile:
    """
    In-memory TaskFile: keeps the last saved store as a JSON string,
    so load/save go through the same serialization as the real file.
    """

    def __init__(self) -> None:
        self.saved: str | None = None
        self.save_count = 0

    def load(self, *, clock=None) -> TaskStore:
        if self.saved is None:
            return TaskStore(clock=clock)
        return TaskStore.from_dict(json.loads(self.saved), clock=clock)

    def save(self, store: TaskStore) -> None:
        self.saved = json.dumps(store.to_dict())
        self.save_count += 1


@dataclass(slots=True)
class ScriptedConfirm:
    """Confirmation source that replays canned answers and records the questions."""

    answers: list[bool] = field(default_factory=list)
    questions: list[str] = field(default_factory=list)

    @classmethod
    def of(cls, answers: Iterable[bool]) -> ScriptedConfirm:
        return cls(answers=list(answers))

    def __call__(self, question: str) -> bool:
        self.questions.append(question)
        return self.answers.pop(0)
