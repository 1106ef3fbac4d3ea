# tests/test_task_timer.py

from __future__ import annotations

import pytest

from timekeeper.core import duration
from timekeeper.core.errors import AlreadyRunning, NotRunning, TaskNotFound
from timekeeper.tasks.task_models import TaskStatus
from timekeeper.tasks.task_store import TaskStore
from timekeeper.tasks.task_timer import TaskTimer

from .fakes import FakeClock


@pytest.fixture()
def timer(store: TaskStore) -> TaskTimer:
    return TaskTimer(store)


def test_start_stop_accumulates_both_intervals(timer: TaskTimer, clock: FakeClock) -> None:
    task_id = timer.store.create("t", start_running=True)
    clock.advance(100)
    assert timer.stop(task_id) == 100

    clock.advance(1000)  # stopped: does not count
    timer.start(task_id)
    clock.advance(20)
    assert timer.stop(task_id) == 20

    task = timer.store.get(task_id)
    assert task.accumulated_seconds == 120
    assert task.status is TaskStatus.STOPPED
    assert task.started_at is None


def test_start_when_running_raises(timer: TaskTimer, clock: FakeClock) -> None:
    task_id = timer.store.create("t", start_running=True)
    started = timer.store.get(task_id).started_at
    clock.advance(5)
    with pytest.raises(AlreadyRunning):
        timer.start(task_id)
    assert timer.store.get(task_id).started_at == started


def test_stop_and_cancel_when_stopped_raise(timer: TaskTimer) -> None:
    task_id = timer.store.create("t")
    with pytest.raises(NotRunning):
        timer.stop(task_id)
    with pytest.raises(NotRunning):
        timer.cancel(task_id)


def test_cancel_discards_running_interval(timer: TaskTimer, clock: FakeClock) -> None:
    task_id = timer.store.create("t")
    timer.add(task_id, 50)
    timer.start(task_id)
    clock.advance(300)

    assert timer.cancel(task_id) == 300
    task = timer.store.get(task_id)
    assert task.accumulated_seconds == 50
    assert not task.is_running
    assert task.last_run is not None


def test_add_returns_displayed_total_while_running(timer: TaskTimer, clock: FakeClock) -> None:
    task_id = timer.store.create("t", start_running=True)
    clock.advance(10)
    assert timer.add(task_id, 60) == 70
    assert timer.store.get(task_id).accumulated_seconds == 60
    assert timer.store.get(task_id).is_running


def test_sub_floors_at_zero(timer: TaskTimer) -> None:
    task_id = timer.store.create("t")
    timer.add(task_id, 100)
    assert timer.sub(task_id, 30) == 70
    assert timer.sub(task_id, 1000) == 0
    assert timer.store.get(task_id).accumulated_seconds == 0


def test_sub_keeps_running_interval(timer: TaskTimer, clock: FakeClock) -> None:
    task_id = timer.store.create("t", start_running=True)
    started = timer.store.get(task_id).started_at
    clock.advance(40)
    assert timer.sub(task_id, 500) == 40
    assert timer.store.get(task_id).started_at == started


def test_set_keeps_in_flight_interval(timer: TaskTimer, clock: FakeClock) -> None:
    task_id = timer.store.create("t", start_running=True)
    clock.advance(20)
    assert timer.set(task_id, 3600) == 3620
    clock.advance(10)
    assert timer.store.list()[0].displayed_seconds == 3630
    assert timer.stop(task_id) == 30
    assert timer.store.get(task_id).accumulated_seconds == 3630


def test_negative_seconds_are_rejected(timer: TaskTimer) -> None:
    task_id = timer.store.create("t")
    for op in (timer.add, timer.sub, timer.set):
        with pytest.raises(ValueError):
            op(task_id, -1)
    assert timer.store.get(task_id).accumulated_seconds == 0


@pytest.mark.parametrize("op", ["start", "stop", "cancel"])
def test_state_ops_on_missing_task(timer: TaskTimer, op: str) -> None:
    with pytest.raises(TaskNotFound):
        getattr(timer, op)(7)


@pytest.mark.parametrize("op", ["add", "sub", "set"])
def test_time_ops_on_missing_task(timer: TaskTimer, op: str) -> None:
    with pytest.raises(TaskNotFound):
        getattr(timer, op)(7, 10)


def test_end_to_end_long_running_task(timer: TaskTimer, clock: FakeClock) -> None:
    store = timer.store
    task_id = store.create("working-on-my-app", start_running=True)
    assert task_id == 1

    clock.advance(duration.parse("45h30m"))
    [view] = store.list(include_all=True)
    assert (view.id, view.name, view.is_running) == (1, "working-on-my-app", True)
    assert duration.format_duration(view.displayed_seconds) == "45:30:00"

    timer.stop(1)
    timer.set(1, duration.parse("45h30m"))
    [view] = store.list(include_all=True)
    assert duration.format_duration(view.displayed_seconds) == "45:30:00"
    assert not view.is_running


def test_end_to_end_total_of_two_tasks(timer: TaskTimer, clock: FakeClock) -> None:
    store = timer.store
    first = store.create("working-on-my-app")
    timer.set(first, duration.parse("45h30m"))
    second = store.create("second", start_running=True)
    clock.advance(20 * 60 + 2)

    views = store.list(include_all=True)
    assert [v.id for v in views] == [first, second]
    assert duration.format_duration(views[1].displayed_seconds) == "0:20:02"
    assert duration.format_duration(store.total_seconds(views)) == "45:50:02"
