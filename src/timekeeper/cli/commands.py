# src/timekeeper/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from ..core import duration
from ..core.errors import ArchiveNotAllowed, ConfirmationDeclined
from ..core.state import AppState
from ..tasks.archive import archive_task
from ..tasks.task_models import TaskType, TaskView
from ..tasks.task_store import TaskStore
from ..tasks.task_timer import TaskTimer
from .bootstrap import task_session

CommandHandler = Callable[[AppState, TaskStore, argparse.Namespace], str]
ArgumentConfigurer = Callable[[argparse.ArgumentParser], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    configure: ArgumentConfigurer | None = None
    mutates: bool = True


class CommandRegistry:
    """One entry per verb; main.py builds the argparse sub-commands from it."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        *,
        configure: ArgumentConfigurer | None = None,
        mutates: bool = True,
    ) -> None:
        self._commands[name.lower()] = Command(name.lower(), handler, help_text, configure, mutates)

    def get(self, name: str) -> Command | None:
        return self._commands.get(name.lower())

    def __iter__(self):
        return iter(self._commands.values())

    def handle(self, state: AppState, name: str, args: argparse.Namespace) -> str:
        """Run one command inside a load -> mutate -> save session of the selected store."""
        command = self.get(name)
        if command is None:
            raise KeyError(f"Unknown command: {name}")

        logger.debug("Running command %s task_type=%s", command.name, state.task_type)
        handle = state.file_for(state.task_type)
        with task_session(handle, clock=state.clock, save=command.mutates) as store:
            return command.handler(state, store, args)


registry = CommandRegistry()


# ---- argument helpers ----


def _task_id_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("task_id", type=int, help="Task id")


def _name_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("name", help="Task name")


def _time_args(parser: argparse.ArgumentParser) -> None:
    _task_id_arg(parser)
    parser.add_argument("time", help="Duration such as 1h30m, 45m or 1d2h (units d, h, m, s)")


def _list_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-a", "--all", action="store_true", help="List stopped tasks too")
    parser.add_argument(
        "--timestamps", action="store_true", help="Show when each task was last started"
    )


def _create_args(parser: argparse.ArgumentParser) -> None:
    _name_arg(parser)
    parser.add_argument(
        "-s", "--start", action="store_true", help="Start the timer after creating the task"
    )


def _rename_args(parser: argparse.ArgumentParser) -> None:
    _task_id_arg(parser)
    _name_arg(parser)


def _clear_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")


# ---- rendering ----


def _ts_local(epoch: float) -> str:
    return datetime.fromtimestamp(epoch).strftime("%d/%m/%Y %H:%M:%S")


def format_task_line(view: TaskView, *, show_timestamp: bool = False) -> str:
    prefix = "#" if view.is_running else ""
    line = f"{prefix}[{view.id}] '{view.name}': {duration.format_duration(view.displayed_seconds)}"
    if show_timestamp and view.last_run is not None:
        line += f" - Last time: {_ts_local(view.last_run)}"
    return line


# ---- handlers ----


def cmd_list(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    views = store.list(include_all=args.all)
    if not views:
        return "There are no tasks." if args.all else "There are no running tasks."

    lines = [format_task_line(v, show_timestamp=args.timestamps) for v in views]
    lines.append("")
    lines.append(f"Total: {duration.format_duration(store.total_seconds(views))}")
    return "\n".join(lines)


def cmd_create(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    task_id = store.create(args.name, start_running=args.start)
    return f"Task {args.name} created with id {task_id}"


def cmd_delete(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    store.delete(args.task_id)
    return f"Task {args.task_id} deleted"


def cmd_delname(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    task_id = store.delete_by_name(args.name)
    return f"Task '{args.name}' deleted (id {task_id})"


def cmd_start(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    TaskTimer(store).start(args.task_id)
    return f"Task {args.task_id} started"


def cmd_stop(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    TaskTimer(store).stop(args.task_id)
    return f"Task {args.task_id} stopped"


def cmd_cancel(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    discarded = TaskTimer(store).cancel(args.task_id)
    return f"Task {args.task_id} canceled, discarded {duration.format_duration(discarded)}"


def cmd_rename(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    store.rename(args.task_id, args.name)
    return f"Task {args.task_id} renamed to {args.name}"


def cmd_add(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    seconds = duration.parse(args.time)
    total = TaskTimer(store).add(args.task_id, seconds)
    return (
        f"Added {duration.format_literal(seconds)} to task {args.task_id}, "
        f"new timer: {duration.format_duration(total)}"
    )


def cmd_sub(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    seconds = duration.parse(args.time)
    total = TaskTimer(store).sub(args.task_id, seconds)
    return (
        f"Subtracted {duration.format_literal(seconds)} from task {args.task_id}, "
        f"new timer: {duration.format_duration(total)}"
    )


def cmd_set(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    seconds = duration.parse(args.time)
    total = TaskTimer(store).set(args.task_id, seconds)
    return (
        f"New time {duration.format_literal(seconds)} set for task {args.task_id}, "
        f"new timer: {duration.format_duration(total)}"
    )


def cmd_archive(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    if state.task_type is TaskType.ARCHIVE:
        raise ArchiveNotAllowed()
    archive_file = state.file_for(TaskType.ARCHIVE)
    with task_session(archive_file, clock=state.clock) as archive_store:
        new_id = archive_task(store, archive_store, args.task_id)
    return f"Task {args.task_id} archived with archive id {new_id}"


def cmd_clear(state: AppState, store: TaskStore, args: argparse.Namespace) -> str:
    question = f"Do you want to proceed clearing all {state.task_type} tasks? (Y/N)"
    if not args.yes and not state.confirm(question):
        raise ConfirmationDeclined()
    store.clear()
    return "Tasks cleared."


registry.register(
    "list",
    cmd_list,
    help_text="List running tasks (or all with --all) and their total time",
    configure=_list_args,
    mutates=False,
)
registry.register("create", cmd_create, help_text="Create a new task", configure=_create_args)
registry.register("delete", cmd_delete, help_text="Delete a task by id", configure=_task_id_arg)
registry.register(
    "delname", cmd_delname, help_text="Delete the first task with this name", configure=_name_arg
)
registry.register("start", cmd_start, help_text="Start a task timer", configure=_task_id_arg)
registry.register("stop", cmd_stop, help_text="Stop a task timer", configure=_task_id_arg)
registry.register(
    "cancel",
    cmd_cancel,
    help_text="Stop a task timer without keeping the running time",
    configure=_task_id_arg,
)
registry.register("rename", cmd_rename, help_text="Rename a task", configure=_rename_args)
registry.register("add", cmd_add, help_text="Add time to a task", configure=_time_args)
registry.register("sub", cmd_sub, help_text="Subtract time from a task", configure=_time_args)
registry.register("set", cmd_set, help_text="Set the total time of a task", configure=_time_args)
registry.register(
    "archive",
    cmd_archive,
    help_text="Move a task to the archive",
    configure=_task_id_arg,
)
registry.register(
    "clear", cmd_clear, help_text="Clear all tasks of the selected task type", configure=_clear_args
)
