# src/timekeeper/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs exactly one command:
load the selected task file, apply the command, save, exit.
"""

from __future__ import annotations

import argparse
import logging
import sys

from ..config import get_settings
from ..core.errors import ConfirmationDeclined, TimekeeperError
from ..core.ports import Clock, Confirm
from ..logging_setup import setup_logging
from ..tasks.task_models import TaskType
from .bootstrap import create_initial_state
from .commands import CommandRegistry, registry

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


def build_parser(commands: CommandRegistry, *, default_task_type: TaskType) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="timekeeper", description="Track time spent on tasks.")
    parser.add_argument(
        "-t",
        "--tasktype",
        choices=[t.value for t in TaskType],
        default=default_task_type.value,
        help="Type of tasks to work on (default: %(default)s)",
    )
    subparsers = parser.add_subparsers(dest="command")
    for command in commands:
        sub = subparsers.add_parser(command.name, help=command.help_text, description=command.help_text)
        if command.configure is not None:
            command.configure(sub)
    return parser


def main(
    argv: list[str] | None = None,
    *,
    settings=None,
    confirm: Confirm | None = None,
    clock: Clock | None = None,
) -> int:
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    log_dir = settings.log_dir if getattr(settings, "log_to_file", False) else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    default_task_type = getattr(settings, "default_task_type", TaskType.CURRENT)
    parser = build_parser(registry, default_task_type=default_task_type)
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help(sys.stderr)
        return EXIT_USAGE

    state = create_initial_state(
        settings=settings,
        task_type=TaskType(args.tasktype),
        confirm=confirm,
        clock=clock,
    )

    try:
        out = registry.handle(state, args.command, args)
    except ConfirmationDeclined as exc:
        print(exc)
        return EXIT_ERROR
    except TimekeeperError as exc:
        logger.debug("Command %s failed: %s", args.command, exc)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    print(out)
    return EXIT_OK


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
