import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from config import Settings, get_settings
from exceptions import InvalidInputError, TodoError
from logging_setup import setup_logging
from storage import TaskFileStorage
from task_store import (
    TaskFilter,
    append_task,
    complete_task,
    create_task,
    filter_tasks,
    parse_bool_flag,
    remove_task,
    update_task_content,
)

TASKS_FILE_SUFFIX = ".json"

logger = logging.getLogger(__name__)


def split_file_argument(values: Sequence[str], minimum: int, default: Path) -> Tuple[Path, List[str]]:
    """
    Peels an optional leading tasks file off the positional arguments.
    The first value counts as a file only if it ends in .json and enough
    values remain after it for the command itself.
    """
    values = list(values)
    first = values[0] if values else ""
    if len(values) > minimum and len(first) > len(TASKS_FILE_SUFFIX) and first.endswith(TASKS_FILE_SUFFIX):
        return Path(values[0]), values[1:]
    return default, values


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo", description="Manage a to-do list stored in a JSON file.")
    subparsers = parser.add_subparsers(dest="command", metavar="command")

    add = subparsers.add_parser("add", help="Add a new task.")
    add.add_argument("args", nargs="+", metavar="[file.json] content")

    remove = subparsers.add_parser("remove", help="Remove a task by id.")
    remove.add_argument("args", nargs="+", metavar="[file.json] id")

    complete = subparsers.add_parser("complete", help="Mark a task as complete.")
    complete.add_argument("args", nargs="+", metavar="[file.json] id")

    update = subparsers.add_parser("update", help="Replace the content of a task.")
    update.add_argument("args", nargs="+", metavar="[file.json] id content")

    list_cmd = subparsers.add_parser("list", help="List tasks.")
    list_cmd.add_argument("args", nargs="*", metavar="[file.json]")
    list_cmd.add_argument("--complete", type=str, default=None, help="Only tasks whose completion state is 'true' or 'false'.")
    list_cmd.add_argument("--content", type=str, default=None, help="Only tasks containing every word of this text.")

    return parser


# Minimum number of positional values each command needs after the optional file
_MIN_VALUES = {"add": 1, "remove": 1, "complete": 1, "update": 2, "list": 0}
# Commands whose last argument is free text; extra words are joined into it
_TEXT_COMMANDS = {"add", "update"}


def run(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = settings or get_settings()

    if args.command is None:
        parser.print_help()
        return 0

    minimum = _MIN_VALUES[args.command]
    tasks_file, values = split_file_argument(args.args, minimum, settings.tasks_file)
    if args.command in _TEXT_COMMANDS and len(values) > minimum:
        values = values[:minimum - 1] + [" ".join(values[minimum - 1:])]
    if len(values) != minimum:
        parser.error(f"{args.command}: expected {minimum} argument(s) after the optional file, got {len(values)}")

    storage = TaskFileStorage(tasks_file)
    try:
        if args.command == "add":
            content = values[0]
            if not content.strip():
                raise InvalidInputError("task content must not be empty")
            new_task = create_task(content)
            with storage.transaction() as tasks:
                append_task(tasks, new_task)
            print(new_task.id)

        elif args.command == "remove":
            with storage.transaction() as tasks:
                remove_task(tasks, values[0])
            print(f"Removed task {values[0]}")

        elif args.command == "complete":
            with storage.transaction() as tasks:
                complete_task(tasks, values[0])
            print(f"Completed task {values[0]}")

        elif args.command == "update":
            task_id, content = values
            if not content.strip():
                raise InvalidInputError("task content must not be empty")
            with storage.transaction() as tasks:
                update_task_content(tasks, task_id, content)
            print(f"Updated task {task_id}")

        elif args.command == "list":
            is_complete = parse_bool_flag(args.complete, "--complete") if args.complete is not None else None
            task_filter = TaskFilter(is_complete=is_complete, content=args.content)
            for task in filter_tasks(storage.load(), task_filter):
                mark = "x" if task.is_complete else " "
                print(f"[{mark}] {task.id}  {task.content}")

    except TodoError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def main():
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    sys.exit(run(settings=settings))

if __name__ == "__main__":
    main()
