#!/usr/bin/env python3
"""
Task Manager

Keep a personal task list in a plain text file (tasks.txt by default).

Usage:
    tasks.py                              Launch interactive TUI
    tasks.py list [--json]                Print all tasks and exit
    tasks.py add <id> <title> [description]
                                          Add a task
    tasks.py toggle <id>                  Flip a task's completed flag
    tasks.py delete <id>                  Delete a task

Options:
    --file PATH       Task file (default: ./tasks.txt)
    -v, --verbose     Log debug output to stderr
    --log-file PATH   Also write the full log to PATH

Requirements:
    pip install textual
"""

import argparse
import json
import logging
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).resolve().parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from log_setup import setup_logging  # noqa: E402
from task_file import StorageError, open_store  # noqa: E402
from task_store import (  # noqa: E402
    DuplicateIdError,
    InvalidIdError,
    TaskStore,
    parse_task_id,
)

logger = logging.getLogger("tasks")

EXIT_OK = 0
EXIT_USER_ERROR = 1
EXIT_STORAGE_ERROR = 2


def cmd_list(store: TaskStore, as_json: bool = False) -> int:
    """Print every task, one per line."""
    tasks = store.list()
    if as_json:
        print(json.dumps(
            [
                {
                    "id": t.id,
                    "title": t.title,
                    "description": t.description,
                    "completed": t.completed,
                }
                for t in tasks
            ],
            indent=2,
        ))
        return EXIT_OK

    for t in tasks:
        print(f"{t.id},{t.title},{t.description},{'true' if t.completed else 'false'}")
    return EXIT_OK


def cmd_add(store: TaskStore, raw_id: str, title: str, description: str) -> int:
    try:
        store.add(raw_id, title.strip(), description.strip())
    except InvalidIdError:
        print("Error in adding ID")
        return EXIT_USER_ERROR
    except DuplicateIdError:
        print("This task ID is already taken!")
        return EXIT_USER_ERROR
    print("Task added!")
    return EXIT_OK


def cmd_toggle(store: TaskStore, raw_id: str) -> int:
    try:
        task_id = parse_task_id(raw_id)
    except InvalidIdError:
        print("Error in reading ID")
        return EXIT_USER_ERROR
    task = store.toggle_completed(task_id)
    if task is None:
        print(f"Task {task_id} not found!")
        return EXIT_USER_ERROR
    state = "completed" if task.completed else "pending"
    print(f"Task {task.id} marked {state}.")
    return EXIT_OK


def cmd_delete(store: TaskStore, raw_id: str) -> int:
    try:
        task_id = parse_task_id(raw_id)
    except InvalidIdError:
        print("Error in reading ID")
        return EXIT_USER_ERROR
    if not store.remove(task_id):
        print(f"Task {task_id} not found!")
        return EXIT_USER_ERROR
    print(f"Task {task_id} removed!")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Task Manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--file",
        type=Path,
        help="Path to the task file (default: tasks.txt)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write the full log to this file",
    )

    sub = parser.add_subparsers(dest="command")

    p_list = sub.add_parser("list", help="Print all tasks and exit")
    p_list.add_argument("--json", action="store_true", help="Print tasks as JSON")

    p_add = sub.add_parser("add", help="Add a task")
    p_add.add_argument("id", help="Unique integer id")
    p_add.add_argument("title")
    p_add.add_argument("description", nargs="?", default="")

    p_toggle = sub.add_parser("toggle", help="Flip a task's completed flag")
    p_toggle.add_argument("id")

    p_delete = sub.add_parser("delete", help="Delete a task")
    p_delete.add_argument("id")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        # The TUI owns the terminal; log to file only
        setup_logging(console_level=None, log_file=args.log_file)
        from tui.app import run

        try:
            return run(task_file=args.file)
        except StorageError as e:
            logger.error("%s", e)
            print(f"Fatal: {e}", file=sys.stderr)
            return EXIT_STORAGE_ERROR

    setup_logging(
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
        log_file=args.log_file,
    )

    try:
        store = open_store(args.file)
        if args.command == "list":
            return cmd_list(store, as_json=args.json)
        if args.command == "add":
            return cmd_add(store, args.id, args.title, args.description)
        if args.command == "toggle":
            return cmd_toggle(store, args.id)
        if args.command == "delete":
            return cmd_delete(store, args.id)
    except StorageError as e:
        print(f"Fatal: {e}", file=sys.stderr)
        return EXIT_STORAGE_ERROR

    parser.error(f"Unknown command: {args.command}")
    return EXIT_USER_ERROR


if __name__ == "__main__":
    sys.exit(main())
