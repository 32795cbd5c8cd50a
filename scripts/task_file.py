"""
Task file persistence.

One task per line, four comma-separated fields:

    <id>,<title>,<description>,<true|false>

Backslash, comma, newline and carriage return inside title/description are
escaped as \\\\, \\, \\n and \\r. Lines without those characters look exactly
like the plain four-field format, so older files load unchanged.

Older files that hold a literal backslash are the exception: `\\n` or `\\r` in
unescaped text is read back as a line break, and a field ending in a
backslash swallows the following comma, so that line no longer has four
fields and is skipped with a warning. A UTF-8 byte-order mark is ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from task_store import InvalidIdError, Task, TaskError, TaskStore, parse_task_id

logger = logging.getLogger(__name__)

# Relative to the process working directory
TASKS_FILE = Path("tasks.txt")

SEPARATOR = ","
FIELD_COUNT = 4

_ESCAPES = {"\\": "\\\\", ",": "\\,", "\n": "\\n", "\r": "\\r"}
_UNESCAPES = {"\\": "\\", ",": ",", "n": "\n", "r": "\r"}


class StorageError(TaskError):
    """Raised when the task file cannot be read or written."""


def escape_field(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def split_fields(line: str) -> list[str]:
    """Split a line on unescaped commas, unescaping each field."""
    fields: list[str] = []
    current: list[str] = []
    chars = iter(line)
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, None)
            if nxt is None:
                current.append("\\")
            elif nxt in _UNESCAPES:
                current.append(_UNESCAPES[nxt])
            else:
                current.append("\\" + nxt)
        elif ch == SEPARATOR:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
    fields.append("".join(current))
    return fields


def format_task_line(task: Task) -> str:
    """Serialize a task to one line (without the trailing newline)."""
    return SEPARATOR.join(
        [
            str(task.id),
            escape_field(task.title),
            escape_field(task.description),
            "true" if task.completed else "false",
        ]
    )


def parse_task_line(line: str) -> Task | None:
    """Parse one stored line. Returns None if it doesn't have four fields.

    Raises InvalidIdError if the id field is not a valid id.
    """
    fields = split_fields(line)
    if len(fields) != FIELD_COUNT:
        return None
    raw_id, title, description, completed = fields
    return Task(
        id=parse_task_id(raw_id),
        title=title,
        description=description,
        completed=completed == "true",
    )


class TaskFile:
    """Loads and saves the task list from a line-oriented text file."""

    def __init__(self, path: Path | str | None = None):
        self._path = Path(path) if path is not None else TASKS_FILE

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        """Read tasks from disk. Missing file -> empty list.

        Malformed lines are skipped. A wrong field count is skipped
        silently unless the line holds an escaped comma; bad or repeated
        ids and escaped-comma lines are skipped with a warning.
        """
        if not self._path.exists():
            logger.info("No task file at %s, starting empty", self._path)
            return []

        try:
            text = self._path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Could not read {self._path}: {e}") from e

        tasks: list[Task] = []
        seen: set[int] = set()
        for lineno, line in enumerate(text.split("\n"), start=1):
            line = line.rstrip("\r")
            try:
                task = parse_task_line(line)
            except InvalidIdError:
                logger.warning("%s:%d: skipping line with invalid id", self._path, lineno)
                continue
            if task is None:
                if "\\," in line:
                    logger.warning(
                        "%s:%d: skipping line whose field count is off, possibly "
                        "a trailing backslash in unescaped text",
                        self._path,
                        lineno,
                    )
                elif line:
                    logger.debug("%s:%d: skipping malformed line", self._path, lineno)
                continue
            if task.id in seen:
                logger.warning(
                    "%s:%d: skipping duplicate task id %s", self._path, lineno, task.id
                )
                continue
            seen.add(task.id)
            tasks.append(task)

        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """Overwrite the file with exactly the given tasks, in order."""
        lines = [format_task_line(task) + "\n" for task in tasks]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8", newline="\n") as f:
                f.writelines(lines)
        except OSError as e:
            raise StorageError(f"Could not write {self._path}: {e}") from e
        logger.info("Saved %d tasks to %s", len(lines), self._path)


def open_store(path: Path | str | None = None) -> TaskStore:
    """Load the task file and return a store that saves back into it."""
    task_file = TaskFile(path)
    return TaskStore(task_file.load(), storage=task_file)
