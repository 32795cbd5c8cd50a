"""
Task Store - in-memory ordered list of tasks.

Holds the tasks in insertion order and enforces id uniqueness. Persistence
is delegated to an optional storage object; every successful mutation
(add, remove, toggle) hands the full task list to it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Protocol

logger = logging.getLogger(__name__)

ID_MIN = -(2**31)
ID_MAX = 2**31 - 1

_ID_RE = re.compile(r"[+-]?[0-9]+")


class TaskError(Exception):
    """Base class for task manager errors."""


class InvalidIdError(TaskError, ValueError):
    """Raised when a task id cannot be parsed as a 32-bit integer."""

    def __init__(self, raw: object) -> None:
        super().__init__(f"Invalid task id: {raw!r}")
        self.raw = raw


class DuplicateIdError(TaskError):
    """Raised when adding a task whose id is already taken."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task id {task_id} is already taken")
        self.task_id = task_id


@dataclass
class Task:
    """A single task record."""

    id: int
    title: str
    description: str
    completed: bool = False


class TaskStorage(Protocol):
    """Protocol for whatever persists the task list."""

    def save(self, tasks: list[Task]) -> None:
        """Overwrite persisted state with the given tasks."""
        ...


def parse_task_id(raw: int | str) -> int:
    """Parse a task id from user input or a stored field.

    Text is stripped and must be an optionally signed run of decimal
    digits. The result must fit in a signed 32-bit integer.
    """
    if isinstance(raw, bool):
        raise InvalidIdError(raw)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        if not _ID_RE.fullmatch(text):
            raise InvalidIdError(raw)
        value = int(text)
    else:
        raise InvalidIdError(raw)

    if not ID_MIN <= value <= ID_MAX:
        raise InvalidIdError(raw)
    return value


class TaskStore:
    """Ordered collection of tasks with unique ids."""

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        storage: TaskStorage | None = None,
    ) -> None:
        self._tasks: list[Task] = []
        self._storage = storage
        for task in tasks:
            if self._find(task.id) is not None:
                raise DuplicateIdError(task.id)
            self._tasks.append(replace(task))

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return isinstance(task_id, int) and self._find(task_id) is not None

    def __iter__(self) -> Iterator[Task]:
        return iter(self.list())

    def _find(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _persist(self) -> None:
        if self._storage is not None:
            self._storage.save(self._tasks)

    def add(self, task_id: int | str, title: str, description: str = "") -> Task:
        """Append a new pending task.

        Raises InvalidIdError or DuplicateIdError without touching the
        store or its storage.
        """
        tid = parse_task_id(task_id)
        if self._find(tid) is not None:
            raise DuplicateIdError(tid)

        task = Task(id=tid, title=title, description=description)
        self._tasks.append(task)
        logger.debug("Task added id=%s title=%r", tid, title)
        self._persist()
        return replace(task)

    def remove(self, task_id: int | str) -> bool:
        """Remove a task by id. Returns False if no such task exists."""
        tid = parse_task_id(task_id)
        task = self._find(tid)
        if task is None:
            logger.debug("Task remove skipped, id=%s not found", tid)
            return False

        self._tasks.remove(task)
        logger.debug("Task removed id=%s", tid)
        self._persist()
        return True

    def toggle_completed(self, task_id: int | str) -> Task | None:
        """Flip the completed flag; returns the updated task or None."""
        tid = parse_task_id(task_id)
        task = self._find(tid)
        if task is None:
            return None

        task.completed = not task.completed
        logger.debug("Task toggled id=%s completed=%s", tid, task.completed)
        self._persist()
        return replace(task)

    def get(self, task_id: int | str) -> Task | None:
        task = self._find(parse_task_id(task_id))
        return replace(task) if task is not None else None

    def list(self) -> list[Task]:
        """All tasks in insertion order (copies)."""
        return [replace(task) for task in self._tasks]
