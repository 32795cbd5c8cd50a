"""
Concrete implementation of TaskProvider backed by the task file.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Add scripts to path for imports
SCRIPT_DIR = Path(__file__).resolve().parent.parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from task_file import open_store  # noqa: E402
from task_store import Task, TaskStore  # noqa: E402
from tui.providers import TaskInfo  # noqa: E402


def _task_info(task: Task) -> TaskInfo:
    """Convert a store Task to a TaskInfo snapshot."""
    return TaskInfo(
        id=task.id,
        title=task.title,
        description=task.description,
        completed=task.completed,
    )


class StoreTaskProvider:
    """TaskProvider over a TaskStore."""

    def __init__(self, store: TaskStore):
        self._store = store

    @classmethod
    def from_file(cls, task_file: Path | str | None = None) -> StoreTaskProvider:
        """Load the task file and wrap the resulting store."""
        return cls(open_store(task_file))

    def list_tasks(self) -> list[TaskInfo]:
        return [_task_info(t) for t in self._store.list()]

    def add_task(self, raw_id: str, title: str, description: str) -> TaskInfo:
        return _task_info(self._store.add(raw_id, title, description))

    def toggle_task(self, task_id: int) -> TaskInfo | None:
        task = self._store.toggle_completed(task_id)
        return _task_info(task) if task else None

    def delete_task(self, task_id: int) -> bool:
        return self._store.remove(task_id)
