"""
Data providers for the TUI.

Protocols define the interface; implementations can be swapped
for testing or alternative data sources.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class TaskInfo:
    """Immutable snapshot of a task."""

    id: int
    title: str
    description: str
    completed: bool = False

    @property
    def status(self) -> str:
        return "Completed" if self.completed else "Pending"

    @property
    def label(self) -> str:
        return f"{self.id}: {self.title} - {self.description} [{self.status}]"


class TaskProvider(Protocol):
    """Protocol for reading and changing the task list."""

    def list_tasks(self) -> list[TaskInfo]:
        """All tasks in display order."""
        ...

    def add_task(self, raw_id: str, title: str, description: str) -> TaskInfo:
        """Add a task; raises InvalidIdError or DuplicateIdError."""
        ...

    def toggle_task(self, task_id: int) -> TaskInfo | None:
        """Flip completion of a task."""
        ...

    def delete_task(self, task_id: int) -> bool:
        """Delete a task; False if it was not there."""
        ...
