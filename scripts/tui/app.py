"""
Task Manager TUI Application.

Main entry point for the terminal user interface.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure scripts directory is in path
SCRIPT_DIR = Path(__file__).resolve().parent.parent
if str(SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(SCRIPT_DIR))

from textual.app import App  # noqa: E402
from textual.binding import Binding  # noqa: E402

from tui.providers import TaskProvider  # noqa: E402
from tui.store_provider import StoreTaskProvider  # noqa: E402
from tui.views.task_list import TaskListScreen  # noqa: E402


class TaskManagerApp(App):
    """Main Task Manager TUI application."""

    TITLE = "Task Manager"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("d", "toggle_dark", "Dark/Light", show=True),
    ]

    def __init__(self, provider: TaskProvider, **kwargs) -> None:
        super().__init__(**kwargs)
        self._provider = provider

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen(TaskListScreen(self._provider))

    def action_toggle_dark(self) -> None:
        """Toggle dark mode."""
        self.theme = (
            "textual-light" if self.theme == "textual-dark" else "textual-dark"
        )


def run(task_file: Path | None = None) -> int:
    """Run the TUI application. Returns the app's exit code."""
    app = TaskManagerApp(StoreTaskProvider.from_file(task_file))
    app.run()
    return app.return_code or 0
