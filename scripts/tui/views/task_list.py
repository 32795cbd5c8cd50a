"""Main screen: new-task form above the scrollable task list."""

from textual import on
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, Static

from task_file import StorageError
from task_store import DuplicateIdError, InvalidIdError
from tui.providers import TaskProvider
from tui.views.widgets import TaskForm, TaskRow


class TaskListPanel(Static):
    """Scrollable list of tasks."""

    DEFAULT_CSS = """
    TaskListPanel {
        height: 1fr;
        border: solid $primary;
        padding: 0 1;
    }

    TaskListPanel .title {
        text-style: bold;
        margin-bottom: 1;
    }

    TaskListPanel #task-rows {
        height: 1fr;
    }

    TaskListPanel .empty {
        color: $text-muted;
    }
    """

    def __init__(self, provider: TaskProvider, **kwargs) -> None:
        super().__init__(**kwargs)
        self._provider = provider

    def compose(self) -> ComposeResult:
        yield Label("Task List:", classes="title")
        yield VerticalScroll(id="task-rows")

    async def on_mount(self) -> None:
        await self.show_tasks()

    async def show_tasks(self) -> None:
        """Replace the rows with the provider's current tasks."""
        rows = self.query_one("#task-rows", VerticalScroll)
        await rows.remove_children()
        tasks = self._provider.list_tasks()
        if tasks:
            await rows.mount(*(TaskRow(task) for task in tasks))
        else:
            await rows.mount(Label("No tasks yet", classes="empty"))


class TaskListScreen(Screen):
    """Screen for adding, completing and deleting tasks."""

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, provider: TaskProvider, **kwargs) -> None:
        super().__init__(**kwargs)
        self._provider = provider

    def compose(self) -> ComposeResult:
        yield Header()
        yield TaskForm()
        yield TaskListPanel(self._provider)
        yield Footer()

    async def refresh_tasks(self) -> None:
        await self.query_one(TaskListPanel).show_tasks()

    def _fatal(self, error: StorageError) -> None:
        self.app.exit(return_code=2, message=str(error))

    @on(TaskForm.Submitted)
    async def _add_task(self, event: TaskForm.Submitted) -> None:
        form = self.query_one(TaskForm)
        try:
            self._provider.add_task(event.raw_id, event.title, event.description)
        except InvalidIdError:
            form.show_message("Error in ID", "error-invalid")
            return
        except DuplicateIdError:
            form.show_message("Invalid ID!", "error-duplicate")
            return
        except StorageError as e:
            self._fatal(e)
            return
        form.clear()
        await self.refresh_tasks()

    @on(TaskRow.Toggled)
    async def _toggle_task(self, event: TaskRow.Toggled) -> None:
        try:
            self._provider.toggle_task(event.task_id)
        except StorageError as e:
            self._fatal(e)
            return
        await self.refresh_tasks()

    @on(TaskRow.DeleteRequested)
    async def _delete_task(self, event: TaskRow.DeleteRequested) -> None:
        try:
            self._provider.delete_task(event.task_id)
        except StorageError as e:
            self._fatal(e)
            return
        await self.refresh_tasks()

    def action_quit(self) -> None:
        """Quit the application."""
        self.app.exit()
