"""Reusable widgets for the task list screen."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Checkbox, Input, Label, Static

from tui.providers import TaskInfo


class TaskForm(Static):
    """Entry fields for a new task plus the Add button."""

    DEFAULT_CSS = """
    TaskForm {
        height: auto;
        border: solid $primary;
        padding: 0 1;
    }

    TaskForm Horizontal {
        height: auto;
    }

    TaskForm .field-label {
        padding: 1 1 0 0;
    }

    TaskForm #task-id {
        width: 12;
    }

    TaskForm #task-title {
        width: 1fr;
    }

    TaskForm #task-description {
        width: 2fr;
    }

    TaskForm #form-message {
        height: 1;
    }

    TaskForm .error-invalid {
        color: $warning;
    }

    TaskForm .error-duplicate {
        color: $error;
    }
    """

    class Submitted(Message):
        """Posted when the user asks to add a task."""

        def __init__(self, raw_id: str, title: str, description: str) -> None:
            super().__init__()
            self.raw_id = raw_id
            self.title = title
            self.description = description

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield Label("ID:", classes="field-label")
            yield Input(placeholder="ID", id="task-id")
            yield Label("Title:", classes="field-label")
            yield Input(placeholder="Title", id="task-title")
            yield Label("Description:", classes="field-label")
            yield Input(placeholder="Description", id="task-description")
        yield Button("Add Task", id="add-task", variant="primary")
        yield Label("", id="form-message")

    def _values(self) -> tuple[str, str, str]:
        return (
            self.query_one("#task-id", Input).value,
            self.query_one("#task-title", Input).value,
            self.query_one("#task-description", Input).value,
        )

    @on(Button.Pressed, "#add-task")
    def _add_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.Submitted(*self._values()))

    @on(Input.Submitted)
    def _input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(*self._values()))

    def clear(self) -> None:
        """Empty all fields and the message line."""
        for input_id in ("#task-id", "#task-title", "#task-description"):
            self.query_one(input_id, Input).value = ""
        self.show_message("")

    def show_message(self, text: str, css_class: str | None = None) -> None:
        message = self.query_one("#form-message", Label)
        message.remove_class("error-invalid", "error-duplicate")
        if css_class:
            message.add_class(css_class)
        message.update(text)


class TaskRow(Static):
    """Single row in the task list: checkbox, label and Delete button."""

    DEFAULT_CSS = """
    TaskRow {
        height: 3;
        width: 100%;
        layout: horizontal;
    }

    TaskRow .task-label {
        width: 1fr;
        padding: 1 1 0 1;
    }

    TaskRow .status-completed {
        color: $success;
    }

    TaskRow .status-pending {
        color: $text-muted;
    }
    """

    class Toggled(Message):
        """Posted when the row's checkbox changes."""

        def __init__(self, task_id: int) -> None:
            super().__init__()
            self.task_id = task_id

    class DeleteRequested(Message):
        """Posted when the row's Delete button is pressed."""

        def __init__(self, task_id: int) -> None:
            super().__init__()
            self.task_id = task_id

    def __init__(self, task: TaskInfo, **kwargs) -> None:
        super().__init__(**kwargs)
        self._task_info = task

    @property
    def task_id(self) -> int:
        return self._task_info.id

    def compose(self) -> ComposeResult:
        yield Checkbox("", value=self._task_info.completed)
        yield Label(
            self._task_info.label,
            markup=False,
            classes=f"task-label status-{self._task_info.status.lower()}",
        )
        yield Button("Delete", variant="error", classes="delete-task")

    @on(Checkbox.Changed)
    def _checkbox_changed(self, event: Checkbox.Changed) -> None:
        event.stop()
        self.post_message(self.Toggled(self._task_info.id))

    @on(Button.Pressed, ".delete-task")
    def _delete_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.DeleteRequested(self._task_info.id))
