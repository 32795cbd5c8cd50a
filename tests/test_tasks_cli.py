"""Tests for tasks.py - command line entry point."""

import json
import logging
import sys
from pathlib import Path

import pytest

# Add scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

import tui.app
from task_file import StorageError
from tasks import EXIT_OK, EXIT_STORAGE_ERROR, EXIT_USER_ERROR, main


@pytest.fixture
def task_path(tmp_path: Path) -> Path:
    """Path of a task file that does not exist yet."""
    return tmp_path / "tasks.txt"


def run(task_path: Path, *args: str) -> int:
    """Run the CLI against the given task file."""
    return main(["--file", str(task_path), *args])


class TestAddCommand:
    """Tests for the add sub-command."""

    def test_add_writes_file(self, task_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Adding a task prints the confirmation and writes one line."""
        code = run(task_path, "add", "1", "Buy milk", "2%")

        assert code == EXIT_OK
        assert "Task added!" in capsys.readouterr().out
        assert task_path.read_text() == "1,Buy milk,2%,false\n"

    def test_description_optional(self, task_path: Path) -> None:
        """The description argument may be left out."""
        run(task_path, "add", "1", "Title only")

        assert task_path.read_text() == "1,Title only,,false\n"

    def test_invalid_id(self, task_path: Path, capsys: pytest.CaptureFixture) -> None:
        """A non-numeric id is rejected without creating the file."""
        code = run(task_path, "add", "abc", "Title")

        assert code == EXIT_USER_ERROR
        assert "Error in adding ID" in capsys.readouterr().out
        assert not task_path.exists()

    def test_duplicate_id(self, task_path: Path, capsys: pytest.CaptureFixture) -> None:
        """An id already in the file is refused and the file is untouched."""
        run(task_path, "add", "1", "A")
        capsys.readouterr()

        code = run(task_path, "add", "1", "B")

        assert code == EXIT_USER_ERROR
        assert "already taken" in capsys.readouterr().out
        assert task_path.read_text() == "1,A,,false\n"

    def test_negative_id(self, task_path: Path) -> None:
        """Negative ids are accepted."""
        assert run(task_path, "add", "-4", "Negative") == EXIT_OK
        assert task_path.read_text() == "-4,Negative,,false\n"


class TestListCommand:
    """Tests for the list sub-command."""

    def test_lists_in_order(self, task_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Tasks are printed in file order, one line each."""
        task_path.write_text("2,B,,true\n1,A,desc,false\n")

        code = run(task_path, "list")

        assert code == EXIT_OK
        assert capsys.readouterr().out == "2,B,,true\n1,A,desc,false\n"

    def test_json_output(self, task_path: Path, capsys: pytest.CaptureFixture) -> None:
        """--json prints the tasks as a JSON array of objects."""
        task_path.write_text("1,A,desc,false\n")

        run(task_path, "list", "--json")

        data = json.loads(capsys.readouterr().out)
        assert data == [
            {"id": 1, "title": "A", "description": "desc", "completed": False}
        ]

    def test_missing_file_lists_nothing(
        self, task_path: Path, capsys: pytest.CaptureFixture
    ) -> None:
        """With no task file the listing is empty."""
        assert run(task_path, "list") == EXIT_OK
        assert capsys.readouterr().out == ""


class TestToggleCommand:
    """Tests for the toggle sub-command."""

    def test_toggle_persists(self, task_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Toggling marks the task completed and saves it."""
        task_path.write_text("1,A,,false\n")

        code = run(task_path, "toggle", "1")

        assert code == EXIT_OK
        assert "marked completed" in capsys.readouterr().out
        assert task_path.read_text() == "1,A,,true\n"

    def test_toggle_missing(self, task_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Toggling an unknown id fails and writes nothing."""
        task_path.write_text("1,A,,false\n")

        assert run(task_path, "toggle", "2") == EXIT_USER_ERROR
        assert "not found" in capsys.readouterr().out
        assert task_path.read_text() == "1,A,,false\n"


class TestDeleteCommand:
    """Tests for the delete sub-command."""

    def test_delete_existing(self, task_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Deleting removes only the named task."""
        task_path.write_text("1,A,,false\n2,B,,false\n")

        code = run(task_path, "delete", "1")

        assert code == EXIT_OK
        assert "Task 1 removed!" in capsys.readouterr().out
        assert task_path.read_text() == "2,B,,false\n"

    def test_delete_missing(self, task_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Deleting an unknown id fails and writes nothing."""
        task_path.write_text("1,A,,false\n")

        code = run(task_path, "delete", "5")

        assert code == EXIT_USER_ERROR
        assert "Task 5 not found!" in capsys.readouterr().out
        assert task_path.read_text() == "1,A,,false\n"

    def test_delete_invalid_id(self, task_path: Path, capsys: pytest.CaptureFixture) -> None:
        """A non-numeric id is reported as unreadable."""
        assert run(task_path, "delete", "x") == EXIT_USER_ERROR
        assert "Error in reading ID" in capsys.readouterr().out


class TestStorageFailure:
    """File errors are fatal."""

    def test_unwritable_file(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Pointing --file at a directory fails the write with exit 2."""
        code = main(["--file", str(tmp_path), "add", "1", "A"])

        assert code == EXIT_STORAGE_ERROR
        assert "Fatal" in capsys.readouterr().err


class TestTuiLaunch:
    """Running without a sub-command hands off to the TUI."""

    def test_passes_task_file(self, task_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """The --file path reaches the TUI runner and its code is returned."""
        calls = []

        def fake_run(task_file=None):
            calls.append(task_file)
            return EXIT_OK

        monkeypatch.setattr(tui.app, "run", fake_run)

        assert main(["--file", str(task_path)]) == EXIT_OK
        assert calls == [task_path]

    def test_storage_error_is_fatal(
        self, task_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        """A StorageError while starting the TUI exits with code 2."""

        def failing_run(task_file=None):
            raise StorageError(f"Could not read {task_file}")

        monkeypatch.setattr(tui.app, "run", failing_run)

        assert main(["--file", str(task_path)]) == EXIT_STORAGE_ERROR
        assert "Fatal: Could not read" in capsys.readouterr().err

    def test_no_console_logging_in_tui_mode(
        self, task_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The TUI owns the terminal, so no stderr handler is installed."""
        monkeypatch.setattr(tui.app, "run", lambda task_file=None: EXIT_OK)

        main(["--file", str(task_path)])

        handlers = logging.getLogger().handlers
        assert not any(type(h) is logging.StreamHandler for h in handlers)


class TestLogFile:
    """Tests for --log-file handling across repeated runs."""

    def test_previous_file_handler_is_closed(self, tmp_path: Path, task_path: Path) -> None:
        """A second run closes the file handler installed by the first."""
        log_path = tmp_path / "tasks.log"
        run(task_path, "--log-file", str(log_path), "list")
        first = [
            h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)
        ]

        main(["--file", str(task_path), "list"])

        assert len(first) == 1
        assert first[0] not in logging.getLogger().handlers
        assert first[0].stream is None
