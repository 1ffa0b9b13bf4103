import sys
import io
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import pytest
from rich.console import Console

from tasklist.interfaces.cli import TaskCLI
from tasklist.planning.clock import FixedClock
from tasklist.planning.manager import TaskManager
from tasklist.storage.tasks import TaskStore


NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class FakeConfirm:
    """Records questions and answers with a fixed reply."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.questions = []

    def __call__(self, question: str) -> bool:
        self.questions.append(question)
        return self.answer


def make_cli(manager, store=None, confirm=None):
    buffer = io.StringIO()
    console = Console(file=buffer, width=120, force_terminal=False)
    cli = TaskCLI(manager, store=store, console=console, confirm=confirm or FakeConfirm(True))
    return cli, buffer


@pytest.fixture
def manager():
    return TaskManager(clock=FixedClock(NOW))


@pytest.mark.asyncio
async def test_plain_text_adds_task(manager):
    cli, out = make_cli(manager)

    should_exit = await cli.handle_command("Buy milk")

    assert should_exit is False
    assert [t.text for t in manager.all_tasks()] == ["Buy milk"]
    output = out.getvalue()
    assert "Created task 1: Buy milk" in output
    assert "1 total, 0 completed, 1 remaining" in output


@pytest.mark.asyncio
async def test_add_with_deadline(manager):
    cli, out = make_cli(manager)

    await cli.handle_command("/add Submit report @ 2026-10-20 18:00")

    task = manager.get(1)
    assert task.text == "Submit report"
    assert task.deadline.replace(tzinfo=None) == datetime(2026, 10, 20, 18, 0)
    assert "20/10/2026 18:00" in out.getvalue()


@pytest.mark.asyncio
async def test_add_empty_shows_error(manager):
    cli, out = make_cli(manager)

    await cli.handle_command("/add    ")

    assert manager.all_tasks() == []
    output = out.getvalue()
    assert "Task text cannot be empty" in output
    assert "Usage: /add <text>" in output


@pytest.mark.asyncio
async def test_add_bad_deadline_shows_error(manager):
    cli, out = make_cli(manager)

    await cli.handle_command("/add Pay rent @ 2026-99-01")

    assert manager.all_tasks() == []
    assert "Invalid deadline: 2026-99-01" in out.getvalue()


@pytest.mark.asyncio
async def test_text_with_brackets_is_not_markup(manager):
    cli, out = make_cli(manager)

    await cli.handle_command("Read [bold]docs[/bold]")

    assert manager.get(1).text == "Read [bold]docs[/bold]"
    assert "Read [bold]docs[/bold]" in out.getvalue()


@pytest.mark.asyncio
async def test_done_toggles(manager):
    manager.add_task("Flip me")
    cli, out = make_cli(manager)

    await cli.handle_command("/done 1")
    assert manager.get(1).completed is True
    assert "Completed: Flip me" in out.getvalue()

    await cli.handle_command("/toggle 1")
    assert manager.get(1).completed is False
    assert "Reopened: Flip me" in out.getvalue()


@pytest.mark.asyncio
async def test_done_unknown_id(manager):
    cli, out = make_cli(manager)

    await cli.handle_command("/done 7")

    assert "Task not found: 7" in out.getvalue()


@pytest.mark.asyncio
async def test_done_requires_numeric_id(manager):
    cli, out = make_cli(manager)

    await cli.handle_command("/done abc")

    assert "Usage: /done <id>" in out.getvalue()


@pytest.mark.asyncio
async def test_delete(manager):
    manager.add_task("Gone soon")
    cli, out = make_cli(manager)

    await cli.handle_command("/delete 1")

    assert manager.all_tasks() == []
    output = out.getvalue()
    assert "Deleted task 1" in output
    assert "No tasks yet" in output


@pytest.mark.asyncio
async def test_clear_asks_for_confirmation(manager):
    manager.add_task("Done")
    manager.add_task("Open")
    manager.toggle_task(1)
    confirm = FakeConfirm(False)
    cli, out = make_cli(manager, confirm=confirm)

    await cli.handle_command("/clear")

    assert confirm.questions == ["Delete all completed tasks?"]
    assert len(manager.all_tasks()) == 2

    confirm.answer = True
    await cli.handle_command("/clear")

    assert [t.text for t in manager.all_tasks()] == ["Open"]
    assert "Cleared 1 completed task(s)" in out.getvalue()


@pytest.mark.asyncio
async def test_clear_without_completed_skips_prompt(manager):
    manager.add_task("Open")
    confirm = FakeConfirm(True)
    cli, out = make_cli(manager, confirm=confirm)

    await cli.handle_command("/clear")

    assert confirm.questions == []
    assert "No completed tasks to clear" in out.getvalue()


@pytest.mark.asyncio
async def test_render_shows_states_and_counts(manager):
    manager.add_task("Soon", NOW + timedelta(hours=2))
    manager.add_task("Late", NOW - timedelta(hours=1))
    cli, out = make_cli(manager)

    cli.render()

    output = out.getvalue()
    assert "[~]" in output
    assert "[!]" in output
    assert "1 overdue" in output
    assert "1 due soon" in output


@pytest.mark.asyncio
async def test_quit_and_unknown_commands(manager):
    cli, out = make_cli(manager)

    assert await cli.handle_command("/bogus") is False
    assert "Unknown command: /bogus" in out.getvalue()
    assert await cli.handle_command("/quit") is True
    assert await cli.handle_command("/q") is True


@pytest.mark.asyncio
async def test_changes_are_saved_to_store(manager, tmp_path):
    store = TaskStore(base_path=tmp_path)
    cli, _ = make_cli(manager, store=store)

    await cli.handle_command("Persist me")
    await cli.handle_command("/done 1")

    tasks = await store.load()
    assert len(tasks) == 1
    assert tasks[0].text == "Persist me"
    assert tasks[0].completed is True


@pytest.mark.asyncio
async def test_non_date_after_at_sign_stays_in_text(manager):
    cli, out = make_cli(manager)

    await cli.handle_command("Email bob @ office")

    task = manager.get(1)
    assert task.text == "Email bob @ office"
    assert task.deadline is None


@pytest.mark.asyncio
async def test_unicode_digit_id_shows_usage(manager):
    manager.add_task("Keep me")
    cli, out = make_cli(manager)

    assert await cli.handle_command("/done ²") is False
    assert await cli.handle_command("/delete ²") is False

    output = out.getvalue()
    assert "Usage: /done <id>" in output
    assert "Usage: /delete <id>" in output
    assert manager.get(1).completed is False
