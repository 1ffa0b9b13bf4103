"""CLI interface for the task list."""

import asyncio
from typing import Callable, Optional
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from ..planning import TaskManager, TaskState, ValidationError
from ..storage import TaskStore
from ..config import config


STATE_STYLES = {
    TaskState.NORMAL: "",
    TaskState.DUE_SOON: "yellow",
    TaskState.OVERDUE: "bold red",
    TaskState.COMPLETED: "dim strike",
}

DEADLINE_SEPARATOR = " @ "


class TaskCLI:
    """
    Interactive terminal view over a TaskManager.

    Commands:
    - /add TEXT [@ DEADLINE] - Create a task (plain text also adds)
    - /done ID, /toggle ID - Toggle completion
    - /delete ID - Delete a task
    - /clear - Remove completed tasks
    - /list - Show tasks
    - /stats - Show counts
    - /help - Show available commands
    - /quit, /exit - Exit

    After every command that changes the list, the table and the counts
    are re-read from the manager and redrawn, then saved to the store.
    """

    def __init__(
        self,
        task_manager: TaskManager,
        store: Optional[TaskStore] = None,
        console: Optional[Console] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        date_format: Optional[str] = None,
    ):
        self.task_manager = task_manager
        self.store = store
        self.console = console or Console()
        self.confirm = confirm or (lambda question: Confirm.ask(question, console=self.console))
        self.date_format = date_format or config.display.date_format
        self.session: Optional[PromptSession] = None

    async def run(self):
        """Main CLI loop."""
        history_path = config.paths.history
        history_path.parent.mkdir(parents=True, exist_ok=True)
        self.session = PromptSession(history=FileHistory(str(history_path)))

        self.console.print(Panel(
            "[bold cyan]Task List[/bold cyan]\n"
            "Type a task to add it, or /help for commands",
            title="Welcome",
            border_style="cyan",
        ))
        self.render()

        while True:
            try:
                user_input = await asyncio.to_thread(self.session.prompt, "> ")

                if not user_input.strip():
                    continue

                should_exit = await self.handle_command(user_input)
                if should_exit:
                    break

            except KeyboardInterrupt:
                self.console.print("\n[yellow]Interrupted. Type /quit to exit.[/yellow]")
            except EOFError:
                break

        self.console.print("[green]Goodbye![/green]")

    async def handle_command(self, line: str) -> bool:
        """
        Dispatch one line of input.

        Returns:
            True if the CLI should exit
        """
        line = line.strip()
        if not line.startswith("/"):
            return await self._add_task(line)

        parts = line.split(maxsplit=1)
        cmd = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        if cmd in ["/quit", "/exit", "/q"]:
            return True

        elif cmd == "/help":
            self._show_help()

        elif cmd == "/add":
            await self._add_task(args)

        elif cmd in ["/done", "/toggle"]:
            await self._toggle_task(args)

        elif cmd in ["/delete", "/rm", "/del"]:
            await self._delete_task(args)

        elif cmd == "/clear":
            await self._clear_completed()

        elif cmd in ["/list", "/tasks"]:
            self.render()

        elif cmd == "/stats":
            self._show_stats()

        else:
            self.console.print(f"[red]Unknown command: {cmd}[/red]")
            self.console.print("Type /help for available commands.")

        return False

    def _show_help(self):
        """Display help information."""
        help_table = Table(title="Available Commands", show_header=True)
        help_table.add_column("Command", style="cyan")
        help_table.add_column("Description")

        commands = [
            ("TEXT", "Add a task"),
            (escape("/add TEXT [@ YYYY-MM-DD HH:MM]"), "Add a task with an optional deadline"),
            ("/done ID, /toggle ID", "Toggle task completion"),
            ("/delete ID", "Delete task"),
            ("/clear", "Clear completed tasks"),
            ("/list", "List all tasks"),
            ("/stats", "Show task counts"),
            ("/help", "Show this help message"),
            ("/quit, /exit, /q", "Exit"),
        ]

        for cmd, desc in commands:
            help_table.add_row(cmd, desc)

        self.console.print(help_table)

    # ==================== Commands ====================

    async def _add_task(self, args: str) -> bool:
        text, deadline = args, None
        if DEADLINE_SEPARATOR in args:
            head, tail = args.rsplit(DEADLINE_SEPARATOR, 1)
            # "Email bob @ office" is plain text
            if tail.strip()[:1].isdigit():
                text, deadline = head, tail

        try:
            task = self.task_manager.add_task(text, deadline)
        except ValidationError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            if e.field == "text":
                self.console.print("[dim]Usage: /add <text> " + escape("[@ YYYY-MM-DD HH:MM]") + "[/dim]")
            return False

        self.console.print(f"[green]Created task {task.id}:[/green] {escape(task.text)}")
        await self._after_change()
        return False

    async def _toggle_task(self, args: str):
        task_id = self._parse_id(args, "/done <id>")
        if task_id is None:
            return

        task = self.task_manager.toggle_task(task_id)
        if task is None:
            self.console.print(f"[red]Task not found: {task_id}[/red]")
            return

        label = "Completed" if task.completed else "Reopened"
        self.console.print(f"[green]{label}:[/green] {escape(task.text)}")
        await self._after_change()

    async def _delete_task(self, args: str):
        task_id = self._parse_id(args, "/delete <id>")
        if task_id is None:
            return

        if not self.task_manager.delete_task(task_id):
            self.console.print(f"[red]Task not found: {task_id}[/red]")
            return

        self.console.print(f"[green]Deleted task {task_id}[/green]")
        await self._after_change()

    async def _clear_completed(self):
        if self.task_manager.stats().completed == 0:
            self.console.print("[dim]No completed tasks to clear[/dim]")
            return

        if not self.confirm("Delete all completed tasks?"):
            return

        count = self.task_manager.clear_completed()
        self.console.print(f"[green]Cleared {count} completed task(s)[/green]")
        await self._after_change()

    def _parse_id(self, args: str, usage: str) -> Optional[int]:
        raw = args.strip().rstrip(".")
        try:
            return int(raw)
        except ValueError:
            self.console.print(f"[red]Usage: {usage}[/red]")
            return None

    async def _after_change(self):
        self.render()
        if self.store is not None:
            await self.store.save_from(self.task_manager)

    # ==================== Rendering ====================

    def render(self):
        """Display all tasks followed by the counts."""
        tasks = self.task_manager.all_tasks()

        if not tasks:
            self.console.print("[dim]No tasks yet. Type something to add one.[/dim]")
        else:
            table = Table(title="Tasks", show_header=True)
            table.add_column("ID", style="dim", width=4)
            table.add_column("", width=3)  # Status icon
            table.add_column("Task")
            table.add_column("Created", width=16)
            table.add_column("Deadline", width=16)

            for task in tasks:
                state = task.state
                table.add_row(
                    str(task.id),
                    escape(task.status_icon),
                    escape(task.text),
                    task.formatted_created_at(self.date_format),
                    task.formatted_deadline(self.date_format) or "",
                    style=STATE_STYLES[state],
                )

            self.console.print(table)

        self._show_stats()

    def _show_stats(self):
        stats = self.task_manager.stats()
        line = f"{stats.total} total, {stats.completed} completed, {stats.remaining} remaining"
        if stats.overdue:
            line += f", [red]{stats.overdue} overdue[/red]"
        if stats.due_soon:
            line += f", [yellow]{stats.due_soon} due soon[/yellow]"
        self.console.print(f"[dim]{line}[/dim]")
