"""Task manager owning the in-memory task list."""

from dataclasses import dataclass
from typing import Iterable, Optional
import logging

from .clock import Clock, SystemClock
from .exceptions import ValidationError
from .task import DeadlineInput, Task, parse_deadline

logger = logging.getLogger(__name__)


@dataclass
class TaskStats:
    """Aggregate counts over the task list at one instant."""
    total: int = 0
    completed: int = 0
    remaining: int = 0
    overdue: int = 0
    due_soon: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "completed": self.completed,
            "remaining": self.remaining,
            "overdue": self.overdue,
            "dueSoon": self.due_soon,
        }


class TaskManager:
    """
    Owns the ordered collection of tasks.

    Tasks are kept in creation order. Ids come from a counter that starts
    at 1 and is never reused, even after deletions. Commands (add, delete,
    toggle, clear) mutate the list; queries (all_tasks, stats) never do.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or SystemClock()
        self.tasks: list[Task] = []
        self.next_id = 1

    def add_task(self, text: str, deadline: DeadlineInput = None) -> Task:
        """
        Create a new task and append it to the list.

        Args:
            text: Task text; surrounding whitespace is stripped
            deadline: Optional deadline (datetime or ISO-8601 string)

        Returns:
            Created Task object

        Raises:
            ValidationError: if the text is empty or the deadline can't be parsed
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Task text cannot be empty")

        try:
            parsed_deadline = parse_deadline(deadline)
        except ValueError:
            raise ValidationError(f"Invalid deadline: {deadline}", field="deadline") from None

        task = Task.create(
            id=self.next_id,
            text=text,
            deadline=parsed_deadline,
            clock=self.clock,
        )
        self.next_id += 1
        self.tasks.append(task)
        logger.debug("Added task %d", task.id)
        return task

    def get(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def delete_task(self, task_id: int) -> bool:
        """
        Delete task.

        Returns:
            True if deleted, False if no task has that id
        """
        original_count = len(self.tasks)
        self.tasks[:] = [t for t in self.tasks if t.id != task_id]

        deleted = len(self.tasks) < original_count
        if deleted:
            logger.debug("Deleted task %d", task_id)
        return deleted

    def toggle_task(self, task_id: int) -> Optional[Task]:
        """
        Flip completion of the task with the given id.

        Returns:
            The toggled Task, or None if not found
        """
        task = self.get(task_id)
        if task:
            task.toggle_completion()
            logger.debug("Toggled task %d (completed=%s)", task.id, task.completed)
        return task

    def clear_completed(self) -> int:
        """
        Remove all completed tasks.

        Returns:
            Number of tasks removed
        """
        original_count = len(self.tasks)
        self.tasks[:] = [t for t in self.tasks if not t.completed]

        removed = original_count - len(self.tasks)
        if removed:
            logger.debug("Cleared %d completed task(s)", removed)
        return removed

    def stats(self) -> TaskStats:
        """Counts computed from the current list and the current time."""
        total = len(self.tasks)
        completed = sum(1 for t in self.tasks if t.completed)
        return TaskStats(
            total=total,
            completed=completed,
            remaining=total - completed,
            overdue=sum(1 for t in self.tasks if t.is_overdue()),
            due_soon=sum(1 for t in self.tasks if t.is_due_soon()),
        )

    def all_tasks(self) -> list[Task]:
        """Snapshot of the task list in creation order."""
        return list(self.tasks)

    def restore(self, tasks: Iterable[Task]) -> None:
        """
        Replace the task list with previously saved tasks.

        The id counter is moved past the highest restored id so new
        tasks never collide with loaded ones.
        """
        restored = sorted(tasks, key=lambda t: t.id)
        for task in restored:
            task.clock = self.clock
        self.tasks[:] = restored
        if restored:
            self.next_id = max(self.next_id, restored[-1].id + 1)
        logger.debug("Restored %d task(s), next id %d", len(restored), self.next_id)
