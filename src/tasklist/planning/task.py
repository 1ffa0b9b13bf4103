"""Task dataclass for the to-do list."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional, Union

from .clock import Clock, SystemClock


DUE_SOON_WINDOW = timedelta(hours=24)
DATE_FORMAT = "%d/%m/%Y %H:%M"

DeadlineInput = Union[datetime, str, None]


class TaskState(Enum):
    """Display state of a task, derived at read time."""
    NORMAL = "normal"
    DUE_SOON = "due_soon"
    OVERDUE = "overdue"
    COMPLETED = "completed"


def parse_deadline(value: DeadlineInput) -> Optional[datetime]:
    """
    Turn a deadline input into an aware datetime.

    Accepts None or an empty string (no deadline), a datetime, or an
    ISO-8601 string like "2026-10-20T18:00" / "2026-10-20 18:00".
    Naive values are taken as local time.

    Raises:
        ValueError: if the string is not a valid timestamp
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.astimezone()
    return value


@dataclass
class Task:
    """
    A single to-do item.

    Attributes:
        id: Sequential id assigned by the owning TaskManager
        text: What needs doing (already trimmed by the manager)
        completed: Completion flag, the only field that changes after creation
        created_at: When the task was created
        deadline: Optional due time; None means no deadline
    """
    id: int
    text: str
    completed: bool = False
    created_at: datetime = field(default_factory=lambda: SystemClock().now())
    deadline: Optional[datetime] = None
    clock: Clock = field(default_factory=SystemClock, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        id: int,
        text: str,
        deadline: DeadlineInput = None,
        clock: Optional[Clock] = None,
    ) -> "Task":
        """Create a new, not yet completed task stamped with the current time."""
        clock = clock or SystemClock()
        return cls(
            id=id,
            text=text,
            created_at=clock.now(),
            deadline=parse_deadline(deadline),
            clock=clock,
        )

    def toggle_completion(self) -> None:
        self.completed = not self.completed

    def is_overdue(self) -> bool:
        """True if the deadline has passed and the task is still open."""
        if self.deadline is None or self.completed:
            return False
        return self.clock.now() > self.deadline

    def is_due_soon(self) -> bool:
        """True if the deadline is in the future but at most 24 hours away."""
        if self.deadline is None or self.completed:
            return False
        remaining = self.deadline - self.clock.now()
        return timedelta(0) < remaining <= DUE_SOON_WINDOW

    @property
    def state(self) -> TaskState:
        """Display state: completed > overdue > due soon > normal."""
        if self.completed:
            return TaskState.COMPLETED
        if self.is_overdue():
            return TaskState.OVERDUE
        if self.is_due_soon():
            return TaskState.DUE_SOON
        return TaskState.NORMAL

    @property
    def status_icon(self) -> str:
        """Get status icon for display."""
        icons = {
            TaskState.NORMAL: "[ ]",
            TaskState.DUE_SOON: "[~]",
            TaskState.OVERDUE: "[!]",
            TaskState.COMPLETED: "[x]",
        }
        return icons[self.state]

    def formatted_created_at(self, fmt: str = DATE_FORMAT) -> str:
        return self.created_at.strftime(fmt)

    def formatted_deadline(self, fmt: str = DATE_FORMAT) -> Optional[str]:
        """Deadline as day/month/year hour:minute, or None without a deadline."""
        if self.deadline is None:
            return None
        return self.deadline.strftime(fmt)

    def to_dict(self) -> dict:
        """Convert task to dictionary for serialization."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
            "deadline": self.deadline.isoformat() if self.deadline else None,
        }

    @classmethod
    def from_dict(cls, data: dict, clock: Optional[Clock] = None) -> "Task":
        """Create task from dictionary."""
        text = data["text"]
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"Invalid task text: {text!r}")
        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"Invalid completed flag: {completed!r}")

        return cls(
            id=int(data["id"]),
            text=text,
            completed=completed,
            created_at=datetime.fromisoformat(data["created_at"]),
            deadline=parse_deadline(data.get("deadline")),
            clock=clock or SystemClock(),
        )
