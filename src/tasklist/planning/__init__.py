"""Task domain: entities, the task manager and time sources."""

from .clock import Clock, FixedClock, SystemClock
from .exceptions import ValidationError
from .task import Task, TaskState, parse_deadline
from .manager import TaskManager, TaskStats

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "ValidationError",
    "Task",
    "TaskState",
    "parse_deadline",
    "TaskManager",
    "TaskStats",
]
