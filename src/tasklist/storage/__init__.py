"""Storage layer for tasks."""

from .tasks import TaskStore

__all__ = ["TaskStore"]
