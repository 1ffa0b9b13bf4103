"""Persistent task storage."""

from pathlib import Path
from typing import Iterable, Optional
import json
import logging
import aiofiles

from ..planning import Clock, Task, TaskManager
from ..config import config

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Saves and loads the task list.

    Uses JSONL format for storage, one task per line.
    Storage path: data/tasks/tasks.jsonl

    The store is a plain save/load boundary: the TaskManager works the
    same with or without it.
    """

    def __init__(self, base_path: Optional[Path] = None):
        self.base_path = base_path or config.paths.tasks
        self.tasks_file = self.base_path / "tasks.jsonl"
        self._ensure_directories()

    def _ensure_directories(self):
        """Ensure storage directories exist."""
        self.base_path.mkdir(parents=True, exist_ok=True)

    async def load(self, clock: Optional[Clock] = None) -> list[Task]:
        """Load all tasks from storage, skipping malformed lines."""
        if not self.tasks_file.exists():
            return []

        tasks = []
        seen_ids = set()
        async with aiofiles.open(self.tasks_file, "r", encoding="utf-8") as f:
            lineno = 0
            async for line in f:
                lineno += 1
                line = line.strip()
                if line:
                    try:
                        data = json.loads(line)
                        task = Task.from_dict(data, clock=clock)
                        if task.id in seen_ids:
                            raise ValueError(f"duplicate task id {task.id}")
                        seen_ids.add(task.id)
                        tasks.append(task)
                    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                        logger.warning("Skipping malformed task on line %d: %s", lineno, e)
                        continue
        logger.debug("Loaded %d task(s) from %s", len(tasks), self.tasks_file)
        return tasks

    async def save(self, tasks: Iterable[Task]):
        """Save all tasks to storage."""
        count = 0
        async with aiofiles.open(self.tasks_file, "w", encoding="utf-8") as f:
            for task in tasks:
                await f.write(json.dumps(task.to_dict(), ensure_ascii=False) + "\n")
                count += 1
        logger.debug("Saved %d task(s) to %s", count, self.tasks_file)

    async def load_into(self, manager: TaskManager) -> int:
        """
        Restore a manager from storage.

        Returns:
            Number of tasks loaded
        """
        tasks = await self.load(clock=manager.clock)
        manager.restore(tasks)
        return len(tasks)

    async def save_from(self, manager: TaskManager):
        """Persist the manager's current task list."""
        await self.save(manager.all_tasks())
