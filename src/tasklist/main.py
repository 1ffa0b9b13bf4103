"""Main entry point for the task list."""

import asyncio
import logging

from rich.logging import RichHandler

from .planning import TaskManager
from .storage import TaskStore
from .interfaces.cli import TaskCLI
from .config import config

logger = logging.getLogger(__name__)


def setup_logging(level: str = "WARNING"):
    """Route log records through rich so they don't garble the task table."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


async def run():
    """Compose the manager, optional store and CLI, then run the loop."""
    task_manager = TaskManager()

    store = None
    if config.persist:
        store = TaskStore()
        count = await store.load_into(task_manager)
        logger.info("Loaded %d task(s) from %s", count, store.tasks_file)
    else:
        logger.info("Persistence disabled; tasks live in memory only")

    cli = TaskCLI(task_manager, store=store)
    await cli.run()


def cli_main():
    """Entry point for CLI."""
    setup_logging(config.log_level)

    # Run the async event loop
    asyncio.run(run())


if __name__ == "__main__":
    cli_main()
