"""Time sources for task classification."""

from datetime import datetime, timedelta
from typing import Optional, Protocol


def _aware(value: datetime) -> datetime:
    """Naive datetimes are taken as local time."""
    if value.tzinfo is None:
        return value.astimezone()
    return value


class Clock(Protocol):
    """Anything that can tell the current time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time in the local timezone (timezone-aware)."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


class FixedClock:
    """
    Clock frozen at a given instant.

    Used by tests and simulations so that overdue/due-soon checks are
    deterministic. Move it with `advance()` or `set()`.
    """

    def __init__(self, current: Optional[datetime] = None):
        self.current = _aware(current or datetime.now())

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> datetime:
        self.current = self.current + delta
        return self.current

    def set(self, current: datetime) -> None:
        self.current = _aware(current)
