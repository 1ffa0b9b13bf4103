"""Terminal to-do list with deadlines."""

__version__ = "0.1.0"
