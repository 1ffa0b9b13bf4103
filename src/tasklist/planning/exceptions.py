"""Errors raised by the task core."""

from dataclasses import dataclass


@dataclass
class ValidationError(Exception):
    """
    Raised when a command is given input the task list cannot accept.

    The view is expected to catch this and show `message` to the user.
    """
    message: str
    field: str = "text"

    def __str__(self):
        return self.message
