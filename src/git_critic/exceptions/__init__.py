"""Exception hierarchy for git-critic."""

from .analysis import (
    CollaboratorError,
    CommandFailedError,
    CriticCommandError,
    GitCommandError,
    OutOfRangeError,
    ToolNotFoundError,
)
from .base import GitCriticError
from .validation import (
    InvalidArgumentError,
    InvalidPathError,
    UnknownArgumentError,
    ValidationError,
)

__all__ = [
    "GitCriticError",
    "ValidationError",
    "InvalidPathError",
    "InvalidArgumentError",
    "UnknownArgumentError",
    "OutOfRangeError",
    "CollaboratorError",
    "CommandFailedError",
    "ToolNotFoundError",
    "GitCommandError",
    "CriticCommandError",
]
