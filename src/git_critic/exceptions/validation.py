"""Validation exceptions: bad paths, bad values, unknown arguments."""

from pathlib import Path
from typing import Any, Iterable

from .base import GitCriticError


class ValidationError(GitCriticError):
    """Raised when arguments are missing, malformed or unknown."""

    pass


class InvalidPathError(ValidationError):
    """Raised when the file to analyze is missing or unusable."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", path=path, reason=reason)
        self.path = path
        self.reason = reason


class InvalidArgumentError(ValidationError):
    """Raised when an argument has an unacceptable value."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid value for '{key}': {value!r}",
            key=key,
            reason=reason,
        )
        self.key = key
        self.value = value
        self.reason = reason


class UnknownArgumentError(ValidationError):
    """Raised when an operation receives keys it does not accept."""

    def __init__(self, operation: str, keys: Iterable[str]):
        self.keys = sorted(keys)
        joined = ",".join(self.keys)
        super().__init__(
            f"Invalid argument '{joined}' passed to {operation}()",
            operation=operation,
        )
        self.operation = operation
