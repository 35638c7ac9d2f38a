"""Analysis-time exceptions: line lookups and external tool failures."""

from typing import Optional, Sequence

from .base import GitCriticError


class OutOfRangeError(GitCriticError):
    """Raised when a line number is past the end of the blamed file."""

    def __init__(self, line_number: int, line_count: int):
        super().__init__(
            "The line number requested does not exist",
            line_number=line_number,
            line_count=line_count,
        )
        self.line_number = line_number
        self.line_count = line_count


class CollaboratorError(GitCriticError):
    """Base class for failures reported by git or the static analyzer."""

    pass


class ToolNotFoundError(CollaboratorError):
    """Raised when an external executable cannot be located."""

    def __init__(self, tool: str):
        super().__init__(f"Executable not found: {tool}", tool=tool)
        self.tool = tool


class CommandFailedError(CollaboratorError):
    """Raised when an external command exits unsuccessfully or times out."""

    tool_label = "command"

    def __init__(self, command: Sequence[str], returncode: Optional[int], stderr: str = ""):
        super().__init__(
            f"{self.tool_label} failed",
            command=" ".join(command),
            returncode=returncode,
            stderr=stderr.strip() or None,
        )
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class GitCommandError(CommandFailedError):
    """Raised when a git subprocess fails."""

    tool_label = "git"


class CriticCommandError(CommandFailedError):
    """Raised when perlcritic fails or produces unparseable output."""

    tool_label = "perlcritic"
