"""Data models shared by the analysis cache, the filters and the collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Iterator

from .exceptions import InvalidArgumentError


class Severity(IntEnum):
    """perlcritic severity levels, most lenient (5) to least lenient (1)."""

    BRUTAL = 1
    CRUEL = 2
    HARSH = 3
    STERN = 4
    GENTLE = 5

    @classmethod
    def parse(cls, value: Any) -> Severity:
        """Accept a level name, its number, or a numeric string."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise InvalidArgumentError("level", value, "not a valid PerlCritic level")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise InvalidArgumentError("level", value, "not a valid PerlCritic level")
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls.parse(int(text))
            try:
                return cls[text.upper()]
            except KeyError:
                raise InvalidArgumentError("level", value, "not a valid PerlCritic level")
        raise InvalidArgumentError("level", value, "not a valid PerlCritic level")


class AnalysisState(str, Enum):
    """Where an analysis cache sits in its epoch lifecycle."""

    UNANALYZED = "unanalyzed"
    ANALYZED = "analyzed"
    INVALIDATED = "invalidated"


@dataclass(frozen=True)
class AttributionRecord:
    """One ``git blame`` line: who last touched it and when."""

    line_number: int
    author_identifier: str  # author-mail without angle brackets
    authored_at: int  # author-time, unix seconds
    commit: str = ""
    author_name: str = ""
    summary: str = ""
    content: str = ""


@dataclass(frozen=True)
class Violation:
    """A single perlcritic finding."""

    line_number: int
    column: int = 0
    severity: int = 0
    policy: str = ""
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_number": self.line_number,
            "column": self.column,
            "severity": self.severity,
            "policy": self.policy,
            "description": self.description,
        }


@dataclass(frozen=True)
class DiffHunk:
    """A ``@@ -a,b +c,d @@`` header from a zero-context unified diff."""

    from_start: int
    from_count: int
    to_start: int
    to_count: int

    @property
    def to_lines(self) -> Iterator[int]:
        """Destination-side line numbers touched by this hunk."""
        return iter(range(self.to_start, self.to_start + self.to_count))
