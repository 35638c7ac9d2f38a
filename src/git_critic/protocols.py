"""Protocol classes for the two external collaborators."""

from pathlib import Path
from typing import Optional, Protocol

from .models import AttributionRecord, DiffHunk, Severity, Violation


class AttributionProvider(Protocol):
    """Locates the repository, blames a file, and lists diff hunks."""

    def resolve_root(self, file_path: Path) -> Path: ...

    def blame(
        self, file_path: Path, repo_root: Path, use_cache: bool = False
    ) -> list[AttributionRecord]: ...

    def diff(
        self, file_path: Path, repo_root: Path, from_revision: str, to_revision: str
    ) -> list[DiffHunk]: ...


class StaticAnalyzer(Protocol):
    """Reports line-tagged violations for one file."""

    def critique(self, file_path: Path, severity: Optional[Severity] = None) -> list[Violation]: ...
