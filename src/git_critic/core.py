"""
GitCritic: attribute perlcritic violations in one file to git authors.

Example:
    >>> critic = GitCritic(file="lib/App.pm", level="harsh")
    >>> critic.report_violations(author="alice@example.com", since=1700000000)
    >>> critic.diff_violations(from_revision="main", to_revision="HEAD")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from .cache import AnalysisCache
from .config import DEFAULT_SETTINGS, CriticOptions, CriticSettings, DiffOptions, ReportOptions
from .critic import PerlCritic
from .filters import ViolationFilterEngine
from .git import GitBlameProvider
from .models import AnalysisState, AttributionRecord, Severity, Violation
from .protocols import AttributionProvider, StaticAnalyzer


class GitCritic:
    """Analysis context bound to a single file.

    Blame and perlcritic run lazily, once, on the first call that needs
    them. Call ``force_reanalyzing`` after the file or repository changes.

    Args:
        file: Path to a file inside a git repository (must exist)
        level: Optional perlcritic level, by name or number; None uses the
            default perlcritic profile
        provider: Attribution provider, defaults to GitBlameProvider
        analyzer: Static analyzer, defaults to PerlCritic
        settings: Settings used to build the default collaborators

    Raises:
        ValidationError: missing or nonexistent file, invalid level, or an
            unknown keyword argument
    """

    def __init__(
        self,
        file: Optional[str | Path] = None,
        level: Optional[Severity | int | str] = None,
        *,
        provider: Optional[AttributionProvider] = None,
        analyzer: Optional[StaticAnalyzer] = None,
        settings: CriticSettings = DEFAULT_SETTINGS,
        **kwargs: Any,
    ):
        if level is None:
            level = settings.default_level
        options = CriticOptions.from_kwargs({"file": file, "level": level, **kwargs})

        self.file: Path = options.file  # type: ignore[assignment]
        self.level: Optional[Severity] = options.level  # type: ignore[assignment]
        self.settings = settings
        self._cache = AnalysisCache(
            self.file,
            self.level,
            provider if provider is not None else GitBlameProvider(settings),
            analyzer if analyzer is not None else PerlCritic(settings),
        )
        self._filters = ViolationFilterEngine(self._cache)

    def __repr__(self) -> str:
        return f"GitCritic(file={str(self.file)!r}, level={self.level!r}, state={self.state.value})"

    @property
    def state(self) -> AnalysisState:
        return self._cache.state

    def get_authors(self) -> frozenset[str]:
        """Distinct author emails found by git blame for the file."""
        return self._cache.get_distinct_authors()

    get_distinct_authors = get_authors

    def report_violations(self, **kwargs: Any) -> list[Violation]:
        """Violations for one git author.

        Keyword Args:
            author: Author email as it appears in git blame (mandatory)
            since: Unix time or datetime; violations on lines authored
                before it are ignored, so an author is only held to recent
                changes rather than a whole legacy file
            use_cache: Reuse an in-process blame of identical content
        """
        options = ReportOptions.from_kwargs(kwargs)
        return self._filters.report_violations(
            options.author,  # type: ignore[arg-type]
            since=options.since,  # type: ignore[arg-type]
            use_cache=options.use_cache,
        )

    def diff_violations(self, **kwargs: Any) -> list[Violation]:
        """Violations on lines changed between two commits or branches.

        Keyword Args:
            from_revision: Commit or branch the changes start from (mandatory)
            to_revision: Commit or branch the changes end at (mandatory)
        """
        options = DiffOptions.from_kwargs(kwargs)
        return self._filters.diff_violations(
            options.from_revision,  # type: ignore[arg-type]
            options.to_revision,  # type: ignore[arg-type]
        )

    def force_reanalyzing(self) -> bool:
        """Discard cached results; the next call re-runs blame and perlcritic."""
        self._cache.invalidate()
        return True

    def get_violations(self) -> list[Violation]:
        return self._cache.get_violations()

    get_perlcritic_violations = get_violations

    def get_blame_lines(self) -> list[AttributionRecord]:
        return self._cache.get_attribution_records()

    get_attribution_records = get_blame_lines

    def get_blame_line(self, line_number: int) -> AttributionRecord:
        return self._cache.get_attribution_record(line_number)

    get_attribution_record = get_blame_line
