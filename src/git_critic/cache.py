"""
Per-file analysis cache.

Blame and perlcritic each run at most once per epoch, whatever order the
accessors are called in. An epoch ends when ``invalidate`` is called; the
next accessor starts a new one synchronously.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import GitCriticError, InvalidArgumentError, OutOfRangeError
from .logging_config import get_logger
from .models import AnalysisState, AttributionRecord, Severity, Violation
from .protocols import AttributionProvider, StaticAnalyzer

logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """Results of one analysis epoch, owned by a single AnalysisCache."""

    state: AnalysisState = AnalysisState.UNANALYZED
    attribution_records: Optional[list[AttributionRecord]] = None
    violations: Optional[list[Violation]] = None
    authors: Optional[frozenset[str]] = None

    @property
    def completed(self) -> bool:
        return self.state is AnalysisState.ANALYZED

    def commit(self, records: list[AttributionRecord], violations: list[Violation]) -> None:
        self.attribution_records = records
        self.violations = violations
        self.authors = None
        self.state = AnalysisState.ANALYZED

    def reset(self) -> None:
        self.attribution_records = None
        self.violations = None
        self.authors = None
        self.state = AnalysisState.INVALIDATED


class AnalysisCache:
    """Lazily blames and critiques one file, keeping both results together."""

    def __init__(
        self,
        file_path: Path,
        severity: Optional[Severity],
        provider: AttributionProvider,
        analyzer: StaticAnalyzer,
    ):
        self.file_path = Path(file_path)
        self.severity = severity
        self.provider = provider
        self.analyzer = analyzer
        self.result = AnalysisResult()
        self._repo_root: Optional[Path] = None

    @property
    def state(self) -> AnalysisState:
        return self.result.state

    def get_repo_root(self) -> Path:
        """Repository root for the file, looked up once per epoch."""
        if self._repo_root is None:
            self._repo_root = self.provider.resolve_root(self.file_path)
        return self._repo_root

    def ensure_analyzed(self, use_cache: bool = False) -> None:
        if self.result.completed:
            return

        logger.debug("Analyzing %s (state=%s)", self.file_path, self.result.state.value)
        repo_root = self._repo_root
        if repo_root is None:
            repo_root = self.provider.resolve_root(self.file_path)
        records = self.provider.blame(self.file_path, repo_root, use_cache=use_cache)
        violations = self.analyzer.critique(self.file_path, self.severity)

        # Nothing is stored until both collaborators have succeeded.
        self.result.commit(list(records), list(violations))
        self._repo_root = repo_root
        logger.debug(
            "Analyzed %s: %d blame lines, %d violations",
            self.file_path,
            len(records),
            len(violations),
        )

    def invalidate(self) -> None:
        self.result.reset()
        self._repo_root = None
        logger.debug("Invalidated analysis of %s", self.file_path)

    def get_attribution_records(self) -> list[AttributionRecord]:
        self.ensure_analyzed()
        records = self.result.attribution_records
        if records is None:
            raise GitCriticError(f"No blame results stored for {self.file_path}")
        return records

    def get_violations(self) -> list[Violation]:
        self.ensure_analyzed()
        violations = self.result.violations
        if violations is None:
            raise GitCriticError(f"No perlcritic results stored for {self.file_path}")
        return violations

    def get_attribution_record(self, line_number: int) -> AttributionRecord:
        """Return the blame record for a 1-indexed line."""
        if isinstance(line_number, bool) or not isinstance(line_number, int):
            raise InvalidArgumentError(
                "line_number", line_number, "must be an integer line number in the file analyzed"
            )

        records = self.get_attribution_records()
        if line_number < 1 or line_number > len(records):
            raise OutOfRangeError(line_number, len(records))
        return records[line_number - 1]

    def get_distinct_authors(self) -> frozenset[str]:
        records = self.get_attribution_records()
        if self.result.authors is None:
            self.result.authors = frozenset(r.author_identifier for r in records)
        return self.result.authors
