"""Join cached violations with blame records or diff hunks."""

from __future__ import annotations

from bisect import bisect_left
from typing import Optional, Sequence

from .cache import AnalysisCache
from .logging_config import get_logger
from .models import DiffHunk, Violation

logger = get_logger(__name__)


def changed_line_numbers(hunks: Sequence[DiffHunk]) -> list[int]:
    """Destination-side line numbers touched by ``hunks``, sorted ascending."""
    return sorted({line for hunk in hunks for line in hunk.to_lines})


def contains_line(sorted_lines: Sequence[int], line_number: int) -> bool:
    """Binary-search membership test over an ascending sequence."""
    idx = bisect_left(sorted_lines, line_number)
    return idx < len(sorted_lines) and sorted_lines[idx] == line_number


class ViolationFilterEngine:
    """Filters one file's violations by author and age, or by a commit range.

    Every filter keeps the order in which the analyzer reported violations.
    """

    def __init__(self, cache: AnalysisCache):
        self.cache = cache

    def report_violations(
        self, author: str, since: Optional[float] = None, use_cache: bool = False
    ) -> list[Violation]:
        """Violations on lines last touched by ``author``.

        With ``since`` set, lines authored before it are skipped; a line
        authored exactly at ``since`` is kept.
        """
        self.cache.ensure_analyzed(use_cache=use_cache)

        kept = []
        for violation in self.cache.get_violations():
            record = self.cache.get_attribution_record(violation.line_number)
            if record.author_identifier != author:
                continue
            if since is not None and record.authored_at < since:
                continue
            kept.append(violation)

        logger.debug("%d violation(s) attributed to %s", len(kept), author)
        return kept

    def diff_violations(self, from_revision: str, to_revision: str) -> list[Violation]:
        """Violations on lines added or changed between two revisions."""
        hunks = self.cache.provider.diff(
            self.cache.file_path, self.cache.get_repo_root(), from_revision, to_revision
        )
        if not hunks:
            return []

        changed = changed_line_numbers(hunks)
        kept = [v for v in self.cache.get_violations() if contains_line(changed, v.line_number)]

        logger.debug(
            "%d violation(s) on %d changed line(s) between %s and %s",
            len(kept),
            len(changed),
            from_revision,
            to_revision,
        )
        return kept
