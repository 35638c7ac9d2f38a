"""
git-critic - blame the right people for perlcritic violations.

Correlates perlcritic findings in a file with git blame, so each violation
can be attributed to the author who last touched the offending line, and
narrowed to a time window or to the lines changed between two revisions.
"""

__version__ = "1.3.1"

from .core import GitCritic
from .exceptions import (
    CollaboratorError,
    GitCriticError,
    OutOfRangeError,
    ValidationError,
)
from .models import AnalysisState, AttributionRecord, DiffHunk, Severity, Violation

__all__ = [
    "GitCritic",  # Main entry point
    "Severity",
    "AnalysisState",
    "AttributionRecord",
    "Violation",
    "DiffHunk",
    "GitCriticError",
    "ValidationError",
    "OutOfRangeError",
    "CollaboratorError",
]
