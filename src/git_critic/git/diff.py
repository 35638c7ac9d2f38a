"""Parse hunk headers out of ``git diff --unified=0``."""

import re

from ..models import DiffHunk

# @@ -<from>[,<count>] +<to>[,<count>] @@
_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def parse_hunks(raw: str) -> list[DiffHunk]:
    """Extract every hunk header; an omitted count means one line."""
    hunks = []
    for line in raw.split("\n"):
        match = _HUNK_RE.match(line)
        if not match:
            continue
        from_start, from_count, to_start, to_count = match.groups()
        hunks.append(
            DiffHunk(
                from_start=int(from_start),
                from_count=1 if from_count is None else int(from_count),
                to_start=int(to_start),
                to_count=1 if to_count is None else int(to_count),
            )
        )
    return hunks
