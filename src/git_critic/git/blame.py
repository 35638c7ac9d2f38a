"""Parse ``git blame --line-porcelain`` output, with an optional in-memory cache."""

from __future__ import annotations

import re
from collections import OrderedDict
from typing import Optional

from ..exceptions import GitCommandError
from ..logging_config import get_logger
from ..models import AttributionRecord

logger = get_logger(__name__)

# Matches: <sha> <orig line> <final line> [<lines in group>]
_HEADER_RE = re.compile(r"^([0-9a-f]{40,64}) (\d+) (\d+)(?: \d+)?$")


def parse_line_porcelain(raw: str) -> list[AttributionRecord]:
    """Turn ``--line-porcelain`` output into one record per file line.

    Every source line is introduced by a header and a full set of commit
    attributes, and terminated by the tab-prefixed line content.
    """
    records: list[AttributionRecord] = []
    commit: Optional[str] = None
    final_line = 0
    attrs: dict[str, str] = {}

    for line in raw.split("\n"):
        if commit is None:
            if not line:
                continue
            match = _HEADER_RE.match(line)
            if not match:
                raise GitCommandError(["blame", "--line-porcelain"], None, f"unexpected line: {line!r}")
            commit = match.group(1)
            final_line = int(match.group(3))
            attrs = {}
        elif line.startswith("\t"):
            records.append(_make_record(commit, final_line, attrs, line[1:]))
            commit = None
        else:
            key, _, value = line.partition(" ")
            attrs[key] = value

    if commit is not None:
        raise GitCommandError(["blame", "--line-porcelain"], None, "truncated blame output")

    for position, record in enumerate(records, start=1):
        if record.line_number != position:
            raise GitCommandError(
                ["blame", "--line-porcelain"],
                None,
                f"blame line {record.line_number} found at position {position}",
            )
    return records


def _make_record(commit: str, final_line: int, attrs: dict[str, str], content: str) -> AttributionRecord:
    try:
        authored_at = int(attrs.get("author-time", "0"))
    except ValueError:
        authored_at = 0
    return AttributionRecord(
        line_number=final_line,
        author_identifier=attrs.get("author-mail", "").strip("<>"),
        authored_at=authored_at,
        commit=commit,
        author_name=attrs.get("author", ""),
        summary=attrs.get("summary", ""),
        content=content,
    )


class BlameCache:
    """Process-local, size-bounded store of blame results.

    Keys combine the repository root, the repo-relative path, the HEAD commit
    and a digest of the file content, so a hit always describes the same
    bytes blamed against the same history. Once ``max_entries`` results are
    held, the least recently used one is dropped.
    """

    def __init__(self, max_entries: int = 128) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: OrderedDict[tuple[str, str, str, str], tuple[AttributionRecord, ...]] = (
            OrderedDict()
        )

    def get(self, key: tuple[str, str, str, str]) -> Optional[tuple[AttributionRecord, ...]]:
        records = self._entries.get(key)
        if records is not None:
            self._entries.move_to_end(key)
        return records

    def put(self, key: tuple[str, str, str, str], records: list[AttributionRecord]) -> None:
        self._entries[key] = tuple(records)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cached blame for %s", evicted[1])
        logger.debug("Cached blame for %s (%d lines)", key[1], len(records))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries


DEFAULT_BLAME_CACHE = BlameCache()
