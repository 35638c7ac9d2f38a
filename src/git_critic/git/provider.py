"""Line attribution backed by the git command line."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Mapping, Optional

from ..config import DEFAULT_SETTINGS, CriticSettings
from ..exceptions import GitCommandError
from ..logging_config import get_logger
from ..models import AttributionRecord, DiffHunk
from .blame import DEFAULT_BLAME_CACHE, BlameCache, parse_line_porcelain
from .diff import parse_hunks
from .runner import clean_git_env, run_git

logger = get_logger(__name__)


class GitBlameProvider:
    """Blame and diff a single file through git subprocesses.

    The repository is always located from the file's own directory: every
    command runs with repository-location variables such as ``GIT_DIR``
    stripped from an explicit environment, so the caller's environment
    cannot point git at another repository.
    """

    def __init__(
        self,
        settings: CriticSettings = DEFAULT_SETTINGS,
        cache: Optional[BlameCache] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.settings = settings
        self.cache = DEFAULT_BLAME_CACHE if cache is None else cache
        self._environ = environ

    def _git(self, args: list[str], cwd: Path) -> str:
        return run_git(
            args,
            cwd=cwd,
            env=clean_git_env(self._environ),
            git_executable=self.settings.git_executable,
            timeout=self.settings.git_timeout_seconds,
        )

    def resolve_root(self, file_path: Path) -> Path:
        """Top-level directory of the repository containing ``file_path``."""
        directory = Path(file_path).resolve().parent
        root = Path(self._git(["rev-parse", "--show-toplevel"], directory).strip()).resolve()
        logger.debug("Resolved repository root %s for %s", root, file_path)
        return root

    def blame(
        self, file_path: Path, repo_root: Path, use_cache: bool = False
    ) -> list[AttributionRecord]:
        relative = _relative_to_root(file_path, repo_root)

        key = None
        if use_cache:
            head = self._git(["rev-parse", "HEAD"], repo_root).strip()
            digest = hashlib.sha256(Path(file_path).read_bytes()).hexdigest()
            key = (str(repo_root), relative, head, digest)
            cached = self.cache.get(key)
            if cached is not None:
                logger.debug("Blame cache hit for %s", relative)
                return list(cached)

        raw = self._git(["blame", "--line-porcelain", "--", relative], repo_root)
        records = parse_line_porcelain(raw)
        logger.debug("Blamed %d lines of %s", len(records), relative)

        if key is not None:
            self.cache.put(key, records)
        return records

    def diff(
        self, file_path: Path, repo_root: Path, from_revision: str, to_revision: str
    ) -> list[DiffHunk]:
        relative = _relative_to_root(file_path, repo_root)
        raw = self._git(
            [
                "diff",
                "--unified=0",
                "--no-color",
                "--no-ext-diff",
                from_revision,
                to_revision,
                "--",
                relative,
            ],
            repo_root,
        )
        hunks = parse_hunks(raw)
        logger.debug(
            "Diff %s..%s touched %d hunk(s) in %s", from_revision, to_revision, len(hunks), relative
        )
        return hunks


def _relative_to_root(file_path: Path, repo_root: Path) -> str:
    resolved = Path(file_path).resolve()
    try:
        return resolved.relative_to(Path(repo_root).resolve()).as_posix()
    except ValueError:
        raise GitCommandError(
            ["rev-parse", "--show-toplevel"], None, f"{resolved} is outside {repo_root}"
        )
