"""Shared test fixtures for git-critic."""

import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional

import pytest

from git_critic.models import AttributionRecord, Severity, Violation

DAY = 86400


def pytest_configure(config):
    """Register the git marker."""
    config.addinivalue_line("markers", "git: test needs a git executable")


def pytest_collection_modifyitems(config, items):
    """Skip git tests when git is not installed."""
    if shutil.which("git"):
        return
    skip_git = pytest.mark.skip(reason="git not found")
    for item in items:
        if "git" in item.keywords:
            item.add_marker(skip_git)


def make_records(authors: list[str], times: Optional[list[int]] = None) -> list[AttributionRecord]:
    """Create one blame record per author, numbered from line 1."""
    times = times or [DAY] * len(authors)
    return [
        AttributionRecord(line_number=i, author_identifier=author, authored_at=ts, commit="c" * 40)
        for i, (author, ts) in enumerate(zip(authors, times), start=1)
    ]


def make_violations(lines: list[int]) -> list[Violation]:
    return [
        Violation(
            line_number=line, column=1, severity=5, policy=f"Policy{line}", description=f"line {line}"
        )
        for line in lines
    ]


class FakeProvider:
    """AttributionProvider returning canned data and counting calls."""

    def __init__(self, records=None, hunks=None, blame_error: Optional[Exception] = None):
        self.records = records or []
        self.hunks = hunks or []
        self.blame_error = blame_error
        self.root_calls = 0
        self.blame_calls = 0
        self.diff_calls: list[tuple[str, str]] = []
        self.use_cache_args: list[bool] = []

    def resolve_root(self, file_path: Path) -> Path:
        self.root_calls += 1
        return Path(file_path).parent

    def blame(self, file_path: Path, repo_root: Path, use_cache: bool = False):
        self.blame_calls += 1
        self.use_cache_args.append(use_cache)
        if self.blame_error is not None:
            raise self.blame_error
        return list(self.records)

    def diff(self, file_path: Path, repo_root: Path, from_revision: str, to_revision: str):
        self.diff_calls.append((from_revision, to_revision))
        if from_revision == to_revision:
            return []
        return list(self.hunks)


class FakeAnalyzer:
    """StaticAnalyzer returning canned violations and counting calls."""

    def __init__(self, violations=None, error: Optional[Exception] = None):
        self.violations = violations or []
        self.error = error
        self.calls: list[Optional[Severity]] = []

    def critique(self, file_path: Path, severity: Optional[Severity] = None):
        self.calls.append(severity)
        if self.error is not None:
            raise self.error
        return list(self.violations)


@pytest.fixture
def perl_file(tmp_path):
    """A small Perl file on disk."""
    path = tmp_path / "Sample.pm"
    path.write_text("package Sample;\nuse strict;\nmy $x = 1;\nprint $x;\n1;\n")
    return path


def git(repo: Path, *args: str, env: Optional[dict] = None) -> str:
    result = subprocess.run(
        ["git", "-C", str(repo), *args], capture_output=True, text=True, check=True, env=env
    )
    return result.stdout.strip()


def commit_as(repo: Path, email: str, timestamp: int, message: str) -> str:
    """Commit everything staged with a fixed author and date."""
    date = f"@{timestamp} +0000"
    env = {
        "GIT_AUTHOR_NAME": email.split("@")[0],
        "GIT_AUTHOR_EMAIL": email,
        "GIT_AUTHOR_DATE": date,
        "GIT_COMMITTER_NAME": "ci",
        "GIT_COMMITTER_EMAIL": "ci@example.com",
        "GIT_COMMITTER_DATE": date,
        "PATH": os.environ.get("PATH", "/usr/local/bin:/usr/bin:/bin"),
        "HOME": str(repo),
    }
    git(repo, "add", "-A", env=env)
    git(repo, "commit", "-q", "-m", message, env=env)
    return git(repo, "rev-parse", "HEAD", env=env)


@pytest.fixture
def git_repo(tmp_path):
    """Repository with lib/App.pm written by two authors in two commits.

    alice@example.com wrote lines 1-4 on day 1; bob@example.com replaced
    line 3 and appended line 5 on day 10.
    """
    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    (repo / "lib").mkdir()
    app = repo / "lib" / "App.pm"

    app.write_text("package App;\nuse strict;\nmy $x = 1;\n1;\n")
    first = commit_as(repo, "alice@example.com", DAY, "initial")

    app.write_text("package App;\nuse strict;\nmy $y = 2;\n1;\nprint 'done';\n")
    second = commit_as(repo, "bob@example.com", 10 * DAY, "change")

    return {"root": repo, "file": app, "first": first, "second": second}
