"""git-backed line attribution: blame, diff hunks and repository lookup."""

from .blame import DEFAULT_BLAME_CACHE, BlameCache, parse_line_porcelain
from .diff import parse_hunks
from .provider import GitBlameProvider
from .runner import REPOSITORY_ENV_VARS, clean_git_env, run_git

__all__ = [
    "BlameCache",
    "DEFAULT_BLAME_CACHE",
    "GitBlameProvider",
    "REPOSITORY_ENV_VARS",
    "clean_git_env",
    "parse_hunks",
    "parse_line_porcelain",
    "run_git",
]
