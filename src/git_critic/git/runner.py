"""Run git subprocesses pinned to one repository."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

from ..exceptions import GitCommandError, ToolNotFoundError
from ..logging_config import get_logger

logger = get_logger(__name__)

# Variables that make git ignore the working directory when locating a
# repository, or that only make sense relative to the caller's cwd.
REPOSITORY_ENV_VARS = (
    "GIT_DIR",
    "GIT_WORK_TREE",
    "GIT_COMMON_DIR",
    "GIT_INDEX_FILE",
    "GIT_OBJECT_DIRECTORY",
    "GIT_ALTERNATE_OBJECT_DIRECTORIES",
    "GIT_NAMESPACE",
)


def clean_git_env(environ: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Return a copy of ``environ`` without repository-location overrides."""
    source = os.environ if environ is None else environ
    return {k: v for k, v in source.items() if k not in REPOSITORY_ENV_VARS}


def decode_output(data: bytes) -> str:
    """Decode git output as UTF-8 without newline translation.

    Blame echoes source lines verbatim, so legacy encodings and bare
    carriage returns must survive decoding; undecodable bytes become U+FFFD.
    """
    return data.decode("utf-8", errors="replace")


def run_git(
    args: Sequence[str],
    cwd: Path,
    env: Mapping[str, str],
    git_executable: str = "git",
    timeout: int = 30,
) -> str:
    """Run ``git <args>`` in ``cwd`` and return stdout.

    Raises:
        ToolNotFoundError: git is not installed
        GitCommandError: non-zero exit or timeout
    """
    cmd = [git_executable, *args]
    logger.debug("Running %s in %s", " ".join(cmd), cwd)
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=dict(env),
            capture_output=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise ToolNotFoundError(git_executable)
    except subprocess.TimeoutExpired:
        raise GitCommandError(cmd, None, f"timed out after {timeout}s")

    if result.returncode != 0:
        raise GitCommandError(cmd, result.returncode, decode_output(result.stderr))
    return decode_output(result.stdout)
