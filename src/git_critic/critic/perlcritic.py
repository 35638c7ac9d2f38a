"""Run the ``perlcritic`` executable and parse its findings."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from ..config import DEFAULT_SETTINGS, CriticSettings
from ..exceptions import CriticCommandError, ToolNotFoundError
from ..logging_config import get_logger
from ..models import Severity, Violation

logger = get_logger(__name__)

# perlcritic expands \t and \n itself; one tab-separated record per violation.
VERBOSE_FORMAT = r"%l\t%c\t%s\t%p\t%m\n"

# 0 = no violations, 2 = violations found, anything else is a failure
_OK_EXIT_CODES = (0, 2)


class PerlCritic:
    """Static analyzer that shells out to perlcritic."""

    def __init__(self, settings: CriticSettings = DEFAULT_SETTINGS):
        self.settings = settings

    def build_command(self, file_path: Path, severity: Optional[Severity]) -> list[str]:
        cmd = [self.settings.perlcritic_executable, "--quiet", "--nocolor"]
        if severity is not None:
            cmd += ["--severity", str(int(severity))]
        cmd += ["--verbose", VERBOSE_FORMAT, "--", str(file_path)]
        return cmd

    def critique(self, file_path: Path, severity: Optional[Severity] = None) -> list[Violation]:
        """Return violations in the order perlcritic reports them.

        With ``severity`` left as None the user's perlcritic profile decides
        which policies apply.
        """
        cmd = self.build_command(file_path, severity)
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.settings.critic_timeout_seconds,
            )
        except FileNotFoundError:
            raise ToolNotFoundError(self.settings.perlcritic_executable)
        except subprocess.TimeoutExpired:
            raise CriticCommandError(
                cmd, None, f"timed out after {self.settings.critic_timeout_seconds}s"
            )

        if result.returncode not in _OK_EXIT_CODES:
            raise CriticCommandError(cmd, result.returncode, result.stderr)

        violations = parse_violations(result.stdout, cmd)
        logger.debug("perlcritic reported %d violation(s) for %s", len(violations), file_path)
        return violations


def parse_violations(raw: str, cmd: Optional[list[str]] = None) -> list[Violation]:
    violations = []
    for line in raw.splitlines():
        if not line.strip():
            continue
        parts = line.split("\t", 4)
        if len(parts) != 5:
            raise CriticCommandError(cmd or ["perlcritic"], None, f"unexpected output: {line!r}")
        line_number, column, severity, policy, description = parts
        try:
            violations.append(
                Violation(
                    line_number=int(line_number),
                    column=int(column),
                    severity=int(severity),
                    policy=policy,
                    description=description,
                )
            )
        except ValueError:
            raise CriticCommandError(cmd or ["perlcritic"], None, f"unexpected output: {line!r}")
    return violations
