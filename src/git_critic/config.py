"""Configuration for git-critic.

Two kinds of configuration live here:

``CriticSettings``
    Process-level settings for the default collaborators (executables,
    timeouts, default level). Sources are merged in priority order:
        1. Defaults (defined in CriticSettings)
        2. Global config (~/.git-critic.toml)
        3. Project config (./git-critic.toml)
        4. Explicit config file
        5. Environment variables (GIT_CRITIC_* prefix)
        6. Overrides passed as kwargs

Option records
    One frozen dataclass per public operation, enumerating exactly the
    arguments it accepts. ``from_kwargs`` rejects any other key by name
    before a collaborator is touched.

Example:
    >>> options = ReportOptions.from_kwargs({"author": "alice@example.com"})
    >>> options.since is None
    True
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields
from datetime import datetime
from pathlib import Path
from typing import Any, ClassVar, Mapping, Optional, Union, get_type_hints

from .exceptions import (
    GitCriticError,
    InvalidArgumentError,
    InvalidPathError,
    UnknownArgumentError,
    ValidationError,
)
from .models import Severity


class _Options:
    """Shared constructor for per-operation option records."""

    operation: ClassVar[str] = "operation"

    @classmethod
    def from_kwargs(cls, kwargs: Mapping[str, Any]):
        accepted = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        unknown = set(kwargs) - accepted
        if unknown:
            raise UnknownArgumentError(cls.operation, unknown)
        return cls(**kwargs)


@dataclass(frozen=True)
class CriticOptions(_Options):
    """Arguments accepted when creating a GitCritic."""

    operation: ClassVar[str] = "GitCritic"

    file: Optional[Union[str, Path]] = None
    level: Optional[Union[Severity, int, str]] = None

    def __post_init__(self) -> None:
        if self.file is None or str(self.file) == "":
            raise ValidationError("Argument 'file' is needed to create a GitCritic object")
        path = Path(self.file)
        if not path.exists():
            raise InvalidPathError(path, "file does not exist")
        if path.is_dir():
            raise InvalidPathError(path, "expected a file, got a directory")
        object.__setattr__(self, "file", path)
        if self.level is not None:
            object.__setattr__(self, "level", Severity.parse(self.level))


@dataclass(frozen=True)
class ReportOptions(_Options):
    """Arguments accepted by ``report_violations``."""

    operation: ClassVar[str] = "report_violations"

    author: Optional[str] = None
    since: Optional[Union[int, float, datetime]] = None
    use_cache: bool = False

    def __post_init__(self) -> None:
        if self.author is None:
            raise ValidationError('The argument "author" must be passed')
        if not isinstance(self.author, str) or not self.author:
            raise InvalidArgumentError("author", self.author, "must be a non-empty string")
        if self.since is not None:
            object.__setattr__(self, "since", _coerce_timestamp(self.since))
        if not isinstance(self.use_cache, bool):
            raise InvalidArgumentError("use_cache", self.use_cache, "must be a boolean")


@dataclass(frozen=True)
class DiffOptions(_Options):
    """Arguments accepted by ``diff_violations``."""

    operation: ClassVar[str] = "diff_violations"

    from_revision: Optional[str] = None
    to_revision: Optional[str] = None

    def __post_init__(self) -> None:
        for key in ("from_revision", "to_revision"):
            value = getattr(self, key)
            if value is None:
                raise ValidationError(f'The argument "{key}" must be passed')
            if not isinstance(value, str) or not value:
                raise InvalidArgumentError(key, value, "must be a non-empty revision string")


def _coerce_timestamp(value: Any) -> float:
    """Normalize ``since`` to unix seconds."""
    if isinstance(value, bool):
        raise InvalidArgumentError("since", value, "must be a timestamp")
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, (int, float)):
        return value
    raise InvalidArgumentError("since", value, "must be unix seconds or a datetime")


@dataclass(frozen=True)
class CriticSettings:
    """Settings for the default git and perlcritic collaborators.

    Attributes:
        git_executable: git binary to run
        perlcritic_executable: perlcritic binary to run
        git_timeout_seconds: Timeout for each git subprocess
        critic_timeout_seconds: Timeout for each perlcritic run
        default_level: Level used when a GitCritic is created without one
    """

    git_executable: str = "git"
    perlcritic_executable: str = "perlcritic"
    git_timeout_seconds: int = 30
    critic_timeout_seconds: int = 120
    default_level: Optional[str] = None

    def __post_init__(self) -> None:
        if self.git_timeout_seconds < 1:
            raise ValueError("git_timeout_seconds must be at least 1")
        if self.critic_timeout_seconds < 1:
            raise ValueError("critic_timeout_seconds must be at least 1")
        if self.default_level is not None:
            Severity.parse(self.default_level)


DEFAULT_SETTINGS = CriticSettings()


def load_settings(config_file: Optional[Path] = None, **overrides: Any) -> CriticSettings:
    """Load settings with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated CriticSettings instance

    Raises:
        GitCriticError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".git-critic.toml"
    if global_config.exists():
        merged.update(_load_toml_or_raise(global_config, "global config"))

    project_config = Path.cwd() / "git-critic.toml"
    if project_config.exists():
        merged.update(_load_toml_or_raise(project_config, "project config"))

    if config_file is not None:
        if not config_file.exists():
            raise GitCriticError("Config file not found", path=config_file)
        merged.update(_load_toml_or_raise(config_file, "config file"))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return CriticSettings(**merged)
    except (TypeError, ValueError, ValidationError) as e:
        # TypeError covers unknown keys in a config file
        raise GitCriticError(f"Invalid configuration: {e}")


def _load_toml_or_raise(path: Path, label: str) -> dict:
    try:
        return _load_toml_file(path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise GitCriticError(f"Invalid {label}", path=path, error=e)


def _load_env_vars() -> dict[str, Any]:
    """Load settings from GIT_CRITIC_* environment variables.

    Supported environment variables:
        GIT_CRITIC_GIT_EXECUTABLE: str
        GIT_CRITIC_PERLCRITIC_EXECUTABLE: str
        GIT_CRITIC_GIT_TIMEOUT_SECONDS: int
        GIT_CRITIC_CRITIC_TIMEOUT_SECONDS: int
        GIT_CRITIC_DEFAULT_LEVEL: str
    """
    type_hints = get_type_hints(CriticSettings)
    result: dict[str, Any] = {}

    for field_name in CriticSettings.__dataclass_fields__:
        env_key = f"GIT_CRITIC_{field_name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        if type_hints.get(field_name) is int:
            try:
                result[field_name] = int(env_value)
            except ValueError:
                raise GitCriticError(f"Invalid {env_key}: expected an integer", value=env_value)
        else:
            result[field_name] = env_value

    return result


def _load_toml_file(path: Path) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)
