"""Tests for option records and settings loading."""

from datetime import datetime, timezone

import pytest

from git_critic.config import (
    CriticOptions,
    CriticSettings,
    DiffOptions,
    ReportOptions,
    load_settings,
)
from git_critic.exceptions import GitCriticError, UnknownArgumentError, ValidationError
from git_critic.models import Severity


class TestOptions:
    def test_critic_options_normalize(self, perl_file):
        options = CriticOptions.from_kwargs({"file": str(perl_file), "level": "stern"})
        assert options.file == perl_file
        assert options.level is Severity.STERN

    def test_unknown_keys_named(self, perl_file):
        with pytest.raises(UnknownArgumentError) as excinfo:
            CriticOptions.from_kwargs({"file": perl_file, "lvl": 3})
        assert excinfo.value.keys == ["lvl"]
        assert excinfo.value.operation == "GitCritic"

    def test_report_defaults(self):
        options = ReportOptions.from_kwargs({"author": "a@x.org"})
        assert options.since is None
        assert options.use_cache is False

    def test_report_since_datetime(self):
        when = datetime(2024, 1, 2, tzinfo=timezone.utc)
        options = ReportOptions.from_kwargs({"author": "a@x.org", "since": when})
        assert options.since == when.timestamp()

    @pytest.mark.parametrize("since", ["2024-01-01", True, [1]])
    def test_report_bad_since(self, since):
        with pytest.raises(ValidationError):
            ReportOptions.from_kwargs({"author": "a@x.org", "since": since})

    def test_report_bad_use_cache(self):
        with pytest.raises(ValidationError):
            ReportOptions.from_kwargs({"author": "a@x.org", "use_cache": "yes"})

    def test_diff_options(self):
        options = DiffOptions.from_kwargs({"from_revision": "main", "to_revision": "HEAD"})
        assert (options.from_revision, options.to_revision) == ("main", "HEAD")

    def test_diff_rejects_perl_style_keys(self):
        with pytest.raises(UnknownArgumentError) as excinfo:
            DiffOptions.from_kwargs({"from": "main", "to": "HEAD"})
        assert excinfo.value.keys == ["from", "to"]


class TestSeverity:
    @pytest.mark.parametrize(
        "name, number",
        [("gentle", 5), ("stern", 4), ("harsh", 3), ("cruel", 2), ("brutal", 1)],
    )
    def test_names_and_numbers_agree(self, name, number):
        assert Severity.parse(name) is Severity.parse(number)
        assert int(Severity.parse(name)) == number


class TestLoadSettings:
    @pytest.fixture(autouse=True)
    def isolated(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        for key in ("GIT_EXECUTABLE", "PERLCRITIC_EXECUTABLE", "GIT_TIMEOUT_SECONDS",
                    "CRITIC_TIMEOUT_SECONDS", "DEFAULT_LEVEL"):
            monkeypatch.delenv(f"GIT_CRITIC_{key}", raising=False)

    def test_defaults(self):
        assert load_settings() == CriticSettings()

    def test_project_file(self, tmp_path):
        (tmp_path / "git-critic.toml").write_text('perlcritic_executable = "/opt/pc"\n')
        assert load_settings().perlcritic_executable == "/opt/pc"

    def test_env_beats_file_and_override_beats_env(self, tmp_path, monkeypatch):
        config = tmp_path / "custom.toml"
        config.write_text("git_timeout_seconds = 5\ndefault_level = \"harsh\"\n")
        monkeypatch.setenv("GIT_CRITIC_GIT_TIMEOUT_SECONDS", "7")

        settings = load_settings(config_file=config)
        assert settings.git_timeout_seconds == 7
        assert settings.default_level == "harsh"
        assert load_settings(config_file=config, git_timeout_seconds=9).git_timeout_seconds == 9

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(GitCriticError, match="not found"):
            load_settings(config_file=tmp_path / "absent.toml")

    def test_unknown_key(self, tmp_path):
        (tmp_path / "git-critic.toml").write_text("colour = true\n")
        with pytest.raises(GitCriticError, match="Invalid configuration"):
            load_settings()

    def test_bad_level(self, monkeypatch):
        monkeypatch.setenv("GIT_CRITIC_DEFAULT_LEVEL", "furious")
        with pytest.raises(GitCriticError):
            load_settings()

    def test_bad_integer_env(self, monkeypatch):
        monkeypatch.setenv("GIT_CRITIC_GIT_TIMEOUT_SECONDS", "soon")
        with pytest.raises(GitCriticError):
            load_settings()

    def test_broken_toml(self, tmp_path):
        (tmp_path / "git-critic.toml").write_text("this is = = not toml")
        with pytest.raises(GitCriticError, match="project config"):
            load_settings()
