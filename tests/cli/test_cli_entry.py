"""Tests for the top-level CLI app and its global options."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gitai import __version__
from gitai.cli import app, load_env_file
from gitai.utils.log_setup import LOG_LEVEL_ENV


@pytest.mark.cli
def test_version(runner: CliRunner) -> None:
	"""--version prints the version and exits."""
	result = runner.invoke(app, ["--version"])

	assert result.exit_code == 0
	assert f"GitAI version: {__version__}" in result.stdout


@pytest.mark.cli
def test_help_lists_commands(runner: CliRunner) -> None:
	result = runner.invoke(app, ["--help"])

	assert result.exit_code == 0
	for command in ("init", "commit", "pr", "show-config"):
		assert command in result.stdout


@pytest.mark.cli
@pytest.mark.parametrize(
	("flags", "level"),
	[(["-v"], "verbose"), (["-q"], "quiet"), (["-v", "-q"], "quiet")],
)
def test_verbosity_flags(runner: CliRunner, outside_repo: Path, flags: list[str], level: str) -> None:
	"""The global flags set GITAI_LOG_LEVEL, quiet winning over verbose."""
	result = runner.invoke(app, [*flags, "show-config", "--path-only"])

	assert result.exit_code == 0
	assert os.environ[LOG_LEVEL_ENV] == level


@pytest.mark.cli
def test_global_dir_bootstrapped(runner: CliRunner, outside_repo: Path, isolated_global_dir: Path) -> None:
	"""The first command run creates the global directory from the bundled templates."""
	assert not isolated_global_dir.exists()

	result = runner.invoke(app, ["-q", "show-config", "--path-only"])

	assert result.exit_code == 0
	assert (isolated_global_dir / "config.yaml").is_file()
	assert (isolated_global_dir / "prompts" / "commit_prompt.txt").is_file()
	assert (isolated_global_dir / "prompts" / "pr_prompt.txt").is_file()


@pytest.mark.fs
def test_load_env_file(outside_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
	"""The .env file is loaded without overriding variables that are already set."""
	(outside_repo / ".env").write_text("GITAI_TEST_FROM_DOTENV=loaded\nGITAI_TEST_PRESET=from-file\n")
	for var in ("GITAI_TEST_FROM_DOTENV", "GITAI_TEST_PRESET"):
		monkeypatch.setenv(var, "")
		monkeypatch.delenv(var)
	monkeypatch.setenv("GITAI_TEST_PRESET", "from-shell")

	assert load_env_file(outside_repo) == outside_repo / ".env"
	assert os.environ["GITAI_TEST_FROM_DOTENV"] == "loaded"
	assert os.environ["GITAI_TEST_PRESET"] == "from-shell"


@pytest.mark.fs
def test_load_env_file_missing(outside_repo: Path) -> None:
	assert load_env_file(outside_repo) is None
