"""Fixtures for command line tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from gitai.errors import NoRepositoryError


@pytest.fixture
def runner() -> CliRunner:
	return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
	"""An empty working directory the CLI runs in."""
	path = tmp_path / "work"
	path.mkdir()
	monkeypatch.chdir(path)
	return path


@pytest.fixture
def in_repo(workdir: Path) -> Iterator[Path]:
	"""Pretend ``workdir`` is the root of a git repository."""
	with (
		patch("gitai.cli.get_repo_root", return_value=workdir),
		patch("gitai.config.config_loader.require_repo_root", return_value=workdir),
	):
		yield workdir


@pytest.fixture
def outside_repo(workdir: Path) -> Iterator[Path]:
	"""Make every repository lookup fail."""
	no_repo = NoRepositoryError("Not in a Git repository")
	with (
		patch("gitai.cli.get_repo_root", side_effect=no_repo),
		patch("gitai.config.config_loader.require_repo_root", side_effect=no_repo),
	):
		yield workdir
