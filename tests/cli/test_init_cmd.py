"""Tests for the init command and the global bootstrap."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from gitai.cli import app
from gitai.cli.init_cmd import ensure_global_config
from gitai.config.defaults import TEMPLATE_DIR


@pytest.mark.fs
class TestEnsureGlobalConfig:
	"""First-run creation of ~/.gitai."""

	def test_creates_from_templates(self, tmp_path: Path) -> None:
		target = tmp_path / "global"

		assert ensure_global_config(target) is True
		assert (target / "config.yaml").read_text() == (TEMPLATE_DIR / "config.yaml").read_text()

	def test_existing_directory_untouched(self, tmp_path: Path) -> None:
		target = tmp_path / "global"
		target.mkdir()
		(target / "config.yaml").write_text("commit:\n  suggestions: 7\n")

		assert ensure_global_config(target) is False
		assert (target / "config.yaml").read_text() == "commit:\n  suggestions: 7\n"
		assert not (target / "prompts").exists()

	def test_copy_failure_is_not_fatal(self, tmp_path: Path) -> None:
		assert ensure_global_config(tmp_path / "global", template_dir=tmp_path / "missing") is False


@pytest.mark.cli
class TestInitCommand:
	"""Test cases for the 'init' CLI command."""

	def test_from_global_by_default(self, runner: CliRunner, outside_repo: Path, isolated_global_dir: Path) -> None:
		isolated_global_dir.mkdir()
		(isolated_global_dir / "config.yaml").write_text("pr:\n  base_branch: trunk\n")

		result = runner.invoke(app, ["-q", "init"])

		assert result.exit_code == 0, result.output
		assert (outside_repo / ".gitai" / "config.yaml").read_text() == "pr:\n  base_branch: trunk\n"
		assert "No .git directory found" in result.output

	def test_from_default(self, runner: CliRunner, outside_repo: Path, isolated_global_dir: Path) -> None:
		isolated_global_dir.mkdir()
		(isolated_global_dir / "config.yaml").write_text("pr:\n  base_branch: trunk\n")

		result = runner.invoke(app, ["-q", "init", "--from-default"])

		assert result.exit_code == 0
		assert (outside_repo / ".gitai" / "prompts" / "commit_prompt.txt").is_file()
		assert "trunk" not in (outside_repo / ".gitai" / "config.yaml").read_text()

	def test_existing_without_force(self, runner: CliRunner, outside_repo: Path) -> None:
		(outside_repo / ".gitai").mkdir()
		(outside_repo / ".gitai" / "config.yaml").write_text("mine: true\n")

		result = runner.invoke(app, ["-q", "init"])

		assert result.exit_code == 0
		assert "already exists" in result.output
		assert (outside_repo / ".gitai" / "config.yaml").read_text() == "mine: true\n"

	def test_force_creates_backup(self, runner: CliRunner, outside_repo: Path) -> None:
		(outside_repo / ".gitai").mkdir()
		(outside_repo / ".gitai" / "config.yaml").write_text("mine: true\n")

		result = runner.invoke(app, ["-q", "init", "--force", "--from-default"])

		assert result.exit_code == 0, result.output
		backups = list(outside_repo.glob(".gitai.bak-*"))
		assert len(backups) == 1
		assert (backups[0] / "config.yaml").read_text() == "mine: true\n"
		assert (outside_repo / ".gitai" / "config.yaml").read_text() == (TEMPLATE_DIR / "config.yaml").read_text()

	def test_conflicting_sources(self, runner: CliRunner, outside_repo: Path) -> None:
		result = runner.invoke(app, ["-q", "init", "--from-global", "--from-default"])

		assert result.exit_code == 1
		assert not (outside_repo / ".gitai").exists()

	def test_no_warning_inside_repository(self, runner: CliRunner, outside_repo: Path) -> None:
		(outside_repo / ".git").mkdir()

		result = runner.invoke(app, ["-q", "init"])

		assert result.exit_code == 0
		assert "No .git directory found" not in result.output
