"""Tests for the pr command CLI."""

from __future__ import annotations

import datetime
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from gitai.cli import app
from gitai.cli.pr_cmd import pr_doc_filename, write_pr_doc
from gitai.llm.extract import PullRequestDraft


@pytest.fixture
def mock_git() -> Iterator[dict[str, MagicMock]]:
	"""Mock the git plumbing used by the pr command."""
	with (
		patch("gitai.git.utils.get_current_branch", return_value="feature/auth") as branch,
		patch("gitai.git.utils.get_merge_base", return_value="abc123") as merge_base,
		patch("gitai.git.utils.get_diff", return_value="+added line") as diff,
		patch("gitai.git.utils.list_files_as_tree", return_value="src\n  auth.py") as tree,
		patch("gitai.git.utils.get_commit_summaries", return_value="abc123 add auth") as commits,
		patch("gitai.git.utils.has_merge_conflicts", return_value=False) as conflicts,
	):
		yield {
			"branch": branch,
			"merge_base": merge_base,
			"diff": diff,
			"tree": tree,
			"commits": commits,
			"conflicts": conflicts,
		}


@pytest.mark.unit
def test_pr_doc_filename() -> None:
	"""The timestamp prefix is minute precision and slashes become dashes."""
	now = datetime.datetime(2024, 5, 17, 9, 3, 59, tzinfo=datetime.UTC)
	assert pr_doc_filename("feature/auth/login", now) == "202405170903-feature-auth-login.md"


@pytest.mark.fs
def test_write_pr_doc(tmp_path: Path) -> None:
	outfile = write_pr_doc(PullRequestDraft(title="Add auth", body="## Summary\nAdds auth."), "main", tmp_path)

	assert outfile.parent == tmp_path / "pr_docs"
	assert outfile.read_text(encoding="utf-8") == "## Add auth\n\n## Summary\nAdds auth.\n"


@pytest.mark.cli
class TestPrCommand:
	"""Test cases for the 'pr' CLI command."""

	def test_print_prompt(self, runner: CliRunner, in_repo: Path, mock_git: dict[str, MagicMock]) -> None:
		result = runner.invoke(app, ["-q", "pr", "--print-prompt", "-t", "develop", "-p", "Keep it short"])

		assert result.exit_code == 0, result.output
		assert "feature/auth" in result.stdout
		assert "develop" in result.stdout
		assert "+added line" in result.stdout
		assert "src\n  auth.py" in result.stdout
		assert "abc123 add auth" in result.stdout
		assert result.stdout.rstrip().endswith("Additional instructions: Keep it short")
		mock_git["merge_base"].assert_called_once_with("develop", in_repo)
		assert mock_git["diff"].call_args[1]["max_lines_per_file"] == 300

	def test_no_tree(self, runner: CliRunner, in_repo: Path, mock_git: dict[str, MagicMock]) -> None:
		result = runner.invoke(app, ["-q", "pr", "--print-prompt", "--no-tree"])

		assert result.exit_code == 0
		mock_git["tree"].assert_not_called()
		assert "No file tree" in result.stdout

	def test_unstaged_flag(self, runner: CliRunner, in_repo: Path, mock_git: dict[str, MagicMock]) -> None:
		runner.invoke(app, ["-q", "pr", "--print-prompt", "-u"])
		assert mock_git["diff"].call_args[1]["include_unstaged"] is True

	def test_missing_merge_base(self, runner: CliRunner, in_repo: Path, mock_git: dict[str, MagicMock]) -> None:
		mock_git["merge_base"].return_value = None

		result = runner.invoke(app, ["-q", "pr"])

		assert result.exit_code == 1
		mock_git["diff"].assert_not_called()

	def test_writes_draft(self, runner: CliRunner, in_repo: Path, mock_git: dict[str, MagicMock]) -> None:
		draft = PullRequestDraft(title="Add auth", body="## Summary\nAdds auth.")
		with patch("gitai.llm.generators.generate_pr_draft", return_value=draft) as mock_generate:
			result = runner.invoke(app, ["-q", "pr"])

		assert result.exit_code == 0, result.output
		docs = list((in_repo / ".gitai" / "pr_docs").glob("*-feature-auth.md"))
		assert len(docs) == 1
		assert docs[0].read_text(encoding="utf-8") == "## Add auth\n\n## Summary\nAdds auth.\n"
		assert mock_generate.call_args[1]["command"] == "pr"

	def test_generation_failed(self, runner: CliRunner, in_repo: Path, mock_git: dict[str, MagicMock]) -> None:
		with patch("gitai.llm.generators.generate_pr_draft", return_value=None):
			result = runner.invoke(app, ["-q", "pr"])

		assert result.exit_code == 1
		assert not (in_repo / ".gitai" / "pr_docs").exists()

	def test_conflict_warning_does_not_stop_generation(
		self, runner: CliRunner, in_repo: Path, mock_git: dict[str, MagicMock]
	) -> None:
		mock_git["conflicts"].return_value = True

		result = runner.invoke(app, ["-q", "pr", "--print-prompt"])

		assert result.exit_code == 0
		assert "will cause conflicts" in result.output
