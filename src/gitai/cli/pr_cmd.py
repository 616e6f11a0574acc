"""Command for drafting a pull request title and body from the branch diff."""

from __future__ import annotations

import datetime
import logging
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
	from pathlib import Path

	from gitai.config.schema import AppConfig
	from gitai.llm.extract import PullRequestDraft

logger = logging.getLogger(__name__)

PR_DOCS_DIR = "pr_docs"

# --- Command Argument Annotations ---

PromptOpt = Annotated[str | None, typer.Option("--prompt", "-p", help="Additional instructions to guide the AI")]

TargetOpt = Annotated[str | None, typer.Option("--target", "-t", help="Target branch to diff against")]

UnstagedFlag = Annotated[bool, typer.Option("--unstaged", "-u", help="Include unstaged changes")]

TreeFlag = Annotated[bool, typer.Option("--tree/--no-tree", help="Include or exclude the file tree snapshot")]

PrintPromptFlag = Annotated[
	bool, typer.Option("--print-prompt", help="Print the AI prompt instead of calling the model")
]


def register_command(app: typer.Typer) -> None:
	"""Register the pr command with the CLI app."""

	@app.command(name="pr")
	def pr_command(
		prompt: PromptOpt = None,
		target: TargetOpt = None,
		unstaged: UnstagedFlag = False,
		tree: TreeFlag = True,
		print_prompt: PrintPromptFlag = False,
	) -> None:
		"""Generate a pull request title and body from the current branch diff."""
		_pr_command_impl(prompt=prompt, target=target, unstaged=unstaged, tree=tree, print_prompt=print_prompt)


def pr_doc_filename(branch: str, now: datetime.datetime | None = None) -> str:
	"""
	Name of the draft file for ``branch``.

	The timestamp is ``YYYYMMDDHHMM`` in UTC. Slashes in the branch name are
	replaced with dashes so the file lands directly in ``pr_docs``.

	"""
	now = now or datetime.datetime.now(tz=datetime.UTC)
	return f"{now.strftime('%Y%m%d%H%M')}-{branch.replace('/', '-')}.md"


def write_pr_doc(draft: PullRequestDraft, branch: str, project_dir: Path) -> Path:
	"""Write the draft as markdown under ``<project_dir>/pr_docs`` and return its path."""
	out_dir = project_dir / PR_DOCS_DIR
	out_dir.mkdir(parents=True, exist_ok=True)
	outfile = out_dir / pr_doc_filename(branch)
	outfile.write_text(f"## {draft.title}\n\n{draft.body}\n", encoding="utf-8")
	return outfile


def _pr_command_impl(
	prompt: str | None,
	target: str | None,
	unstaged: bool,
	tree: bool,
	print_prompt: bool,
) -> None:
	"""Actual implementation of the pr command."""
	from gitai.config import ConfigLoader
	from gitai.errors import GitAIError
	from gitai.utils.cli_utils import exit_with_error, handle_keyboard_interrupt

	try:
		loader = ConfigLoader()
		config = loader.load()
		_run_pr_flow(loader.cwd, config, prompt, target, unstaged, tree, print_prompt)
	except typer.Exit:
		raise
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except GitAIError as e:
		exit_with_error(str(e), exception=e)
	except Exception as e:
		logger.exception("An unexpected error occurred while generating the PR description.")
		exit_with_error(f"An unexpected error occurred: {e}", exception=e)


def _run_pr_flow(
	cwd: Path,
	config: AppConfig,
	prompt: str | None,
	target: str | None,
	unstaged: bool,
	tree: bool,
	print_prompt: bool,
) -> None:
	"""Collect the branch context, ask for a draft and write it to disk."""
	from gitai.config.defaults import PROJECT_DIR_NAME
	from gitai.git.utils import (
		get_commit_summaries,
		get_current_branch,
		get_diff,
		get_merge_base,
		has_merge_conflicts,
		list_files_as_tree,
	)
	from gitai.llm.client import LLMClient
	from gitai.llm.generators import generate_pr_draft
	from gitai.llm.prompts import build_pr_prompt
	from gitai.llm.resolver import GitAICommand
	from gitai.utils.cli_utils import console, exit_with_error, loading_spinner, show_warning, timed

	pr_config = config.pr
	branch = get_current_branch(cwd)
	target = target or pr_config.base_branch or "main"
	logger.info("Comparing branch %s -> %s", branch, target)

	merge_base = get_merge_base(target, cwd)
	if not merge_base:
		exit_with_error(f"Merge base for branch '{target}' not found")

	diff = get_diff(
		merge_base,
		"HEAD",
		include_unstaged=unstaged or pr_config.include_unstaged,
		max_lines_per_file=pr_config.max_lines_per_file,
		cwd=cwd,
	)
	file_tree = list_files_as_tree(cwd=cwd) if tree and pr_config.include_file_tree else ""
	commits = get_commit_summaries(merge_base, "HEAD", cwd)

	if pr_config.warn_on_conflict and has_merge_conflicts(target, cwd):
		show_warning(
			f"Merging {branch} into {target} will cause conflicts. PR description will still be generated, "
			"but please resolve conflicts before committing."
		)

	full_prompt = build_pr_prompt(branch, target, diff, file_tree, commits, config, prompt)
	if not full_prompt:
		exit_with_error("Failed to build prompt.")

	if print_prompt:
		typer.echo(full_prompt)
		return

	model = LLMClient(config, GitAICommand.PR.value).resolved.model
	with (
		loading_spinner(f"Using {model} to generate PR description..."),
		timed("PR description generated"),
	):
		draft = generate_pr_draft(full_prompt, config, command=GitAICommand.PR.value)

	if not draft:
		exit_with_error("Failed to generate PR description")

	outfile = write_pr_doc(draft, branch, cwd / PROJECT_DIR_NAME)
	console.print(f"[green]PR draft written to {outfile.relative_to(cwd)}[/green]")
