"""Command for generating commit messages from the staged diff."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
	from pathlib import Path

	from gitai.config.schema import AppConfig

logger = logging.getLogger(__name__)

SKIP = "__skip__"

# --- Command Argument Annotations ---

PromptOpt = Annotated[str | None, typer.Option("--prompt", "-p", help="Additional instructions to guide the AI")]

SuggestionsOpt = Annotated[
	int | None, typer.Option("--suggestions", "-n", min=1, help="Number of suggestions to generate")
]

PrintPromptFlag = Annotated[
	bool, typer.Option("--print-prompt", help="Print the AI prompt instead of calling the model")
]

# --- Registration Function ---


def register_command(app: typer.Typer) -> None:
	"""Register the commit command with the CLI app."""

	@app.command(name="commit")
	def commit_command(
		prompt: PromptOpt = None,
		suggestions: SuggestionsOpt = None,
		print_prompt: PrintPromptFlag = False,
	) -> None:
		"""Generate AI-powered commit messages for staged changes."""
		_commit_command_impl(prompt=prompt, suggestions=suggestions, print_prompt=print_prompt)


# --- Implementation Function (Heavy imports deferred here) ---


def _commit_command_impl(prompt: str | None, suggestions: int | None, print_prompt: bool) -> None:
	"""Actual implementation of the commit command."""
	from gitai.config import ConfigLoader
	from gitai.errors import GitAIError
	from gitai.utils.cli_utils import exit_with_error, handle_keyboard_interrupt

	try:
		loader = ConfigLoader()
		config = loader.load()
		_run_commit_flow(loader.repo_root, config, prompt, suggestions, print_prompt)
	except typer.Exit:
		raise
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
	except GitAIError as e:
		exit_with_error(str(e), exception=e)
	except Exception as e:
		logger.exception("An unexpected error occurred during the commit process.")
		exit_with_error(f"An unexpected error occurred: {e}", exception=e)


def _run_commit_flow(
	repo_root: Path | None,
	config: AppConfig,
	prompt: str | None,
	suggestions: int | None,
	print_prompt: bool,
) -> None:
	"""Fetch the staged diff, ask for suggestions and commit the chosen one."""
	import questionary

	from gitai.git.utils import commit, get_staged_diff
	from gitai.llm.client import LLMClient
	from gitai.llm.generators import generate_commit_messages
	from gitai.llm.prompts import build_commit_prompt
	from gitai.llm.resolver import GitAICommand
	from gitai.utils.cli_utils import console, exit_with_error, handle_keyboard_interrupt, loading_spinner, timed

	with loading_spinner("Fetching staged changes..."):
		diff = get_staged_diff(repo_root)

	if not diff:
		console.print('[yellow]No staged changes found. Please use "git add" to stage your changes.[/yellow]')
		return

	count = suggestions or config.commit.suggestions
	if not count:
		exit_with_error("Number of suggestions is not configured.")

	if print_prompt:
		full_prompt = build_commit_prompt(diff, count, config, prompt)
		if not full_prompt:
			exit_with_error("Failed to build prompt.")
		typer.echo(full_prompt)
		return

	model = LLMClient(config, GitAICommand.COMMIT.value).resolved.model
	with (
		loading_spinner(f"Generating {count} commit messages with {model}..."),
		timed("AI suggestions generated"),
	):
		messages = generate_commit_messages(diff, count, config, prompt, command=GitAICommand.COMMIT.value)

	if not messages:
		exit_with_error("AI did not return any suggestions. You might want to try again or adjust your prompt/config.")

	choices = [{"name": f"({i}) {m.message}", "value": m.message} for i, m in enumerate(messages, start=1)]
	choices.append(questionary.Separator())
	choices.append({"name": "Skip (do not commit)", "value": SKIP})

	selected = questionary.select("Choose a commit message:", choices=choices).ask()
	if selected is None:
		handle_keyboard_interrupt()
	if selected == SKIP:
		console.print("[yellow]Commit skipped.[/yellow]")
		return

	confirmed = questionary.confirm(f"Commit with the following message?\n\n  {selected}\n", default=True).ask()
	if not confirmed:
		console.print("[yellow]Commit cancelled.[/yellow]")
		return

	with loading_spinner("Creating commit..."):
		commit(selected, repo_root)
	console.print("[green]Changes committed successfully![/green]")
