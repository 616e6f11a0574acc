"""Prompt assembly for the commit and pr commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from gitai.config.schema import AppConfig

logger = logging.getLogger(__name__)

NO_FILE_TREE = "No file tree"
NO_COMMIT_HISTORY = "No commit history"


def build_commit_prompt(
	diff: str,
	suggestions: int,
	config: AppConfig,
	user_prompt: str | None = None,
) -> str | None:
	"""
	Build the prompt asking for commit message suggestions.

	Args:
	    diff: Staged diff
	    suggestions: Number of suggestions to ask for
	    config: Application configuration with the commit system prompt filled in
	    user_prompt: Extra instructions from the command line

	Returns:
	    The prompt, or None if no system prompt is configured

	"""
	system_prompt = config.commit.system_prompt
	if not system_prompt:
		logger.error("System prompt for commit messages is not configured.")
		return None

	prompt = system_prompt.replace("{{ suggestions }}", str(suggestions))
	prompt += f"\n\nHere is the file diff:\n```diff\n{diff}\n```\n"
	if user_prompt:
		prompt += f"\nAdditional instructions from user: {user_prompt}\n"
	prompt += f"\nPlease provide {suggestions} commit message suggestions."
	return prompt


def build_pr_prompt(
	branch: str,
	target: str,
	diff: str,
	tree: str,
	commits: str,
	config: AppConfig,
	user_prompt: str | None = None,
) -> str | None:
	"""
	Fill the PR prompt template.

	Supported placeholders are ``{{ diff }}``, ``{{ branch }}``,
	``{{ target }}``, ``{{ tree }}`` and ``{{ commits }}``. The
	``{{#if tree}}``, ``{{#if commits}}`` and ``{{/if}}`` markers are removed;
	the sections they wrap are always kept.

	Returns:
	    The prompt, or None if no system prompt is configured

	"""
	template = config.pr.system_prompt
	if not template:
		logger.error("System prompt for PR is not configured.")
		return None

	prompt = (
		template.replace("{{#if tree}}", "")
		.replace("{{#if commits}}", "")
		.replace("{{/if}}", "")
		.replace("{{ branch }}", branch)
		.replace("{{ target }}", target)
		.replace("{{ tree }}", tree or NO_FILE_TREE)
		.replace("{{ commits }}", commits or NO_COMMIT_HISTORY)
		# Last, so placeholders inside the diff text are left alone
		.replace("{{ diff }}", diff)
	)
	if user_prompt:
		prompt += f"\n\nAdditional instructions: {user_prompt}"
	return prompt
