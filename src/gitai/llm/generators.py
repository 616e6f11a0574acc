"""Turn diffs into commit message suggestions and PR drafts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gitai.llm.client import call_llm
from gitai.llm.extract import CommitMessage, PullRequestDraft, extract_commit_messages, extract_pr_json
from gitai.llm.prompts import build_commit_prompt
from gitai.llm.resolver import GitAICommand, resolve_llm_config

if TYPE_CHECKING:
	from gitai.config.schema import AppConfig
	from gitai.environment import Environment

logger = logging.getLogger(__name__)

PROMPT_PREVIEW_CHARS = 500


def generate_commit_messages(
	diff: str,
	suggestions: int,
	config: AppConfig,
	user_prompt: str | None = None,
	env: Environment | None = None,
	command: str = GitAICommand.COMMIT.value,
	timeout: float | None = None,
) -> list[CommitMessage] | None:
	"""
	Ask the configured model for commit message suggestions.

	Returns:
	    None when no reply was obtained, an empty list when the reply was
	    unusable, otherwise up to ``suggestions`` messages

	"""
	prompt = build_commit_prompt(diff, suggestions, config, user_prompt)
	if not prompt:
		return None

	logger.debug("Prompt preview: %s...", prompt[:PROMPT_PREVIEW_CHARS])
	reply = call_llm(prompt, resolve_llm_config(config, command, env), env=env, timeout=timeout)
	if not reply:
		return None

	logger.debug("LLM raw response: %s", reply)
	return extract_commit_messages(reply, suggestions)


def generate_pr_draft(
	prompt: str,
	config: AppConfig,
	env: Environment | None = None,
	command: str = GitAICommand.PR.value,
	timeout: float | None = None,
) -> PullRequestDraft | None:
	"""Ask the configured model for a PR title and body."""
	reply = call_llm(prompt, resolve_llm_config(config, command, env), env=env, timeout=timeout)
	if not reply:
		return None
	return extract_pr_json(reply)
