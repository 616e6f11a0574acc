"""Resolve prompt template files into system prompt text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from gitai.config.schema import AppConfig, CommitConfig, PRConfig

logger = logging.getLogger(__name__)

DEFAULT_COMMIT_SYSTEM_PROMPT = "Generate a commit message based on the diff."
DEFAULT_PR_SYSTEM_PROMPT = "Generate a PR description based on the changes."


def load_text_file(file_path: Path) -> str | None:
	"""
	Read a text file, returning None instead of raising.

	Args:
	    file_path: Path to the file

	Returns:
	    File contents, or None if the file is missing, unreadable or empty

	"""
	try:
		content = file_path.read_text(encoding="utf-8")
	except (OSError, UnicodeDecodeError) as e:
		logger.debug("Could not read %s: %s", file_path, e)
		return None
	return content or None


def _fill_section(section: CommitConfig | PRConfig, base_dir: Path, fallback: str, label: str) -> None:
	if section.prompt_template:
		template_path = (base_dir / Path(section.prompt_template).expanduser()).resolve()
		logger.debug("Loading %s prompt template from %s", label, template_path)
		content = load_text_file(template_path)
		if content:
			section.system_prompt = content
			return
		logger.warning(
			"Failed to load %s prompt from %s. Using fallback or the configured systemPrompt.", label, template_path
		)

	if not section.system_prompt:
		section.system_prompt = fallback


def fill_system_prompts(config: AppConfig, base_dir: Path) -> AppConfig:
	"""
	Populate ``commit.system_prompt`` and ``pr.system_prompt`` in place.

	A readable ``prompt_template`` wins. Otherwise an explicit ``systemPrompt``
	from the config is kept, and the built-in one-liner is used as a last
	resort. This never raises.

	Args:
	    config: Merged application configuration
	    base_dir: Directory relative template paths are resolved against

	Returns:
	    The same configuration object

	"""
	_fill_section(config.commit, base_dir, DEFAULT_COMMIT_SYSTEM_PROMPT, "commit")
	_fill_section(config.pr, base_dir, DEFAULT_PR_SYSTEM_PROMPT, "PR")
	return config
