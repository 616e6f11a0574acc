"""Default configuration settings for the gitai tool."""

from __future__ import annotations

from pathlib import Path

# Namespace token used for config file names and the global directory
MODULE_NAME = "gitai"

GLOBAL_CONFIG_DIR = Path.home() / f".{MODULE_NAME}"

# Bundled starter configuration copied by `init` and on first run
TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "default"

# Per-project directory created by `init`, also holds generated PR drafts
PROJECT_DIR_NAME = f".{MODULE_NAME}"

DEFAULT_PROVIDER = "openai"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.7

DEFAULT_CONFIG = {
	# LLM configuration
	"llm": {
		# Used by every command without an entry under `commands`
		"default": {
			"provider": DEFAULT_PROVIDER,
			"model": DEFAULT_MODEL,
			"temperature": DEFAULT_TEMPERATURE,
		},
		# Per-command overrides, e.g. {"pr": {"provider": "ollama", "model": "llama3"}}
		"commands": {},
	},
	# Commit feature configuration
	"commit": {
		# Number of suggestions to generate
		"suggestions": 3,
		# Relative to the directory holding the winning config file
		"prompt_template": ".gitai/prompts/commit_prompt.txt",
	},
	# Pull request configuration
	"pr": {
		"base_branch": "main",
		"include_file_tree": True,
		"include_unstaged": False,
		# 0 disables truncation
		"max_lines_per_file": 300,
		"warn_on_conflict": True,
		"prompt_template": ".gitai/prompts/pr_prompt.txt",
	},
}
