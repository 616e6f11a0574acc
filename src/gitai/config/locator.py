"""
Configuration file discovery for GitAI.

Candidate files are searched in three tiers, first hit wins:

1. the git repository root (the search never leaves the repository root)
2. the current working directory, walking upward without a bound
3. the global directory ``~/.gitai``

The locator only finds and parses files. Merging onto the defaults happens in
:mod:`gitai.config.merger`.

"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from gitai.config.defaults import GLOBAL_CONFIG_DIR, MODULE_NAME
from gitai.errors import ConfigParsingError
from gitai.git.utils import get_repo_root

logger = logging.getLogger(__name__)

SEARCH_PLACES: tuple[str, ...] = (
	f".{MODULE_NAME}/config.yaml",
	f".{MODULE_NAME}/config.yml",
	"config.yaml",
	"config.yml",
	"config.json",
	f".{MODULE_NAME}rc.yaml",
	f".{MODULE_NAME}rc.yml",
	f".{MODULE_NAME}rc.json",
)

TIER_REPO = "repo"
TIER_PROJECT = "project"
TIER_GLOBAL = "global"


@dataclass(frozen=True)
class DiscoveryResult:
	"""A parsed configuration file and where it was found."""

	filepath: Path
	config: dict[str, Any] = field(default_factory=dict)


def parse_config_file(file_path: Path) -> dict[str, Any] | None:
	"""
	Parse a YAML or JSON configuration file.

	Args:
	    file_path: Path to the file to parse

	Returns:
	    The parsed mapping, or None if the file is empty

	Raises:
	    ConfigParsingError: If the file cannot be read, parsed, or is not a mapping

	"""
	try:
		with file_path.open(encoding="utf-8") as f:
			if file_path.suffix == ".json":
				text = f.read()
				content = json.loads(text) if text.strip() else None
			else:
				content = yaml.safe_load(f)
	except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
		msg = f"Error loading configuration from {file_path}: {e}"
		logger.exception("Failed to parse configuration file")
		raise ConfigParsingError(msg) from e

	if content is None:
		return None
	if not isinstance(content, dict):
		msg = f"File {file_path} does not contain a valid configuration mapping"
		raise ConfigParsingError(msg)
	return content


def _candidate_dirs(search_from: Path, stop_dir: Path | None) -> list[Path]:
	"""List search_from and its ancestors, ending at stop_dir when given."""
	start = search_from.expanduser().resolve()
	stop = stop_dir.expanduser().resolve() if stop_dir is not None else None

	dirs = [start]
	if stop == start:
		return dirs
	if stop is not None and stop not in start.parents:
		# A stop directory that is not an ancestor bounds the search to the start directory
		return dirs

	for parent in start.parents:
		dirs.append(parent)
		if parent == stop:
			break
	return dirs


def search_config(search_from: Path, stop_dir: Path | None = None) -> DiscoveryResult | None:
	"""
	Search for the first non-empty configuration file.

	Every entry of ``SEARCH_PLACES`` is checked in ``search_from``, then in its
	parent, and so on. The walk never goes above ``stop_dir`` when one is
	given; otherwise it ends at the filesystem root.

	Args:
	    search_from: Directory to start the search in
	    stop_dir: Last directory to search (optional)

	Returns:
	    DiscoveryResult for the first match, or None

	"""
	for directory in _candidate_dirs(search_from, stop_dir):
		for place in SEARCH_PLACES:
			candidate = directory / place
			if not candidate.is_file():
				continue
			content = parse_config_file(candidate)
			if not content:
				logger.debug("Skipping empty config file %s", candidate)
				continue
			return DiscoveryResult(filepath=candidate.resolve(), config=content)
	return None


def require_repo_root(cwd: Path | None = None) -> Path:
	"""
	Return the git repository root, failing when there is none.

	Raises:
	    NoRepositoryError: If ``cwd`` is not inside a git repository

	"""
	return get_repo_root(cwd)


def discover_config(
	repo_root: Path | None,
	cwd: Path | None = None,
	global_dir: Path | None = None,
) -> tuple[DiscoveryResult | None, str | None]:
	"""
	Run the three-tier search and return the highest precedence hit.

	Args:
	    repo_root: Git repository root, or None to skip the repository tier
	    cwd: Directory for the project tier (defaults to the current directory)
	    global_dir: Global config directory (defaults to ``~/.gitai``)

	Returns:
	    Tuple of (result, tier name), both None when nothing was found

	"""
	if repo_root is not None:
		result = search_config(repo_root, stop_dir=repo_root)
		if result:
			logger.debug("Found config in git repo root: %s", result.filepath)
			return result, TIER_REPO

	result = search_config(cwd or Path.cwd())
	if result:
		logger.debug("Found config in project directory: %s", result.filepath)
		return result, TIER_PROJECT

	global_root = global_dir or GLOBAL_CONFIG_DIR
	if global_root.is_dir():
		result = search_config(global_root, stop_dir=global_root)
		if result:
			logger.debug("Found config in global directory: %s", result.filepath)
			return result, TIER_GLOBAL

	return None, None
