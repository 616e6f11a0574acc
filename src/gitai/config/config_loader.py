"""
Configuration loader for GitAI.

This module ties discovery, merging, schema validation and prompt template
resolution together into a single ``AppConfig`` per invocation.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gitai.config.defaults import DEFAULT_CONFIG, GLOBAL_CONFIG_DIR
from gitai.config.locator import DiscoveryResult, discover_config, require_repo_root
from gitai.config.merger import config_base_dir, merge_config
from gitai.config.schema import AppConfig
from gitai.config.templates import fill_system_prompts
from gitai.errors import ConfigError, NoRepositoryError

logger = logging.getLogger(__name__)

NOT_FOUND = "(not found)"


@dataclass
class RawConfig:
	"""Unmerged configuration and the path it came from."""

	path: str = NOT_FOUND
	raw: dict[str, Any] = field(default_factory=dict)


class ConfigLoader:
	"""
	Loads the configuration for one GitAI invocation.

	The loader runs the git pre-check, discovers at most one configuration
	file, merges it onto ``DEFAULT_CONFIG``, validates the result and fills in
	the system prompts. The resulting ``AppConfig`` is not shared between
	loaders.

	"""

	def __init__(
		self,
		repo_root: Path | None = None,
		cwd: Path | None = None,
		global_dir: Path | None = None,
	) -> None:
		"""
		Initialize the configuration loader.

		Args:
		    repo_root: Repository root (detected with git when omitted)
		    cwd: Directory for the project-scoped search (defaults to the current directory)
		    global_dir: Global configuration directory (defaults to ``~/.gitai``)

		"""
		self.repo_root = repo_root
		self.cwd = cwd or Path.cwd()
		self.global_dir = global_dir or GLOBAL_CONFIG_DIR
		self._discovery: DiscoveryResult | None = None
		self._tier: str | None = None

	def _resolve_repo_root(self) -> Path:
		if self.repo_root is None:
			self.repo_root = require_repo_root(self.cwd)
		return self.repo_root

	def load(self) -> AppConfig:
		"""
		Build the application configuration.

		Returns:
		    AppConfig: The merged configuration with system prompts filled in

		Raises:
		    NoRepositoryError: If no git repository can be found
		    ConfigError: If the discovered file does not fit the schema

		"""
		try:
			repo_root = self._resolve_repo_root()
		except NoRepositoryError as e:
			msg = "No git repository found. Please run this command from a git repository."
			raise NoRepositoryError(msg) from e

		self._discovery, self._tier = discover_config(repo_root, self.cwd, self.global_dir)
		if self._discovery is None:
			logger.warning("No configuration found. Using default configuration.")
		else:
			logger.debug("Using %s config %s", self._tier, self._discovery.filepath)

		merged = merge_config(DEFAULT_CONFIG, self._discovery.config if self._discovery else None)
		try:
			app_config = AppConfig.model_validate(merged)
		except ValidationError as e:
			source = self._discovery.filepath if self._discovery else "defaults"
			msg = f"Error parsing configuration from {source}: {e}"
			logger.exception("Invalid configuration")
			raise ConfigError(msg) from e

		app_config = fill_system_prompts(app_config, self.base_dir)
		logger.debug("Final config: %s", app_config.model_dump(by_alias=True, exclude={"llm"}))
		return app_config

	def load_raw(self) -> RawConfig:
		"""
		Return the discovered configuration without merging it.

		Unlike :meth:`load`, this does not require a git repository; the
		repository tier is skipped when there is none.

		"""
		repo_root = self.repo_root
		if repo_root is None:
			try:
				repo_root = require_repo_root(self.cwd)
			except NoRepositoryError:
				logger.debug("Not inside a git repository, skipping the repository tier")

		logger.info("Looking for configuration, global directory is %s", self.global_dir)
		discovery, _ = discover_config(repo_root, self.cwd, self.global_dir)
		if discovery is None:
			return RawConfig()
		return RawConfig(path=str(discovery.filepath), raw=discovery.config)

	@property
	def discovery(self) -> DiscoveryResult | None:
		"""The winning configuration file, if any (available after ``load``)."""
		return self._discovery

	@property
	def tier(self) -> str | None:
		"""Which tier the winning file came from (available after ``load``)."""
		return self._tier

	@property
	def base_dir(self) -> Path:
		"""Directory relative prompt template paths are resolved against."""
		return config_base_dir(self._discovery, self.cwd)


def load_app_config(
	repo_root: Path | None = None,
	cwd: Path | None = None,
	global_dir: Path | None = None,
) -> AppConfig:
	"""Load the configuration for the current invocation."""
	return ConfigLoader(repo_root=repo_root, cwd=cwd, global_dir=global_dir).load()
