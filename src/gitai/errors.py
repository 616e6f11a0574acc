"""Exception hierarchy shared across GitAI."""

from __future__ import annotations


class GitAIError(Exception):
	"""Base class for all GitAI errors."""


class GitError(GitAIError):
	"""Custom exception for Git-related errors."""


class NoRepositoryError(GitError):
	"""Raised when the working directory is not inside a git repository."""


class ConfigError(GitAIError):
	"""Exception raised for configuration errors."""


class ConfigParsingError(ConfigError):
	"""Exception raised when a configuration file cannot be parsed."""
