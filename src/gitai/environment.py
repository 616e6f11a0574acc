"""
Process environment access for GitAI.

Credentials, proxy settings and the log level are read from an
``Environment``: any read-only mapping of variable name to value. The live
environment is ``os.environ`` itself, so mutations made between two calls are
visible to the second one. Tests pass a snapshot or a plain dict instead.

"""

from __future__ import annotations

import os
from collections.abc import Mapping
from types import MappingProxyType

Environment = Mapping[str, str]


def live_environment() -> Environment:
	"""Return the live process environment (re-read on every lookup)."""
	return os.environ


def snapshot_environment(overrides: Mapping[str, str] | None = None) -> Environment:
	"""
	Capture a frozen copy of the current process environment.

	Args:
	    overrides: Optional values layered on top of the captured environment

	Returns:
	    An immutable mapping that no longer tracks ``os.environ``

	"""
	captured = dict(os.environ)
	if overrides:
		captured.update(overrides)
	return MappingProxyType(captured)


def get_env(name: str | None, env: Environment | None = None) -> str | None:
	"""Look up a variable, treating unset and empty values alike."""
	if not name:
		return None
	source = live_environment() if env is None else env
	value = source.get(name)
	return value or None
