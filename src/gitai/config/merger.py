"""Recursive merge of a discovered configuration onto the defaults."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
	from collections.abc import Mapping

	from gitai.config.locator import DiscoveryResult


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
	"""
	Recursively merge two configuration dictionaries.

	Nested mappings present on both sides are merged key by key. Any other
	value from ``override``, lists included, replaces the base value
	wholesale. Neither input is mutated.

	Args:
	    base: Base configuration dictionary
	    override: Override configuration to apply

	Returns:
	    A new merged dictionary

	"""
	merged = copy.deepcopy(dict(base))
	for key, value in override.items():
		current = merged.get(key)
		if isinstance(value, dict) and isinstance(current, dict):
			merged[key] = deep_merge(current, value)
		else:
			merged[key] = copy.deepcopy(value)
	return merged


def merge_config(default: Mapping[str, Any], discovered: Mapping[str, Any] | None) -> dict[str, Any]:
	"""Merge the single discovered configuration (if any) onto the defaults."""
	if not discovered:
		return copy.deepcopy(dict(default))
	return deep_merge(default, discovered)


def config_base_dir(discovery: DiscoveryResult | None, cwd: Path | None = None) -> Path:
	"""Directory used to resolve relative prompt template paths."""
	if discovery is not None:
		return discovery.filepath.parent
	return cwd or Path.cwd()
