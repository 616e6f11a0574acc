"""Tests for logging setup."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler

from gitai.utils.log_setup import current_verbosity, setup_logging


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
	"""Put the root logger's handlers and level back after the test."""
	root = logging.getLogger()
	handlers = root.handlers[:]
	level = root.level
	noisy_levels = {name: logging.getLogger(name).level for name in ("urllib3", "requests")}
	yield
	root.handlers[:] = handlers
	root.setLevel(level)
	for name, noisy_level in noisy_levels.items():
		logging.getLogger(name).setLevel(noisy_level)


@pytest.mark.unit
@pytest.mark.parametrize(
	("value", "expected"),
	[(None, "normal"), ("quiet", "quiet"), ("VERBOSE", "verbose"), ("loud", "normal")],
)
def test_current_verbosity(value: str | None, expected: str) -> None:
	env = {} if value is None else {"GITAI_LOG_LEVEL": value}
	assert current_verbosity(env) == expected


@pytest.mark.unit
@pytest.mark.usefixtures("restore_root_logger")
@pytest.mark.parametrize(
	("value", "level"),
	[("quiet", logging.ERROR), ("normal", logging.INFO), ("verbose", logging.DEBUG)],
)
def test_setup_logging_levels(value: str, level: int) -> None:
	"""Each verbosity maps to one root level and a single rich handler."""
	setup_logging({"GITAI_LOG_LEVEL": value})

	root = logging.getLogger()
	assert root.level == level
	assert len(root.handlers) == 1
	assert isinstance(root.handlers[0], RichHandler)


@pytest.mark.unit
@pytest.mark.usefixtures("restore_root_logger")
def test_setup_logging_is_repeatable() -> None:
	"""Calling setup twice does not stack handlers."""
	setup_logging({})
	setup_logging({})
	assert len(logging.getLogger().handlers) == 1


@pytest.mark.unit
@pytest.mark.usefixtures("restore_root_logger")
def test_http_loggers_quiet_unless_verbose() -> None:
	setup_logging({"GITAI_LOG_LEVEL": "normal"})
	assert logging.getLogger("urllib3").level == logging.WARNING

	logging.getLogger("urllib3").setLevel(logging.NOTSET)
	setup_logging({"GITAI_LOG_LEVEL": "verbose"})
	assert logging.getLogger("urllib3").level == logging.NOTSET
