"""
Logging setup for GitAI.

Verbosity has three levels, ``quiet``, ``normal`` and ``verbose``, taken from
the ``GITAI_LOG_LEVEL`` environment variable when logging is configured.

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

from gitai.environment import get_env

if TYPE_CHECKING:
	from gitai.environment import Environment

# Logs and summaries go to stderr so stdout stays clean for --print-prompt
console = Console(stderr=True)

LOG_LEVEL_ENV = "GITAI_LOG_LEVEL"
QUIET = "quiet"
NORMAL = "normal"
VERBOSE = "verbose"

LEVELS = {
	QUIET: logging.ERROR,
	NORMAL: logging.INFO,
	VERBOSE: logging.DEBUG,
}

NOISY_LOGGERS = ("urllib3", "requests")


def current_verbosity(env: Environment | None = None) -> str:
	"""Return the configured verbosity, falling back to ``normal``."""
	value = (get_env(LOG_LEVEL_ENV, env) or NORMAL).lower()
	return value if value in LEVELS else NORMAL


def setup_logging(env: Environment | None = None) -> None:
	"""
	Set up logging configuration.

	Args:
	    env: Environment to read ``GITAI_LOG_LEVEL`` from (defaults to the live environment)

	"""
	verbosity = current_verbosity(env)
	log_level = LEVELS[verbosity]
	is_verbose = verbosity == VERBOSE

	root_logger = logging.getLogger()
	root_logger.setLevel(log_level)

	# Clear existing handlers to avoid duplicate logs if called multiple times
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)

	console_handler = RichHandler(
		level=log_level,
		console=console,
		rich_tracebacks=True,
		show_time=is_verbose,
		show_path=is_verbose,
	)
	console_handler.setFormatter(logging.Formatter("%(message)s"))
	root_logger.addHandler(console_handler)

	if not is_verbose:
		for name in NOISY_LOGGERS:
			logging.getLogger(name).setLevel(logging.WARNING)


def display_error_summary(error_message: str) -> None:
	"""
	Display an error summary with a divider and a title.

	Args:
	    error_message: The error message to display

	"""
	title = Text("Error Summary", style="bold red")

	console.print()
	console.print(Rule(title, style="red"))
	console.print(f"\n{error_message}\n")
	console.print(Rule(style="red"))
	console.print()


def display_warning_summary(warning_message: str) -> None:
	"""Display a warning summary with a divider and a title."""
	title = Text("Warning Summary", style="bold yellow")

	console.print()
	console.print(Rule(title, style="yellow"))
	console.print(f"\n{warning_message}\n")
	console.print(Rule(style="yellow"))
	console.print()
