"""Command-line interface package for GitAI."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from gitai import __version__
from gitai.errors import NoRepositoryError
from gitai.git.utils import get_repo_root
from gitai.utils.log_setup import LOG_LEVEL_ENV, QUIET, VERBOSE, setup_logging

from .commit_cmd import register_command as register_commit_command
from .init_cmd import ensure_global_config
from .init_cmd import register_command as register_init_command
from .pr_cmd import register_command as register_pr_command
from .show_config_cmd import register_command as register_show_config_command

logger = logging.getLogger(__name__)

# Initialize the main CLI app
app = typer.Typer(
	help=f"GitAI - AI-powered Git assistant\n\nVersion: {__version__}",
	no_args_is_help=True,
	context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"GitAI version: {__version__}")
		raise typer.Exit


def load_env_file(cwd: Path | None = None) -> Path | None:
	"""
	Load ``.env`` from the repository root, or from the current directory outside a repository.

	Variables that are already set are never overridden.

	Returns:
	    The file that was loaded, if any

	"""
	cwd = cwd or Path.cwd()
	try:
		base = get_repo_root(cwd)
	except NoRepositoryError:
		base = cwd

	env_file = base / ".env"
	if not env_file.is_file():
		return None
	load_dotenv(dotenv_path=env_file, override=False)
	return env_file


@app.callback()
def global_options(
	ctx: typer.Context,
	is_verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False,
	is_quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Suppress non-error logs.")] = False,
	_version: Annotated[
		bool | None,
		typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
	] = None,
) -> None:
	"""Global CLI options and logging setup."""
	# Quiet wins when both flags are given
	if is_quiet:
		os.environ[LOG_LEVEL_ENV] = QUIET
	elif is_verbose:
		os.environ[LOG_LEVEL_ENV] = VERBOSE

	env_file = load_env_file()
	setup_logging()
	if env_file:
		logger.debug("Loaded environment variables from %s", env_file)

	ctx.meta["is_verbose"] = is_verbose
	ctx.meta["is_quiet"] = is_quiet

	ensure_global_config()


# --- Register commands ---

register_init_command(app)
register_commit_command(app)
register_pr_command(app)
register_show_config_command(app)


# --- Main Entry Point ---
def main() -> int:
	"""Run the CLI application."""
	return app()


if __name__ == "__main__":
	sys.exit(main())
