"""Implementation of the init command and the first-run global bootstrap."""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path
from typing import Annotated

import typer

from gitai.config.defaults import GLOBAL_CONFIG_DIR, PROJECT_DIR_NAME, TEMPLATE_DIR

logger = logging.getLogger(__name__)

ForceFlag = Annotated[bool, typer.Option("--force", "-f", help="Overwrite existing configuration if it exists")]

FromGlobalFlag = Annotated[
	bool, typer.Option("--from-global", help="Use configuration from your home directory (~/.gitai)")
]

FromDefaultFlag = Annotated[bool, typer.Option("--from-default", help="Use default template configuration")]


def ensure_global_config(global_dir: Path | None = None, template_dir: Path | None = None) -> bool:
	"""
	Create the global configuration directory from the bundled templates.

	Nothing happens when the directory already exists. A failed copy is
	logged and never stops the command that triggered it.

	Returns:
	    True if the directory was created

	"""
	global_dir = global_dir or GLOBAL_CONFIG_DIR
	template_dir = template_dir or TEMPLATE_DIR
	if global_dir.exists():
		return False
	try:
		shutil.copytree(template_dir, global_dir)
	except OSError as e:
		logger.warning("Could not create global configuration in %s: %s", global_dir, e)
		return False
	logger.debug("Created global configuration in %s", global_dir)
	return True


def register_command(app: typer.Typer) -> None:
	"""Register the init command with the CLI app."""

	@app.command(name="init")
	def init_command(
		force: ForceFlag = False,
		from_global: FromGlobalFlag = False,
		from_default: FromDefaultFlag = False,
	) -> None:
		"""Initialize GitAI configuration in your project."""
		_init_command_impl(force=force, from_global=from_global, from_default=from_default)


def _init_command_impl(
	force: bool,
	from_global: bool,
	from_default: bool,
	cwd: Path | None = None,
	global_dir: Path | None = None,
	template_dir: Path | None = None,
) -> None:
	"""Copy a starter configuration into ``./.gitai``."""
	from gitai.utils.cli_utils import console, exit_with_error, show_warning

	if from_global and from_default:
		exit_with_error("--from-global and --from-default cannot be used together.")

	cwd = cwd or Path.cwd()
	global_dir = global_dir or GLOBAL_CONFIG_DIR
	template_dir = template_dir or TEMPLATE_DIR
	target = cwd / PROJECT_DIR_NAME

	if target.exists():
		if not force:
			console.print(f"[yellow]{PROJECT_DIR_NAME} already exists. Use --force to overwrite.[/yellow]")
			return
		backup = cwd / f"{PROJECT_DIR_NAME}.bak-{int(time.time() * 1000)}"
		target.rename(backup)
		console.print(f"[green]Backup created: {backup.relative_to(cwd)}[/green]")

	if from_global:
		source = global_dir
	elif from_default:
		source = template_dir
	else:
		source = global_dir if global_dir.is_dir() else template_dir

	console.print(f"[blue]Creating GitAI configuration from {source} ...[/blue]")
	try:
		shutil.copytree(source, target)
	except OSError as e:
		exit_with_error(f"Could not copy configuration from {source}", exception=e)
	console.print(f"[green]GitAI configuration created successfully in {target.relative_to(cwd)}[/green]")

	if not (cwd / ".git").exists():
		show_warning(
			"No .git directory found. GitAI requires a git repository to function properly.\n"
			'Please run "git init" to initialize a git repository first.'
		)
