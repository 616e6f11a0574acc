"""Command for showing which configuration file is in effect."""

from __future__ import annotations

import logging
from typing import Annotated

import typer

logger = logging.getLogger(__name__)

PathOnlyFlag = Annotated[bool, typer.Option("--path-only", "-p", help="Print current config path only")]


def register_command(app: typer.Typer) -> None:
	"""Register the show-config command with the CLI app."""

	@app.command(name="show-config")
	def show_config_command(path_only: PathOnlyFlag = False) -> None:
		"""Show resolved config path and content."""
		_show_config_command_impl(path_only=path_only)


def _show_config_command_impl(path_only: bool) -> None:
	"""Print the discovered configuration file and its unmerged content."""
	import yaml
	from rich.rule import Rule

	from gitai.config import ConfigLoader
	from gitai.errors import ConfigError
	from gitai.utils.cli_utils import console, exit_with_error

	try:
		raw_config = ConfigLoader().load_raw()
	except ConfigError as e:
		exit_with_error(str(e), exception=e)
		return

	if path_only:
		typer.echo(raw_config.path)
		return

	console.print(f"[cyan]Config path: {raw_config.path}[/cyan]")
	console.print(Rule(style="grey50"))
	typer.echo(yaml.safe_dump(raw_config.raw, sort_keys=False, allow_unicode=True))
