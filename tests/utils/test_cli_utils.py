"""Tests for CLI utility functions."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import typer

from gitai.utils.cli_utils import exit_with_error, handle_keyboard_interrupt, loading_spinner


@pytest.mark.unit
def test_loading_spinner_skipped_under_pytest() -> None:
	"""No spinner is drawn while tests run."""
	with patch("gitai.utils.cli_utils.console") as mock_console, loading_spinner("Working..."):
		pass
	mock_console.status.assert_not_called()


@pytest.mark.unit
def test_exit_with_error() -> None:
	with patch("gitai.utils.cli_utils.display_error_summary") as mock_summary:
		with pytest.raises(typer.Exit) as exc_info:
			exit_with_error("Something broke", exit_code=3, exception=ValueError("details"))

	assert exc_info.value.exit_code == 3
	shown = mock_summary.call_args[0][0]
	assert "Something broke" in shown
	assert "Details: details" in shown


@pytest.mark.unit
def test_handle_keyboard_interrupt() -> None:
	with patch("gitai.utils.cli_utils.console"), pytest.raises(typer.Exit) as exc_info:
		handle_keyboard_interrupt()
	assert exc_info.value.exit_code == 130
