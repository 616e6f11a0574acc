"""Global test fixtures and configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
	from pathlib import Path

# Variables that change how credentials, proxies and logging are resolved
ISOLATED_ENV_VARS = (
	"GITAI_LOG_LEVEL",
	"GIT_AI_API_KEY",
	"OPENAI_API_KEY",
	"GEMINI_API_KEY",
	"OLLAMA_API_KEY",
	"HTTPS_PROXY",
	"https_proxy",
	"HTTP_PROXY",
	"http_proxy",
	"ALL_PROXY",
	"all_proxy",
)


@pytest.fixture(autouse=True)
def isolated_global_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
	"""
	Keep tests away from the real ``~/.gitai`` and the developer's environment.

	Returns:
	    A global configuration directory that does not exist yet

	"""
	for var in ISOLATED_ENV_VARS:
		# Recorded even when unset, so values set during a test are removed afterwards
		monkeypatch.setenv(var, "")
		monkeypatch.delenv(var)

	global_dir = tmp_path / "home-gitai"
	monkeypatch.setattr("gitai.config.config_loader.GLOBAL_CONFIG_DIR", global_dir)
	monkeypatch.setattr("gitai.config.locator.GLOBAL_CONFIG_DIR", global_dir)
	monkeypatch.setattr("gitai.cli.init_cmd.GLOBAL_CONFIG_DIR", global_dir)
	return global_dir


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
	"""A directory standing in for a repository root."""
	path = tmp_path / "repo"
	path.mkdir()
	return path


SAMPLE_DIFF = """diff --git a/app.py b/app.py
index 83db48f..bf269f4 100644
--- a/app.py
+++ b/app.py
@@ -1,3 +1,4 @@
 import os
+import sys
 
 def main():
"""


@pytest.fixture
def sample_diff() -> str:
	"""A small staged diff."""
	return SAMPLE_DIFF
