"""Git utilities for GitAI."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from gitai.errors import GitError, NoRepositoryError

logger = logging.getLogger(__name__)

DIFF_FILE_HEADER = "diff --git "
UNSTAGED_SEPARATOR = "\n\nThe following changes are unstaged:\n\n"
CONFLICT_MARKERS = ("<<<<<<< ", "=======")


def run_git_command(command: list[str], cwd: Path | None = None) -> str:
	"""
	Run a Git command and return its output.

	Args:
	    command: Git command to run
	    cwd: Working directory (optional)

	Returns:
	    Command output as string

	Raises:
	    GitError: If the command fails

	"""
	try:
		# Arguments are passed as a list and never through a shell
		result = subprocess.run(  # noqa: S603
			command,
			cwd=cwd,
			capture_output=True,
			text=True,
			check=True,
		)
	except subprocess.CalledProcessError as e:
		error_msg = f"Git command failed: {' '.join(command)}\nError: {e.stderr}"
		logger.debug(error_msg)
		raise GitError(error_msg) from e
	except OSError as e:
		error_msg = f"Unable to run git: {e}"
		raise GitError(error_msg) from e
	else:
		return result.stdout


def get_repo_root(path: Path | None = None) -> Path:
	"""
	Get the root directory of the Git repository.

	Args:
	    path: Optional path to start searching from

	Returns:
	    Path to repository root

	Raises:
	    NoRepositoryError: If not in a Git repository

	"""
	try:
		result = run_git_command(["git", "rev-parse", "--show-toplevel"], path)
	except GitError as e:
		msg = "Not in a Git repository"
		raise NoRepositoryError(msg) from e
	return Path(result.strip())


def get_staged_diff(cwd: Path | None = None) -> str | None:
	"""Return the staged diff, or None when nothing is staged."""
	try:
		diff = run_git_command(["git", "diff", "--staged"], cwd)
	except GitError as e:
		if "ambiguous argument 'HEAD'" in str(e):
			logger.error("No commits yet in this repository. Please make an initial commit.")  # noqa: TRY400
		raise
	return diff or None


def commit(message: str, cwd: Path | None = None) -> None:
	"""Commit the staged changes with the given message."""
	run_git_command(["git", "commit", "-m", message], cwd)
	logger.info("Successfully committed.")


def get_current_branch(cwd: Path | None = None) -> str:
	"""Return the name of the checked out branch."""
	return run_git_command(["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd).strip()


def branch_exists(branch: str, cwd: Path | None = None) -> bool:
	"""Check whether ``branch`` resolves to a commit."""
	try:
		run_git_command(["git", "rev-parse", "--verify", "--quiet", branch], cwd)
	except GitError:
		return False
	return True


def get_merge_base(target: str, cwd: Path | None = None) -> str | None:
	"""
	Get the merge base of the target branch and HEAD.

	Args:
	    target: The target branch
	    cwd: Working directory (optional)

	Returns:
	    The merge base commit, or None if the target branch is missing

	"""
	if not branch_exists(target, cwd):
		logger.error("Error checking target branch: Target branch '%s' does not exist", target)
		return None
	try:
		return run_git_command(["git", "merge-base", target, "HEAD"], cwd).strip() or None
	except GitError:
		logger.exception("Could not compute merge base with %s", target)
		return None


def limit_diff_lines(diff_text: str, max_lines: int) -> str:
	"""
	Truncate each file section of a unified diff to ``max_lines`` content lines.

	Only content lines count toward the limit. The ``diff --git`` header, the
	extended header lines that precede the first hunk (``index``, mode and
	rename lines), the ``---`` and ``+++`` file lines and ``@@`` hunk headers are
	never counted. Inside a hunk a line such as ``--- x`` is a removed ``-- x``
	line and counts like any other.
	When a file exceeds the limit, its first ``max_lines`` content lines are
	kept and a ``... (N more lines omitted) ...`` marker closes the section.
	Text before the first file header is passed through untouched.

	Args:
	    diff_text: Unified diff output
	    max_lines: Maximum number of content lines per file

	Returns:
	    The truncated diff

	"""
	result: list[str] = []
	file_lines = 0
	in_file = False
	in_hunk = False
	truncated = False

	def close_file() -> None:
		nonlocal truncated
		if in_file and file_lines > max_lines:
			result.append(f"... ({file_lines - max_lines} more lines omitted) ...")
			truncated = True

	for line in diff_text.split("\n"):
		if line.startswith(DIFF_FILE_HEADER):
			close_file()
			file_lines = 0
			in_file = True
			in_hunk = False
			result.append(line)
			continue

		if line.startswith("@@"):
			in_hunk = True
		# Inside a hunk "--- x" is a removed "-- x" line, so only "@@" is a header there.
		# Blank lines only appear as separators, real context lines start with a space
		is_metadata = not in_hunk or not line or line.startswith("@@")
		if in_file and not is_metadata:
			file_lines += 1

		if not in_file or file_lines <= max_lines:
			result.append(line)

	close_file()

	if truncated:
		logger.info("Some files were truncated due to the max lines limit")

	return "\n".join(result)


def get_diff(
	from_ref: str,
	to_ref: str,
	include_unstaged: bool = False,
	max_lines_per_file: int | None = None,
	cwd: Path | None = None,
) -> str:
	"""
	Get the diff between two commits, optionally followed by unstaged changes.

	Args:
	    from_ref: The starting commit
	    to_ref: The ending commit
	    include_unstaged: Whether to append the working tree diff
	    max_lines_per_file: Per-file content line limit (None or 0 disables it)
	    cwd: Working directory (optional)

	Returns:
	    The diff text

	"""
	diff = run_git_command(["git", "diff", from_ref, to_ref], cwd)
	logger.debug("include_unstaged: %s", include_unstaged)
	if include_unstaged:
		logger.info("Including unstaged changes")
		diff += UNSTAGED_SEPARATOR
		diff += run_git_command(["git", "diff"], cwd)

	logger.debug("max_lines_per_file: %s", max_lines_per_file)
	if max_lines_per_file and max_lines_per_file > 0:
		diff = limit_diff_lines(diff, max_lines_per_file)
	return diff


def format_file_tree(files: list[str], max_depth: int | None = None) -> str:
	"""Render a list of repository paths as an indented tree."""
	tree_lines: list[str] = []
	seen: set[str] = set()
	for file_path in files:
		segments = file_path.split("/")
		depth = min(len(segments), max_depth) if max_depth else len(segments)
		for i in range(depth):
			suffix = "/..." if i == depth - 1 and depth < len(segments) else ""
			line = f"{'  ' * i}{segments[i]}{suffix}"
			if line not in seen:
				seen.add(line)
				tree_lines.append(line)
	return "\n".join(tree_lines)


def list_files_as_tree(max_depth: int | None = None, cwd: Path | None = None) -> str:
	"""List tracked and untracked (non-ignored) files as a tree."""
	out = run_git_command(["git", "ls-files", "--cached", "--others", "--exclude-standard"], cwd)
	return format_file_tree([f for f in out.split("\n") if f], max_depth)


def get_commit_summaries(from_ref: str, to_ref: str, cwd: Path | None = None) -> str:
	"""One line per commit between two refs."""
	return run_git_command(["git", "log", "--oneline", f"{from_ref}..{to_ref}"], cwd)


def has_merge_conflicts(target: str, cwd: Path | None = None) -> bool:
	"""
	Check whether merging HEAD into ``target`` would conflict.

	Uses ``git merge-tree`` so the working tree is never touched. Any failure
	is reported as "no conflict".

	"""
	if not branch_exists(target, cwd):
		logger.warning('Target branch "%s" does not exist or is not accessible', target)
		return False

	merge_base = get_merge_base(target, cwd)
	if not merge_base:
		logger.warning("Merge base for branch '%s' not found", target)
		return False

	try:
		result = run_git_command(["git", "merge-tree", merge_base, "HEAD", target], cwd)
	except GitError as e:
		logger.debug("Error checking for merge conflicts: %s", e)
		return False
	return any(marker in result for marker in CONFLICT_MARKERS)
