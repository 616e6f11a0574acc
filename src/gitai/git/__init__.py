"""Git plumbing used by the GitAI commands."""

from gitai.errors import GitError, NoRepositoryError
from gitai.git.utils import (
	commit,
	get_commit_summaries,
	get_current_branch,
	get_diff,
	get_merge_base,
	get_repo_root,
	get_staged_diff,
	has_merge_conflicts,
	limit_diff_lines,
	list_files_as_tree,
	run_git_command,
)

__all__ = [
	"GitError",
	"NoRepositoryError",
	"commit",
	"get_commit_summaries",
	"get_current_branch",
	"get_diff",
	"get_merge_base",
	"get_repo_root",
	"get_staged_diff",
	"has_merge_conflicts",
	"limit_diff_lines",
	"list_files_as_tree",
	"run_git_command",
]
