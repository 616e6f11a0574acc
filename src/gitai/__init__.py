"""GitAI - AI-authored commit messages and pull request drafts."""

__version__ = "0.3.0"
__author__ = "GitAI Contributors"
