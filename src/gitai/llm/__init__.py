"""Provider resolution, dispatch and reply extraction."""

from gitai.llm.client import LLMClient, call_llm, select_proxy
from gitai.llm.extract import CommitMessage, PullRequestDraft, extract_commit_messages, extract_pr_json
from gitai.llm.generators import generate_commit_messages, generate_pr_draft
from gitai.llm.prompts import build_commit_prompt, build_pr_prompt
from gitai.llm.providers import ProviderKind, ProviderRequest, get_adapter, provider_kind
from gitai.llm.resolver import GitAICommand, ResolvedLLMConfig, resolve_llm_config

__all__ = [
	"CommitMessage",
	"GitAICommand",
	"LLMClient",
	"ProviderKind",
	"ProviderRequest",
	"PullRequestDraft",
	"ResolvedLLMConfig",
	"build_commit_prompt",
	"build_pr_prompt",
	"call_llm",
	"extract_commit_messages",
	"extract_pr_json",
	"generate_commit_messages",
	"generate_pr_draft",
	"get_adapter",
	"provider_kind",
	"resolve_llm_config",
	"select_proxy",
]
