"""
Provider adapters.

Each supported provider family is a variant of ``ProviderKind`` with one
adapter that builds the HTTP request and one that pulls the reply text out of
the decoded JSON response. The set is closed: any provider name other than
``gemini`` and ``ollama`` is treated as OpenAI-compatible.

"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
	from gitai.llm.resolver import ResolvedLLMConfig

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class ProviderKind(Enum):
	"""Wire format families."""

	OPENAI_COMPATIBLE = "openai"
	GEMINI = "gemini"
	OLLAMA = "ollama"


class ReplyShapeError(ValueError):
	"""The response JSON does not have the field path the provider promises."""


@dataclass
class ProviderRequest:
	"""A provider specific POST request."""

	url: str
	headers: dict[str, str] = field(default_factory=dict)
	body: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ProviderAdapter:
	"""Request builder and reply extractor for one provider family."""

	kind: ProviderKind
	build_request: Callable[[str, ResolvedLLMConfig], ProviderRequest]
	extract_reply: Callable[[Any], str]


def provider_kind(provider: str) -> ProviderKind:
	"""Map a configured provider name onto its wire format family."""
	if provider == ProviderKind.GEMINI.value:
		return ProviderKind.GEMINI
	if provider == ProviderKind.OLLAMA.value:
		return ProviderKind.OLLAMA
	return ProviderKind.OPENAI_COMPATIBLE


def _bearer_headers(api_key: str | None) -> dict[str, str]:
	headers = dict(JSON_HEADERS)
	if api_key:
		headers["Authorization"] = f"Bearer {api_key}"
	return headers


def _user_messages(prompt: str) -> list[dict[str, str]]:
	return [{"role": "user", "content": prompt}]


# --- Gemini ---


def build_gemini_request(prompt: str, llm_config: ResolvedLLMConfig) -> ProviderRequest:
	"""``{baseUrl}/v1beta/models/{model}:generateContent?key={apiKey}``."""
	return ProviderRequest(
		url=f"{llm_config.base_url}/v1beta/models/{llm_config.model}:generateContent?key={llm_config.api_key}",
		headers=dict(JSON_HEADERS),
		body={
			"contents": [{"parts": [{"text": prompt}]}],
			"generationConfig": {"temperature": llm_config.temperature},
		},
	)


def extract_gemini_reply(data: Any) -> str:  # noqa: ANN401
	"""Return ``candidates[0].content.parts[0].text``."""
	try:
		text = data["candidates"][0]["content"]["parts"][0]["text"]
	except (KeyError, IndexError, TypeError) as e:
		msg = "missing candidates[0].content.parts[0].text"
		raise ReplyShapeError(msg) from e
	if not isinstance(text, str):
		msg = "candidates[0].content.parts[0].text is not a string"
		raise ReplyShapeError(msg)
	return text


# --- Ollama ---


def build_ollama_request(prompt: str, llm_config: ResolvedLLMConfig) -> ProviderRequest:
	"""``{baseUrl}/api/chat`` with an optional bearer header."""
	return ProviderRequest(
		url=f"{llm_config.base_url}/api/chat",
		headers=_bearer_headers(llm_config.api_key),
		body={
			"model": llm_config.model,
			"messages": _user_messages(prompt),
			"temperature": llm_config.temperature,
			"stream": False,
		},
	)


def extract_ollama_reply(data: Any) -> str:  # noqa: ANN401
	"""Return ``message.content``."""
	try:
		content = data["message"]["content"]
	except (KeyError, TypeError) as e:
		msg = "missing message.content"
		raise ReplyShapeError(msg) from e
	if not isinstance(content, str):
		msg = "message.content is not a string"
		raise ReplyShapeError(msg)
	return content


# --- OpenAI and compatible APIs ---


def build_openai_request(prompt: str, llm_config: ResolvedLLMConfig) -> ProviderRequest:
	"""``{baseUrl}/chat/completions`` asking for a JSON object reply."""
	return ProviderRequest(
		url=f"{llm_config.base_url}/chat/completions",
		headers=_bearer_headers(llm_config.api_key),
		body={
			"model": llm_config.model,
			"messages": _user_messages(prompt),
			"temperature": llm_config.temperature,
			"stream": False,
			"response_format": {"type": "json_object"},
		},
	)


def extract_openai_reply(data: Any) -> str:  # noqa: ANN401
	"""Return ``choices[0].message.content``."""
	try:
		content = data["choices"][0]["message"]["content"]
	except (KeyError, IndexError, TypeError) as e:
		msg = "missing choices[0].message.content"
		raise ReplyShapeError(msg) from e
	if not isinstance(content, str):
		msg = "choices[0].message.content is not a string"
		raise ReplyShapeError(msg)
	return content


ADAPTERS: dict[ProviderKind, ProviderAdapter] = {
	ProviderKind.GEMINI: ProviderAdapter(ProviderKind.GEMINI, build_gemini_request, extract_gemini_reply),
	ProviderKind.OLLAMA: ProviderAdapter(ProviderKind.OLLAMA, build_ollama_request, extract_ollama_reply),
	ProviderKind.OPENAI_COMPATIBLE: ProviderAdapter(
		ProviderKind.OPENAI_COMPATIBLE, build_openai_request, extract_openai_reply
	),
}


def get_adapter(provider: str) -> ProviderAdapter:
	"""Return the adapter for a configured provider name."""
	return ADAPTERS[provider_kind(provider)]
