"""HTTP dispatch of a single prompt to the configured provider."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import requests

from gitai.environment import get_env
from gitai.llm.providers import ProviderKind, ReplyShapeError, get_adapter
from gitai.llm.resolver import OLLAMA_PROVIDER, resolve_llm_config

if TYPE_CHECKING:
	from gitai.config.schema import AppConfig
	from gitai.environment import Environment
	from gitai.llm.resolver import ResolvedLLMConfig

logger = logging.getLogger(__name__)

# Checked in order, the first set variable wins
PROXY_ENV_VARS: tuple[tuple[str, str], ...] = (
	("HTTPS_PROXY", "https_proxy"),
	("HTTP_PROXY", "http_proxy"),
	("ALL_PROXY", "all_proxy"),
)

LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


def select_proxy(env: Environment | None = None) -> str | None:
	"""Return the forward proxy URL to use, preferring HTTPS, then HTTP, then ALL."""
	for upper, lower in PROXY_ENV_VARS:
		proxy = get_env(upper, env) or get_env(lower, env)
		if proxy:
			return proxy
	return None


def is_local_url(url: str) -> bool:
	"""Check whether a base URL points at a loopback host."""
	host = urlparse(url).hostname or ""
	return host in LOOPBACK_HOSTS or host.endswith(".localhost")


def check_preconditions(llm_config: ResolvedLLMConfig) -> bool:
	"""
	Validate the resolved config before any network I/O.

	A base URL is always required. A key is required unless the provider is
	ollama or the base URL is a loopback address.

	"""
	provider = llm_config.provider
	if not llm_config.base_url:
		logger.error('Base URL for LLM provider "%s" is not configured.', provider)
		return False
	if not llm_config.api_key and provider != OLLAMA_PROVIDER and not is_local_url(llm_config.base_url):
		logger.error('API Key for LLM provider "%s" is not configured.', provider)
		return False
	return True


def call_llm(
	prompt: str,
	llm_config: ResolvedLLMConfig,
	env: Environment | None = None,
	timeout: float | None = None,
) -> str | None:
	"""
	Send one prompt to the provider and return the raw reply text.

	Every failure is logged and turned into ``None``: failed preconditions,
	network errors, non-2xx responses, undecodable bodies and bodies without
	the expected field path.

	Args:
	    prompt: Full prompt text
	    llm_config: Resolved provider settings
	    env: Environment used for proxy lookup (defaults to the live environment)
	    timeout: Seconds to wait for the provider (None waits indefinitely)

	Returns:
	    The reply text, or None

	"""
	if not check_preconditions(llm_config):
		return None

	provider = llm_config.provider
	adapter = get_adapter(provider)
	request = adapter.build_request(prompt, llm_config)

	proxies = None
	proxy_url = select_proxy(env)
	if proxy_url:
		logger.debug("Using proxy %s", proxy_url)
		proxies = {"http": proxy_url, "https": proxy_url}

	# The gemini URL carries the key as a query parameter
	shown_url = request.url.split("?", 1)[0] if adapter.kind is ProviderKind.GEMINI else request.url
	logger.debug("Sending request to %s at %s with model %s...", provider, shown_url, llm_config.model)

	try:
		response = requests.post(
			request.url,
			headers=request.headers,
			data=json.dumps(request.body),
			proxies=proxies,
			timeout=timeout,
		)
	except requests.RequestException as e:
		logger.error("Error calling LLM (%s): %s", provider, e)  # noqa: TRY400
		return None

	if not response.ok:
		logger.error(
			"LLM API request to %s failed with status %s: %s", provider, response.status_code, response.text
		)
		return None

	try:
		data = response.json()
	except ValueError as e:
		logger.error("LLM response from %s is not valid JSON: %s", provider, e)  # noqa: TRY400
		return None

	logger.debug("Response data: %s", data)
	try:
		return adapter.extract_reply(data)
	except ReplyShapeError as e:
		logger.error("LLM response did not contain expected data structure (%s): %s", e, data)  # noqa: TRY400
		return None


class LLMClient:
	"""Resolves settings for one command and sends prompts with them."""

	def __init__(
		self,
		config: AppConfig,
		command: str | None = None,
		env: Environment | None = None,
		timeout: float | None = None,
	) -> None:
		"""
		Initialize the LLM client.

		Args:
		    config: Application configuration
		    command: Command name selecting an ``llm.commands`` override
		    env: Environment to read credentials and proxies from
		    timeout: Optional request timeout in seconds

		"""
		self.config = config
		self.command = command
		self.env = env
		self.timeout = timeout

	@property
	def resolved(self) -> ResolvedLLMConfig:
		"""Settings resolved against the environment as it is right now."""
		return resolve_llm_config(self.config, self.command, self.env)

	def complete(self, prompt: str) -> str | None:
		"""Send a prompt and return the raw reply text, or None."""
		return call_llm(prompt, self.resolved, env=self.env, timeout=self.timeout)
