"""
Credential and endpoint resolution for provider calls.

Resolution reads the environment at call time, so it must run again for every
call rather than being cached.

"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from gitai.config.defaults import DEFAULT_MODEL, DEFAULT_PROVIDER, DEFAULT_TEMPERATURE
from gitai.environment import get_env

if TYPE_CHECKING:
	from gitai.config.schema import AppConfig, ProviderConfig
	from gitai.environment import Environment

logger = logging.getLogger(__name__)

OLLAMA_PROVIDER = "ollama"
OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434"

# Public endpoints used when neither the config nor the environment names one
DEFAULT_BASE_URLS = {
	"openai": "https://api.openai.com/v1",
	"gemini": "https://generativelanguage.googleapis.com",
}
GENERIC_API_KEY_ENV = "GIT_AI_API_KEY"


class GitAICommand(str, Enum):
	"""Commands that talk to an LLM."""

	COMMIT = "commit"
	PR = "pr"


class ResolvedLLMConfig(BaseModel):
	"""Fully resolved settings for exactly one provider call."""

	model_config = ConfigDict(frozen=True)

	provider: str
	model: str
	api_key: str | None = None
	base_url: str | None = None
	temperature: float

	def __repr__(self) -> str:
		"""Hide the key when the config ends up in logs."""
		key = "***" if self.api_key else None
		return (
			f"ResolvedLLMConfig(provider={self.provider!r}, model={self.model!r}, api_key={key!r}, "
			f"base_url={self.base_url!r}, temperature={self.temperature!r})"
		)

	__str__ = __repr__


def guessed_api_key_env(provider: str) -> str:
	"""Conventional variable name for a provider key, e.g. ``OPENAI_API_KEY``."""
	return f"{provider.upper()}_API_KEY"


def select_provider_config(config: AppConfig, command: str | None = None) -> ProviderConfig:
	"""Use the command override when present, otherwise the default entry."""
	if command is not None:
		name = command.value if isinstance(command, GitAICommand) else command
		override = config.llm.commands.get(name)
		if override is not None:
			return override
	return config.llm.default


def resolve_api_key(base: ProviderConfig, provider: str, env: Environment | None = None) -> str | None:
	"""
	Resolve the API key, first match wins.

	1. a literal key in the config
	2. the variable named by ``apiKeyEnvVar``
	3. ``<PROVIDER>_API_KEY`` (not for ollama)
	4. ``GIT_AI_API_KEY`` (not for ollama)

	"""
	if base.api_key:
		return base.api_key

	from_named_var = get_env(base.api_key_env_var, env)
	if from_named_var:
		logger.debug("Setting apiKey from env var %s", base.api_key_env_var)
		return from_named_var

	if provider == OLLAMA_PROVIDER:
		return None

	guessed = guessed_api_key_env(provider)
	from_guess = get_env(guessed, env)
	if from_guess:
		logger.debug("Setting apiKey from guessed env var %s", guessed)
		return from_guess

	return get_env(GENERIC_API_KEY_ENV, env)


def resolve_base_url(base: ProviderConfig, provider: str, env: Environment | None = None) -> str | None:
	"""
	Resolve the base URL, first match wins.

	1. a literal URL in the config
	2. the variable named by ``baseUrlEnvVar``
	3. for ollama, ``ollamaBaseUrl`` or the local default; for openai and
	   gemini, their public endpoint

	"""
	base_url = base.base_url
	if not base_url:
		base_url = get_env(base.base_url_env_var, env)
		if base_url:
			logger.debug("Setting baseUrl from env var %s", base.base_url_env_var)

	if not base_url:
		if provider == OLLAMA_PROVIDER:
			base_url = base.ollama_base_url or OLLAMA_DEFAULT_BASE_URL
		else:
			base_url = DEFAULT_BASE_URLS.get(provider)
	return base_url


def resolve_llm_config(
	config: AppConfig,
	command: str | None = None,
	env: Environment | None = None,
) -> ResolvedLLMConfig:
	"""
	Resolve provider, model, key, URL and temperature for one call.

	A missing key is not an error here; the dispatcher reports it.

	Args:
	    config: Application configuration
	    command: Command name used to pick an override from ``llm.commands``
	    env: Environment to read from (defaults to the live process environment)

	Returns:
	    ResolvedLLMConfig for a single provider call

	"""
	base = select_provider_config(config, command)
	if not base.provider:
		logger.debug("No provider set for command %s, using %s", command, DEFAULT_PROVIDER)

	provider = base.provider or DEFAULT_PROVIDER
	model = base.model or DEFAULT_MODEL
	temperature = base.temperature if base.temperature is not None else DEFAULT_TEMPERATURE

	resolved = ResolvedLLMConfig(
		provider=provider,
		model=model,
		api_key=resolve_api_key(base, provider, env),
		base_url=resolve_base_url(base, provider, env),
		temperature=temperature,
	)
	logger.debug("Resolved LLM config for command %s: %r", command, resolved)
	return resolved
