"""Pydantic schema for the resolved application configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderConfig(BaseModel):
	"""Provider settings for the default entry or a single command."""

	model_config = ConfigDict(populate_by_name=True, extra="allow")

	provider: str | None = None
	model: str | None = None
	# Hard-coding a key in the config file works but is not recommended
	api_key: str | None = Field(default=None, alias="apiKey")
	api_key_env_var: str | None = Field(default=None, alias="apiKeyEnvVar")
	base_url: str | None = Field(default=None, alias="baseUrl")
	base_url_env_var: str | None = Field(default=None, alias="baseUrlEnvVar")
	ollama_base_url: str | None = Field(default=None, alias="ollamaBaseUrl")
	temperature: float | None = None


class LLMConfig(BaseModel):
	"""Default provider settings plus per-command overrides."""

	model_config = ConfigDict(extra="allow")

	default: ProviderConfig = Field(default_factory=ProviderConfig)
	commands: dict[str, ProviderConfig] = Field(default_factory=dict)

	@field_validator("default", "commands", mode="before")
	@classmethod
	def _none_as_empty(cls, value: Any) -> Any:  # noqa: ANN401
		return {} if value is None else value


class CommitConfig(BaseModel):
	"""Settings for the commit command."""

	model_config = ConfigDict(populate_by_name=True, extra="allow")

	suggestions: int = 3
	prompt_template: str | None = None
	# Filled in by the prompt template loader
	system_prompt: str | None = Field(default=None, alias="systemPrompt")


class PRConfig(BaseModel):
	"""Settings for the pr command."""

	model_config = ConfigDict(populate_by_name=True, extra="allow")

	base_branch: str | None = "main"
	include_file_tree: bool = True
	include_unstaged: bool = False
	max_lines_per_file: int | None = 300
	warn_on_conflict: bool = True
	prompt_template: str | None = None
	# Filled in by the prompt template loader
	system_prompt: str | None = Field(default=None, alias="systemPrompt")


class AppConfig(BaseModel):
	"""The single resolved configuration object for a process run."""

	model_config = ConfigDict(extra="allow")

	llm: LLMConfig = Field(default_factory=LLMConfig)
	commit: CommitConfig = Field(default_factory=CommitConfig)
	pr: PRConfig = Field(default_factory=PRConfig)

	@field_validator("llm", "commit", "pr", mode="before")
	@classmethod
	def _none_as_empty(cls, value: Any) -> Any:  # noqa: ANN401
		return {} if value is None else value
