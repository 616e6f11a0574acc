"""Configuration discovery, merging and prompt template resolution."""

from gitai.config.config_loader import ConfigLoader, RawConfig, load_app_config
from gitai.config.defaults import DEFAULT_CONFIG, GLOBAL_CONFIG_DIR
from gitai.config.locator import SEARCH_PLACES, DiscoveryResult, discover_config, search_config
from gitai.config.merger import deep_merge, merge_config
from gitai.config.schema import AppConfig, CommitConfig, LLMConfig, PRConfig, ProviderConfig

__all__ = [
	"DEFAULT_CONFIG",
	"GLOBAL_CONFIG_DIR",
	"SEARCH_PLACES",
	"AppConfig",
	"CommitConfig",
	"ConfigLoader",
	"DiscoveryResult",
	"LLMConfig",
	"PRConfig",
	"ProviderConfig",
	"RawConfig",
	"deep_merge",
	"discover_config",
	"load_app_config",
	"merge_config",
	"search_config",
]
