"""Configuration loading, schema, and defaults."""

from rulesets.config.loader import ConfigError, load_config
from rulesets.config.schema import RulesetsConfig

__all__ = ["ConfigError", "RulesetsConfig", "load_config"]
