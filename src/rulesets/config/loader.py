"""Load and merge configuration from .rulesets.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from rulesets.config.schema import (
    LOG_LEVELS,
    OUTPUT_FORMATS,
    EvaluationConfig,
    LoggingConfig,
    OutputConfig,
    RulesConfig,
    RulesetsConfig,
)

CONFIG_FILENAME = ".rulesets.toml"

_TRUTHY = ("1", "true", "yes")
_FALSY = ("0", "false", "no")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _merge_env_overrides(cfg: RulesetsConfig) -> None:
    """Apply RULESETS_* environment variable overrides."""
    if val := os.environ.get("RULESETS_FORCE"):
        if val.lower() in _TRUTHY:
            cfg.evaluation.force = True
        elif val.lower() in _FALSY:
            cfg.evaluation.force = False
    if val := os.environ.get("RULESETS_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("RULESETS_MODULES"):
        cfg.rules.modules.extend(m.strip() for m in val.split(",") if m.strip())
    if val := os.environ.get("RULESETS_LOG_LEVEL"):
        if val.lower() in LOG_LEVELS:
            cfg.logging.level = val.lower()  # type: ignore[assignment]


def load_config(
    root: Path,
    config_override: Optional[str] = None,
) -> RulesetsConfig:
    """Load, validate, and return a RulesetsConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = RulesetsConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = RulesetsConfig(
                version=str(raw.get("version", "1.0")),
                evaluation=_build_section(raw, EvaluationConfig, "evaluation"),
                output=_build_section(raw, OutputConfig, "output"),
                rules=_build_section(raw, RulesConfig, "rules"),
                logging=_build_section(raw, LoggingConfig, "logging"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc

    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(f"Unknown output format: {cfg.output.format}")
    if cfg.logging.level not in LOG_LEVELS:
        raise ConfigError(f"Unknown log level: {cfg.logging.level}")

    _merge_env_overrides(cfg)
    return cfg
