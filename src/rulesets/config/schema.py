"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

OutputFormat = Literal["terminal", "json"]
LogLevel = Literal["debug", "info", "warning", "error"]

OUTPUT_FORMATS = ("terminal", "json")
LOG_LEVELS = ("debug", "info", "warning", "error")
LOG_FORMATS = ("console", "json")


@dataclass
class EvaluationConfig:
    force: bool = False  # count unsatisfied-but-forceable rules as passed
    fail_on_not_applicable: bool = False


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class RulesConfig:
    modules: List[str] = field(default_factory=list)  # imported for registration
    declarations: str = ".rulesets"  # YAML ruleset declarations


@dataclass
class LoggingConfig:
    level: LogLevel = "warning"
    format: Literal["console", "json"] = "console"


@dataclass
class RulesetsConfig:
    version: str = "1.0"
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    rules: RulesConfig = field(default_factory=RulesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
