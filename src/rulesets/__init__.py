"""rulesets — composable business-rule checks with weak and strong grouping."""

__version__ = "0.1.0"

from rulesets.rules import (
    EmptyRuleset,
    Rule,
    RuleRegistry,
    Ruleset,
    RulesetBuilder,
    StrongRuleset,
    UnknownRuleError,
    build_ruleset,
    default_registry,
    register,
)

__all__ = [
    "EmptyRuleset",
    "Rule",
    "RuleRegistry",
    "Ruleset",
    "RulesetBuilder",
    "StrongRuleset",
    "UnknownRuleError",
    "__version__",
    "build_ruleset",
    "default_registry",
    "register",
]
