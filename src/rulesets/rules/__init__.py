"""Rule engine — rules, rulesets, registry."""

from rulesets.rules.models import Rule
from rulesets.rules.registry import (
    DeclarationError,
    RuleRegistry,
    UnknownRuleError,
    default_registry,
    register,
)
from rulesets.rules.ruleset import (
    EmptyRuleset,
    Ruleset,
    RulesetBuilder,
    StrongRuleset,
    build_ruleset,
)

__all__ = [
    "DeclarationError",
    "EmptyRuleset",
    "Rule",
    "RuleRegistry",
    "Ruleset",
    "RulesetBuilder",
    "StrongRuleset",
    "UnknownRuleError",
    "build_ruleset",
    "default_registry",
    "register",
]
