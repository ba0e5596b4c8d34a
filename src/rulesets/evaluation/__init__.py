"""Evaluation — verdicts and per-rule outcomes."""

from rulesets.evaluation.engine import evaluate
from rulesets.evaluation.models import RuleOutcome, Verdict

__all__ = ["RuleOutcome", "Verdict", "evaluate"]
