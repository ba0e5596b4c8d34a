"""Evaluation result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

STATUSES = ("satisfied", "not_applicable", "forced", "unsatisfied")


@dataclass
class RuleOutcome:
    """Facets of one leaf rule, as seen during an evaluation."""

    rule: str
    description: str
    satisfied: bool
    applicable: bool
    forceable: bool
    status: str  # satisfied | not_applicable | forced | unsatisfied


@dataclass
class Verdict:
    """Complete result of evaluating one ruleset against one subject."""

    ruleset: str
    satisfied: bool
    applicable: bool
    forceable: bool
    strong: bool = False
    force: bool = False
    fail_on_not_applicable: bool = False
    outcomes: List[RuleOutcome] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def total_rules(self) -> int:
        return len(self.outcomes)

    @property
    def passed(self) -> bool:
        if self.fail_on_not_applicable and not self.applicable:
            return False
        return self.satisfied

    @property
    def unsatisfied_outcomes(self) -> List[RuleOutcome]:
        return [o for o in self.outcomes if o.status == "unsatisfied"]

    @property
    def forced_outcomes(self) -> List[RuleOutcome]:
        return [o for o in self.outcomes if o.status == "forced"]

    @property
    def not_applicable_outcomes(self) -> List[RuleOutcome]:
        return [o for o in self.outcomes if o.status == "not_applicable"]
