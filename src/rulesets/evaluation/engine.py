"""Evaluation engine — runs a built ruleset and collects per-rule outcomes.

Rules are never caught here: a missing ``satisfied`` override or any error
raised by a rule propagates to the caller unchanged.
"""

from __future__ import annotations

import time
from typing import Any

from rulesets.evaluation.models import RuleOutcome, Verdict
from rulesets.log import get_logger
from rulesets.rules.models import Rule
from rulesets.rules.ruleset import Ruleset, StrongRuleset

logger = get_logger(__name__)


def _outcome(rule: Rule[Any], force: bool) -> RuleOutcome:
    satisfied = rule.satisfied()
    applicable = rule.applicable()
    forceable = rule.forceable()

    if not applicable:
        status = "not_applicable"
    elif satisfied:
        status = "satisfied"
    elif force and forceable:
        status = "forced"
    else:
        status = "unsatisfied"

    return RuleOutcome(
        rule=type(rule).__name__,
        description=rule.label(),
        satisfied=satisfied,
        applicable=applicable,
        forceable=forceable,
        status=status,
    )


def evaluate(
    ruleset: Ruleset[Any],
    *,
    force: bool = False,
    fail_on_not_applicable: bool = False,
) -> Verdict:
    """Evaluate *ruleset* and return a Verdict."""
    start = time.perf_counter()

    satisfied = ruleset.satisfied(force=force)
    applicable = ruleset.applicable()
    forceable = ruleset.forceable()
    outcomes = [_outcome(rule, force) for rule in ruleset]

    elapsed = (time.perf_counter() - start) * 1000

    verdict = Verdict(
        ruleset=type(ruleset).__name__,
        satisfied=satisfied,
        applicable=applicable,
        forceable=forceable,
        strong=isinstance(ruleset, StrongRuleset),
        force=force,
        fail_on_not_applicable=fail_on_not_applicable,
        outcomes=outcomes,
        duration_ms=round(elapsed, 2),
    )
    logger.info(
        "ruleset evaluated",
        ruleset=verdict.ruleset,
        satisfied=satisfied,
        applicable=applicable,
        force=force,
        rules=verdict.total_rules,
    )
    return verdict
