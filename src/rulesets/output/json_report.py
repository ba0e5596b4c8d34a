"""JSON reporter for CI pipelines and other tooling."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from rulesets.evaluation.models import Verdict


def to_dict(verdict: Verdict) -> Dict[str, Any]:
    """Convert a Verdict to a JSON-serialisable dict."""
    rules: List[Dict[str, Any]] = []
    for o in verdict.outcomes:
        rules.append({
            "rule": o.rule,
            "status": o.status,
            "satisfied": o.satisfied,
            "applicable": o.applicable,
            "forceable": o.forceable,
            **({"description": o.description} if o.description else {}),
        })

    return {
        "version": "1.0",
        "ruleset": verdict.ruleset,
        "strong": verdict.strong,
        "force": verdict.force,
        "passed": verdict.passed,
        "satisfied": verdict.satisfied,
        "applicable": verdict.applicable,
        "forceable": verdict.forceable,
        "total_rules": verdict.total_rules,
        "unsatisfied": len(verdict.unsatisfied_outcomes),
        "rules": rules,
        "duration_ms": verdict.duration_ms,
    }


def render(verdict: Verdict) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(verdict), indent=2)
