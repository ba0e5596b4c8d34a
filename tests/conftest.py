"""Shared test fixtures — registries, canned rules, sample subjects."""

from __future__ import annotations

import sys
import textwrap
from pathlib import Path
from types import SimpleNamespace
from typing import Callable

import pytest

from rulesets.log import reset_logging
from rulesets.rules.models import Rule
from rulesets.rules.registry import RuleRegistry, default_registry


@pytest.fixture(autouse=True)
def _isolate_default_registry():
    """Undo any registrations a test makes on the shared registry."""
    saved = dict(default_registry._types)
    yield
    default_registry._types.clear()
    default_registry._types.update(saved)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture
def registry() -> RuleRegistry:
    return RuleRegistry()


@pytest.fixture
def make_rule(registry: RuleRegistry) -> Callable[..., type]:
    """Register a canned rule with fixed facets in the ``registry`` fixture."""

    def factory(
        name: str,
        *,
        applicable: bool = True,
        satisfied: bool = True,
        forceable: bool = True,
    ) -> type:
        class_name = "".join(part.capitalize() for part in name.split("_"))
        cls = type(
            class_name,
            (Rule,),
            {
                "satisfied": lambda self: satisfied,
                "not_applicable": lambda self: not applicable,
                "forceable": lambda self: forceable,
            },
        )
        registry.register(cls, name=name)
        return cls

    return factory


@pytest.fixture
def cart() -> SimpleNamespace:
    """A cart with items and a valid payment but no shipping address."""
    return SimpleNamespace(
        items=["book", "lamp"],
        payment_valid=True,
        shipping_address=None,
    )


@pytest.fixture
def rules_module(tmp_path: Path, monkeypatch) -> str:
    """Write an importable module of checkout rules; return its name."""
    name = f"checkout_rules_{abs(hash(tmp_path)) % 10**8}"
    (tmp_path / f"{name}.py").write_text(textwrap.dedent("""\
        from rulesets import Rule, Ruleset, StrongRuleset, register


        @register
        class HasItems(Rule):
            \"\"\"Cart contains at least one item.\"\"\"

            def satisfied(self):
                return bool(self.subject.get("items"))


        @register
        class PaymentValid(Rule):
            def satisfied(self):
                return self.subject.get("payment_valid", False)


        @register
        class ShippingAddressSet(Rule):
            def satisfied(self):
                return bool(self.subject.get("shipping_address"))

            def not_applicable(self):
                return self.subject.get("digital", False)


        @register
        class UnfinishedRule(Rule):
            pass


        @register
        class Checkout(Ruleset):
            \"\"\"Cart is ready for checkout.\"\"\"

            rule_names = ("has_items", "payment_valid", "shipping_address_set")


        @register
        class StrictCheckout(StrongRuleset):
            rule_names = ("has_items", "payment_valid", "shipping_address_set")


        @register
        class Broken(Ruleset):
            rule_names = ("has_items", "unfinished_rule")


        @register
        class Empty(Ruleset):
            pass
    """))
    monkeypatch.syspath_prepend(str(tmp_path))
    yield name
    sys.modules.pop(name, None)
