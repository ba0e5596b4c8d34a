"""Rulesets — ordered groups of rules combined with weak or strong semantics.

A ``Ruleset`` skips children that are not applicable: they never block
satisfaction or forceability, and the group is only inapplicable when every
child is. A ``StrongRuleset`` treats any inapplicable child as a failure:
the whole group becomes inapplicable, and that child must be forced or
independently satisfied.
"""

from __future__ import annotations

from typing import (
    Any,
    Callable,
    ClassVar,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
    Union,
)

from rulesets.log import get_logger
from rulesets.rules.models import Rule, SubjectT, label_for
from rulesets.rules.registry import RuleRef, RuleRegistry, default_registry

logger = get_logger(__name__)


class EmptyRuleset(Exception):
    """Raised when a ruleset with no declared rules is instantiated."""


class Ruleset(Generic[SubjectT]):
    """An ordered group of rules and nested rulesets over one subject.

    Declare children with ``rule_names``, a tuple of registered identifiers
    (or the classes themselves)::

        class Checkout(Ruleset):
            rule_names = ("has_items", "payment_valid", "shipping_address_set")

    Identifiers are resolved through ``registry`` when an instance is built,
    so the rules may be registered after the ruleset is declared.
    """

    rule_names: ClassVar[Tuple[RuleRef, ...]] = ()
    registry: ClassVar[RuleRegistry] = default_registry
    description: ClassVar[str] = ""

    def __init__(self, subject: SubjectT) -> None:
        if not self.rule_names:
            raise EmptyRuleset(f"{type(self).__name__} declares no rules")
        self._subject = subject
        self._rules: Tuple[Node, ...] = tuple(
            rule_type(subject) for rule_type in self.rule_types()
        )
        logger.debug("ruleset built", ruleset=type(self).__name__, rules=len(self._rules))

    @classmethod
    def rule_types(cls) -> List[type]:
        """Resolve the declared identifiers to types, in declaration order."""
        return [cls.registry.resolve(ref) for ref in cls.rule_names]

    @classmethod
    def label(cls) -> str:
        return label_for(cls)

    @property
    def subject(self) -> SubjectT:
        return self._subject

    @property
    def rules(self) -> Tuple[Node, ...]:
        return self._rules

    # ---- combinators ----

    def satisfied(self, *, force: bool = False) -> bool:
        return all(
            rule.satisfied()
            or rule.not_applicable()
            or (force and rule.forceable())
            for rule in self._rules
        )

    def not_satisfied(self, *, force: bool = False) -> bool:
        return not self.satisfied(force=force)

    def not_applicable(self) -> bool:
        return all(rule.not_applicable() for rule in self._rules)

    def applicable(self) -> bool:
        return not self.not_applicable()

    def forceable(self) -> bool:
        return all(
            rule.forceable() or rule.not_applicable() or rule.satisfied()
            for rule in self._rules
        )

    # ---- flattening traversal ----

    def __iter__(self) -> Iterator[Rule[SubjectT]]:
        for node in self._rules:
            if isinstance(node, Ruleset):
                yield from node
            else:
                yield node

    def each(
        self, visitor: Optional[Callable[[Rule[SubjectT]], Any]] = None
    ) -> Optional[Iterator[Rule[SubjectT]]]:
        """Leaf rules, depth-first in declaration order.

        Without *visitor*, returns a fresh lazy iterator. With one, calls it
        for every leaf and returns ``None``.
        """
        if visitor is None:
            return iter(self)
        for rule in self:
            visitor(rule)
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} rules={len(self._rules)}>"


class StrongRuleset(Ruleset[SubjectT]):
    """A ruleset in which any inapplicable child poisons the whole group."""

    def satisfied(self, *, force: bool = False) -> bool:
        return all(
            (rule.applicable() and rule.satisfied())
            or (force and rule.forceable())
            for rule in self._rules
        )

    def not_applicable(self) -> bool:
        return any(rule.not_applicable() for rule in self._rules)

    def forceable(self) -> bool:
        return all(
            (rule.applicable() and rule.forceable()) or rule.satisfied()
            for rule in self._rules
        )


Node = Union[Rule[Any], Ruleset[Any]]


def _class_name(name: str) -> str:
    parts = [p for p in name.replace("-", "_").split("_") if p]
    return "".join(p[:1].upper() + p[1:] for p in parts) or "Ruleset"


class RulesetBuilder:
    """Assemble a ruleset declaration once, then freeze it into a type."""

    def __init__(
        self,
        name: str,
        *,
        strong: bool = False,
        description: str = "",
        registry: Optional[RuleRegistry] = None,
    ) -> None:
        self.name = name
        self.strong = strong
        self.description = description
        self.registry = registry
        self._rule_names: List[RuleRef] = []

    def add_rule(self, rule_name: RuleRef) -> RulesetBuilder:
        self._rule_names.append(rule_name)
        return self

    def build(self) -> Type[Ruleset[Any]]:
        base: Type[Ruleset[Any]] = StrongRuleset if self.strong else Ruleset
        attrs = {
            "rule_names": tuple(self._rule_names),
            "description": self.description,
            "__module__": __name__,
        }
        if self.registry is not None:
            attrs["registry"] = self.registry
        return type(_class_name(self.name), (base,), attrs)


def build_ruleset(
    name: str,
    rule_names: Iterable[RuleRef],
    *,
    strong: bool = False,
    description: str = "",
    registry: Optional[RuleRegistry] = None,
) -> Type[Ruleset[Any]]:
    """One-call form of :class:`RulesetBuilder`."""
    builder = RulesetBuilder(
        name, strong=strong, description=description, registry=registry
    )
    for rule_name in rule_names:
        builder.add_rule(rule_name)
    return builder.build()
