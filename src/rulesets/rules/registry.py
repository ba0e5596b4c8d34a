"""Rule registry — maps identifiers to rule and ruleset types."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Union

import yaml

from rulesets.log import get_logger

logger = get_logger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

RuleRef = Union[str, type]


class UnknownRuleError(LookupError):
    """Raised when an identifier has no registered rule or ruleset."""


class DeclarationError(Exception):
    """Raised when a YAML ruleset declaration is malformed."""


def identifier_for(name: str) -> str:
    """``HasItems`` -> ``has_items``; snake_case input is returned unchanged."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _check_type(cls: object) -> type:
    from rulesets.rules.models import Rule
    from rulesets.rules.ruleset import Ruleset

    if not isinstance(cls, type) or not issubclass(cls, (Rule, Ruleset)):
        raise TypeError(f"{cls!r} is not a Rule or Ruleset subclass")
    return cls


class RuleRegistry:
    """Central store of rule and ruleset types, keyed by identifier."""

    def __init__(self) -> None:
        self._types: Dict[str, type] = {}

    # ---- registration ----

    def register(
        self, cls: Optional[type] = None, *, name: Optional[str] = None
    ) -> Union[type, Callable[[type], type]]:
        """Register *cls* under *name* (default: snake_case class name).

        Works as a plain call, a bare decorator, or ``@register(name=...)``.
        """

        def decorator(target: type) -> type:
            _check_type(target)
            key = name or identifier_for(target.__name__)
            previous = self._types.get(key)
            if previous is not None and previous is not target:
                logger.warning(
                    "rule replaced",
                    identifier=key,
                    previous=previous.__name__,
                    current=target.__name__,
                )
            self._types[key] = target
            logger.debug("rule registered", identifier=key, type=target.__name__)
            return target

        if cls is None:
            return decorator
        return decorator(cls)

    # ---- queries ----

    @property
    def names(self) -> List[str]:
        return sorted(self._types)

    def get(self, name: str) -> Optional[type]:
        return self._types.get(name)

    def resolve(self, ref: RuleRef) -> type:
        """Return the type for *ref*; classes pass through after a type check."""
        if isinstance(ref, type):
            return _check_type(ref)
        found = self._types.get(ref) or self._types.get(identifier_for(ref))
        if found is None:
            raise UnknownRuleError(f"No rule or ruleset registered as {ref!r}")
        return found

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    # ---- YAML declarations ----

    def load_declarations(self, directory: Path) -> int:
        """Build and register rulesets from YAML files in *directory*."""
        count = 0
        if not directory.is_dir():
            return 0
        for path in sorted(directory.iterdir()):
            if path.suffix in (".yaml", ".yml"):
                count += self._load_yaml_declarations(path)
        logger.info("declarations loaded", directory=str(directory), count=count)
        return count

    def _load_yaml_declarations(self, path: Path) -> int:
        from rulesets.rules.ruleset import build_ruleset

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            raise DeclarationError(f"Failed to parse {path}: {exc}") from exc
        if data is None:
            return 0
        if not isinstance(data, list):
            data = [data]
        count = 0
        for entry in data:
            if not isinstance(entry, dict) or "name" not in entry or "rules" not in entry:
                raise DeclarationError(
                    f"{path}: each declaration needs 'name' and 'rules'"
                )
            if not isinstance(entry["name"], str) or not entry["name"]:
                raise DeclarationError(f"{path}: 'name' must be a non-empty string")
            description = entry.get("description") or ""
            if not isinstance(description, str):
                raise DeclarationError(
                    f"{path}: 'description' of {entry['name']} must be a string"
                )
            rule_names = entry["rules"] or []
            if not isinstance(rule_names, list):
                raise DeclarationError(f"{path}: 'rules' of {entry['name']} must be a list")
            ruleset = build_ruleset(
                entry["name"],
                [str(r) for r in rule_names],
                strong=bool(entry.get("strong", False)),
                description=description,
                registry=self,
            )
            self.register(ruleset, name=entry["name"])
            count += 1
        return count


default_registry = RuleRegistry()
register = default_registry.register
