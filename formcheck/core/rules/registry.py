"""
Rule registry: named, pluggable predicates owned by one form.
"""

from typing import Any, Iterator, Mapping

from formcheck.core.models import NEUTRAL_RULE, Rule
from formcheck.observability.logger import get_logger

from .default_rules import DEFAULT_RULES

logger = get_logger(__name__)


class RuleRegistry:
    """
    Maps rule names to Rules.

    Registration is last-write-wins so configuration can replace the
    default rules. Resolving an unknown name yields a rule that always
    passes, so a misspelt rule name never fails a field.
    """

    def __init__(self, rules: Mapping[str, Rule] | None = None, include_defaults: bool = True):
        """
        Initialize the registry.

        Args:
            rules: Extra rules registered after the defaults
            include_defaults: Install the "required" and "email" rules
        """
        self._rules: dict[str, Rule] = {}
        if include_defaults:
            self.add_rules(DEFAULT_RULES)
        if rules:
            self.add_rules(rules)

    def register(self, name: str, rule: Rule) -> None:
        """Insert or overwrite the rule stored under name."""
        if name in self._rules:
            logger.debug(f"Overriding rule '{name}'")
        self._rules[name] = rule

    def add_rules(self, rules: Mapping[str, Rule]) -> None:
        """Merge a mapping of rules; later registrations win."""
        for name, rule in rules.items():
            self.register(name, rule)

    def resolve(self, name: str) -> Rule:
        """Return the rule registered under name, or the neutral rule."""
        rule = self._rules.get(name)
        if rule is None:
            logger.debug(f"Unknown rule '{name}' resolves to a passing rule", extra={"rule_name": name})
            return NEUTRAL_RULE
        return rule

    def names(self) -> list[str]:
        return list(self._rules)

    def summary(self) -> dict[str, Any]:
        """
        Get summary of registered rules.

        Returns:
            Dictionary with the rule count and each rule's default message
        """
        return {
            "total_rules": len(self._rules),
            "messages": {name: rule.message for name, rule in self._rules.items()},
        }

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)
