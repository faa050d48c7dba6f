"""Rule registry: relation type tag -> rule instance.

New relation types are added by registering a rule; neither the engine nor
the other rules change. The engine skips edges whose type has no rule.

Example:
    ```python
    from solvechain.propagation import PropagationRule, register_rule

    class PrecludesRule(PropagationRule):
        relation_type = "precludes"
        name = "preclusion"

        def infer(self, data):
            ...

    register_rule(PrecludesRule())
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from solvechain.exceptions import RuleRegistrationError

from .rules import BUILTIN_RULES, PropagationRule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Mapping from relation type tag to PropagationRule."""

    def __init__(self, rules: Iterable[PropagationRule] = ()) -> None:
        self._rules: dict[str, PropagationRule] = {}
        for rule in rules:
            self.register(rule)

    @classmethod
    def with_builtin_rules(cls) -> RuleRegistry:
        """Create a registry holding one instance of every built-in rule."""
        return cls(rule_class() for rule_class in BUILTIN_RULES)

    def register(self, rule: PropagationRule) -> None:
        """Register rule for its relation type, replacing any previous rule.

        Raises:
            RuleRegistrationError: If rule is not a PropagationRule or
                declares no relation type.
        """
        if not isinstance(rule, PropagationRule):
            raise RuleRegistrationError(None, f"Not a PropagationRule: {rule!r}")
        relation_type = getattr(rule, "relation_type", None)
        if not relation_type:
            raise RuleRegistrationError(
                None, f"{type(rule).__name__} does not declare a relation_type"
            )

        key = _key(relation_type)
        previous = self._rules.get(key)
        if previous is not None and previous is not rule:
            logger.debug("Replacing rule for %s: %r -> %r", key, previous, rule)
        self._rules[key] = rule

    def unregister(self, relation_type: str) -> PropagationRule | None:
        """Remove and return the rule for relation_type, if any."""
        return self._rules.pop(_key(relation_type), None)

    def get(self, relation_type: str) -> PropagationRule | None:
        """Rule for relation_type, or None."""
        return self._rules.get(_key(relation_type))

    def get_all(self) -> list[PropagationRule]:
        """All registered rules, in registration order."""
        return list(self._rules.values())

    def has(self, relation_type: str) -> bool:
        """Check whether a rule is registered for relation_type."""
        return _key(relation_type) in self._rules

    def __contains__(self, relation_type: object) -> bool:
        return isinstance(relation_type, str) and self.has(relation_type)

    def __len__(self) -> int:
        return len(self._rules)


def _key(relation_type: str) -> str:
    # RelationType members and their plain string values share one key
    return str(getattr(relation_type, "value", relation_type))


# Process-wide registry used by engines created without an explicit one
default_registry = RuleRegistry.with_builtin_rules()


def register_rule(rule: PropagationRule) -> None:
    """Register rule in the default registry."""
    default_registry.register(rule)


def get_rule(relation_type: str) -> PropagationRule | None:
    """Look up a rule in the default registry."""
    return default_registry.get(relation_type)


def get_all_rules() -> list[PropagationRule]:
    """All rules in the default registry."""
    return default_registry.get_all()


def has_rule(relation_type: str) -> bool:
    """Check the default registry for a rule."""
    return default_registry.has(relation_type)


__all__ = [
    "RuleRegistry",
    "default_registry",
    "get_all_rules",
    "get_rule",
    "has_rule",
    "register_rule",
]
