"""Scheduling – ordered rule registry."""
from __future__ import annotations

from collections.abc import Iterable, Iterator

from antiflood.config.settings import AntiFloodSettings
from antiflood.kernel.errors import InvalidArgumentError
from antiflood.scheduling.rules import Rule, default_rules


class RuleRegistry:
    """Append-only, ordered collection of rules.

    Order never changes the computed delay because the scheduler combines
    rule outputs by maximum.  There is deliberately no removal operation.
    """

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: list[Rule] = []
        for rule in rules:
            self.add(rule)

    @classmethod
    def with_defaults(cls, settings: AntiFloodSettings | None = None) -> "RuleRegistry":
        """Registry seeded with the three built-in rules."""
        return cls(default_rules(settings))

    def add(self, rule: Rule) -> None:
        if not callable(rule):
            raise InvalidArgumentError(
                f"rule must be callable, got {type(rule).__name__}", argument="rule"
            )
        self._rules.append(rule)

    def __iter__(self) -> Iterator[Rule]:
        return iter(tuple(self._rules))

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry(rules={[rule_name(r) for r in self._rules]!r})"


def rule_name(rule: Rule) -> str:
    return getattr(rule, "__name__", None) or repr(rule)


__all__ = ["RuleRegistry", "rule_name"]
