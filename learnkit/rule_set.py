"""Conversion of a trained decision tree into IF-THEN rules."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from learnkit.decision_tree import DecisionTree, Node


@dataclass(frozen=True)
class Rule:
    """A conjunction of feature == value conditions leading to a class."""

    conditions: dict[int, int] = field(default_factory=dict)
    class_label: int = -1

    def matches(self, sample: Sequence[int]) -> bool:
        """True if every condition holds for the sample."""
        return all(
            0 <= feature < len(sample) and sample[feature] == value
            for feature, value in self.conditions.items()
        )

    def __str__(self) -> str:
        clauses = " AND ".join(
            f"feature[{feature}] == {value}"
            for feature, value in sorted(self.conditions.items())
        )
        return f"IF {clauses} THEN class is {self.class_label}"


class RuleSet:
    """One rule per leaf of a decision tree, in depth-first order."""

    def __init__(self, tree: DecisionTree) -> None:
        self._rules: list[Rule] = []
        if tree.root is not None:
            self._collect(tree.root, {})

    def _collect(self, node: Node, conditions: dict[int, int]) -> None:
        if node.is_leaf:
            self._rules.append(Rule(dict(conditions), node.class_label))
            return
        for value, child in sorted(node.children.items()):
            self._collect(child, {**conditions, node.feature_index: value})

    def rules(self) -> list[str]:
        """The rules as human-readable strings."""
        return [str(rule) for rule in self._rules]

    def predict(self, sample: Sequence[int]) -> int:
        """Class of the first matching rule, or -1 if none matches."""
        return next(
            (rule.class_label for rule in self._rules if rule.matches(sample)), -1
        )