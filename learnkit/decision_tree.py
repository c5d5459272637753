"""Categorical decision tree classifier with Gini or entropy splits."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum


class SplitCriterion(Enum):
    """Impurity measure used to choose the split feature."""

    GINI = "gini"
    ENTROPY = "entropy"


@dataclass
class Node:
    """A tree node: a leaf with a class label, or a split on one feature."""

    is_leaf: bool = False
    class_label: int = -1
    feature_index: int = -1
    children: dict[int, Node] = field(default_factory=dict)


def _class_probabilities(y: Sequence[int]) -> list[float]:
    total = len(y)
    return [count / total for _, count in sorted(Counter(y).items())]


def calculate_gini_impurity(y: Sequence[int]) -> float:
    """Gini impurity of a list of class labels; 0.0 for an empty list."""
    if not y:
        return 0.0
    return 1.0 - sum(p * p for p in _class_probabilities(y))


def calculate_entropy(y: Sequence[int]) -> float:
    """Shannon entropy in bits of a list of class labels; 0.0 for an empty list."""
    if not y:
        return 0.0
    return -sum(p * math.log2(p) for p in _class_probabilities(y) if p > 0)


def _most_common_label(y: Sequence[int]) -> int:
    """Most frequent label, the smallest one on ties."""
    counts = Counter(y)
    return min(counts, key=lambda label: (-counts[label], label))


class DecisionTree:
    """A multiway decision tree over integer-valued features."""

    def __init__(self, criterion: SplitCriterion = SplitCriterion.GINI) -> None:
        self.criterion = criterion
        self.root: Node | None = None
        self.max_depth = 0
        self._impurity: Callable[[Sequence[int]], float] = (
            calculate_gini_impurity
            if criterion is SplitCriterion.GINI
            else calculate_entropy
        )

    def fit(self, X: Sequence[Sequence[int]], y: Sequence[int], max_depth: int) -> None:
        """Build the tree from feature rows X and class labels y."""
        rows = [list(row) for row in X]
        labels = list(y)
        if not rows or not labels or len(rows) != len(labels):
            raise ValueError(
                "Input data (X and y) must not be empty and must have the same number of samples."
            )
        self.max_depth = max_depth
        self.root = self._build(rows, labels, 0)

    def _build(self, X: list[list[int]], y: list[int], depth: int) -> Node:
        if all(label == y[0] for label in y):
            return Node(is_leaf=True, class_label=y[0])
        if depth >= self.max_depth:
            return Node(is_leaf=True, class_label=_most_common_label(y))

        feature = self._best_split(X, y)
        if feature == -1:
            return Node(is_leaf=True, class_label=_most_common_label(y))

        groups: dict[int, tuple[list[list[int]], list[int]]] = {}
        for row, label in zip(X, y):
            child_X, child_y = groups.setdefault(row[feature], ([], []))
            child_X.append(row)
            child_y.append(label)

        node = Node(feature_index=feature)
        for value in sorted(groups):
            child_X, child_y = groups[value]
            node.children[value] = self._build(child_X, child_y, depth + 1)
        return node

    def _best_split(self, X: list[list[int]], y: list[int]) -> int:
        current = self._impurity(y)
        best_gain = -1.0
        best_feature = -1
        num_features = len(X[0]) if X else 0
        for feature in range(num_features):
            child_ys: dict[int, list[int]] = {}
            for row, label in zip(X, y):
                child_ys.setdefault(row[feature], []).append(label)
            weighted = sum(
                len(labels) / len(y) * self._impurity(labels)
                for labels in child_ys.values()
            )
            gain = current - weighted
            if gain > best_gain:
                best_gain = gain
                best_feature = feature
        return best_feature

    def predict(self, sample: Sequence[int]) -> int:
        """Class label for one sample, or -1 if the tree is not trained.

        A feature value not seen in training yields the label of the child
        with the smallest feature value.
        """
        node = self.root
        if node is None:
            return -1
        while not node.is_leaf:
            value = sample[node.feature_index]
            child = node.children.get(value)
            if child is None:
                return node.children[min(node.children)].class_label
            node = child
        return node.class_label