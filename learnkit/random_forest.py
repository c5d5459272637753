"""Random forest of decision trees trained on bootstrap samples."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

import numpy as np

from learnkit.decision_tree import DecisionTree


class RandomForest:
    """Majority-vote ensemble of decision trees."""

    def __init__(self, num_trees: int, max_depth: int, seed: int | None = None) -> None:
        self.num_trees = num_trees
        self.max_depth = max_depth
        self.trees: list[DecisionTree] = []
        self._rng = np.random.default_rng(seed)

    def _bootstrap(
        self, X: list[list[int]], y: list[int]
    ) -> tuple[list[list[int]], list[int]]:
        indices = self._rng.integers(0, len(X), size=len(X))
        return [X[i] for i in indices], [y[i] for i in indices]

    def fit(self, X: Sequence[Sequence[int]], y: Sequence[int]) -> None:
        """Train num_trees new trees, each on its own bootstrap sample."""
        rows = [list(row) for row in X]
        labels = list(y)
        if not rows or not labels or len(rows) != len(labels):
            raise ValueError("Invalid training data.")
        for _ in range(self.num_trees):
            tree = DecisionTree()
            sample_X, sample_y = self._bootstrap(rows, labels)
            tree.fit(sample_X, sample_y, self.max_depth)
            self.trees.append(tree)

    def predict(self, sample: Sequence[int]) -> int:
        """Majority vote of the trees (smallest label on ties), or -1 with no trees."""
        if not self.trees:
            return -1
        votes = Counter(tree.predict(sample) for tree in self.trees)
        return min(votes, key=lambda label: (-votes[label], label))