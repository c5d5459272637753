"""Boosted tree regressor that currently predicts the training mean."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from learnkit.decision_tree import DecisionTree


@dataclass
class BoostTreeParameters:
    """Settings for a boosted tree ensemble."""

    num_estimators: int = 100


class BoostTree:
    """Ensemble whose prediction is its initial estimate, the mean target."""

    def __init__(self, params: BoostTreeParameters | None = None) -> None:
        self.params = params if params is not None else BoostTreeParameters()
        self.initial_prediction = 0.0
        self.estimators: list[DecisionTree] = []

    def fit(self, X: Sequence[Sequence[float]], y: Sequence[float]) -> None:
        """Set the initial prediction to the mean of y and reset the estimators."""
        if not X or not y or len(X) != len(y):
            raise ValueError(
                "Input data (X and y) must not be empty and must have the same number of samples."
            )
        self.initial_prediction = sum(float(v) for v in y) / len(y)
        self.estimators = [DecisionTree() for _ in range(self.params.num_estimators)]

    def predict(self, sample: Sequence[float]) -> float:
        """Prediction for one sample."""
        return self.initial_prediction

    def predict_batch(self, X: Sequence[Sequence[float]]) -> list[float]:
        """Predictions for each sample in X."""
        return [self.predict(sample) for sample in X]