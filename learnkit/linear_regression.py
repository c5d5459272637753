"""Generalized linear model base and ordinary linear regression."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto

import numpy as np


class FitType(Enum):
    """How a linear regression model is trained."""

    GRADIENT_DESCENT = auto()
    CLOSED_FORM = auto()


@dataclass(frozen=True)
class LinearRegressionFitMethod:
    """Training settings for linear regression."""

    num_iterations: int = 1000
    learning_rate: float = 0.01
    fit_type: FitType = FitType.GRADIENT_DESCENT


class GLM(ABC):
    """A model predicting through a link of weights . features + bias."""

    def __init__(self, fit_method: LinearRegressionFitMethod) -> None:
        self.fit_method = fit_method
        self.weights: list[float] = []
        self.bias = 0.0

    def initialize_parameters(self, num_features: int) -> None:
        """Reset weights to zeros of the given length and the bias to zero."""
        self.weights = [0.0] * num_features
        self.bias = 0.0

    @abstractmethod
    def fit(self, X: Sequence[Sequence[float]], y: Sequence[float]) -> None:
        """Train the model."""

    @abstractmethod
    def predict(self, sample: Sequence[float]) -> float:
        """Predict the response for one sample."""


def _validate(
    X: Sequence[Sequence[float]], y: Sequence[float]
) -> tuple[list[tuple[float, ...]], list[float]]:
    rows = [tuple(float(v) for v in row) for row in X]
    targets = [float(v) for v in y]
    if not rows or not targets or len(rows) != len(targets):
        raise ValueError("Input data is invalid or has a size mismatch.")
    if not rows[0]:
        raise ValueError("Input feature vectors cannot be empty.")
    if any(len(row) != len(rows[0]) for row in rows):
        raise ValueError("All feature vectors must have the same length.")
    return rows, targets


class LinearRegression(GLM):
    """Linear regression with the identity link and squared-error loss."""

    def __init__(
        self, fit_method: LinearRegressionFitMethod, seed: int | None = None
    ) -> None:
        super().__init__(fit_method)
        self._rng = np.random.default_rng(seed)

    def link_function(self, linear_combination: float) -> float:
        """Identity link: the linear combination as a float."""
        return float(linear_combination)

    def inverse_link_function(self, predicted_value: float) -> float:
        """Inverse of the identity link: the prediction as a float."""
        return float(predicted_value)

    def cost_function_derivative(self, predicted_y: float, actual_y: float) -> float:
        """Derivative of the squared error with respect to the prediction."""
        return predicted_y - actual_y

    def fit_closed_form(self, X: Sequence[Sequence[float]], y: Sequence[float]) -> None:
        """Solve the normal equation (X^T X)^-1 X^T y with a bias column."""
        rows, targets = _validate(X, y)
        features = np.asarray(rows)
        design = np.column_stack([features, np.ones(len(rows))])
        xtx = design.T @ design
        xty = design.T @ np.asarray(targets)
        if np.linalg.det(xtx) == 0:
            raise np.linalg.LinAlgError(
                "Matrix X^T * X is non-invertible. Cannot use closed-form solution."
            )
        coefficients = np.linalg.inv(xtx) @ xty
        self.weights = [float(c) for c in coefficients[:-1]]
        self.bias = float(coefficients[-1])

    def fit_sgd(
        self,
        X: Sequence[Sequence[float]],
        y: Sequence[float],
        fit_method: LinearRegressionFitMethod,
    ) -> None:
        """Stochastic gradient descent, one shuffled pass per iteration."""
        rows, targets = _validate(X, y)
        self.initialize_parameters(len(rows[0]))
        rate = fit_method.learning_rate
        for _ in range(fit_method.num_iterations):
            for idx in self._rng.permutation(len(rows)):
                row = rows[idx]
                combination = self.bias + sum(v * w for v, w in zip(row, self.weights))
                error = self.cost_function_derivative(
                    self.link_function(combination), targets[idx]
                )
                self.bias -= rate * error
                self.weights = [w - rate * error * v for w, v in zip(self.weights, row)]

    def fit(self, X: Sequence[Sequence[float]], y: Sequence[float]) -> None:
        fit_type = self.fit_method.fit_type
        if fit_type is FitType.GRADIENT_DESCENT:
            self.fit_sgd(X, y, self.fit_method)
        elif fit_type is FitType.CLOSED_FORM:
            self.fit_closed_form(X, y)
        else:
            raise ValueError("Invalid fitting method specified.")

    def predict(self, sample: Sequence[float]) -> float:
        values = [float(v) for v in sample]
        if len(values) != len(self.weights):
            raise ValueError("Sample feature size does not match model's feature size.")
        combination = self.bias + sum(v * w for v, w in zip(values, self.weights))
        return self.link_function(combination)

    def coefficients(self) -> tuple[list[float], float]:
        """Learned weights and bias."""
        return list(self.weights), self.bias