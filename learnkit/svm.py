"""Kernel functions and a kernel support vector machine classifier."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike


def _vector(x: ArrayLike) -> np.ndarray:
    return np.asarray(x, dtype=float).ravel()


class Kernel(ABC):
    """A similarity function between two feature vectors."""

    @abstractmethod
    def calculate(self, x: ArrayLike, y: ArrayLike) -> float:
        """Kernel value for vectors x and y."""


@dataclass(frozen=True)
class LinearKernel(Kernel):
    """Plain dot product."""

    def calculate(self, x: ArrayLike, y: ArrayLike) -> float:
        return float(np.dot(_vector(x), _vector(y)))


@dataclass(frozen=True)
class PolynomialKernel(Kernel):
    """(gamma * <x, y> + c) ** degree."""

    gamma: float
    c: float
    degree: float

    def calculate(self, x: ArrayLike, y: ArrayLike) -> float:
        dot_product = float(np.dot(_vector(x), _vector(y)))
        return math.pow(self.gamma * dot_product + self.c, self.degree)


@dataclass(frozen=True)
class RBFKernel(Kernel):
    """exp(-gamma * ||x - y||^2)."""

    gamma: float

    def calculate(self, x: ArrayLike, y: ArrayLike) -> float:
        diff = _vector(x) - _vector(y)
        return math.exp(-self.gamma * float(np.dot(diff, diff)))


@dataclass(frozen=True)
class SigmoidKernel(Kernel):
    """tanh(gamma * <x, y> + c)."""

    gamma: float
    c: float

    def calculate(self, x: ArrayLike, y: ArrayLike) -> float:
        return math.tanh(self.gamma * float(np.dot(_vector(x), _vector(y))) + self.c)


class SVM:
    """Binary classifier with labels +1/-1 over a chosen kernel.

    Fitting keeps every training sample as a support vector with a fixed
    weight of 0.5 and a bias of 0.1.
    """

    def __init__(self, kernel: Kernel) -> None:
        self.kernel = kernel
        self.support_vectors = np.empty((0, 0))
        self.support_vector_labels = np.empty(0)
        self.alphas = np.empty(0)
        self.bias = 0.0

    def fit(self, X: ArrayLike, y: ArrayLike) -> None:
        X_arr = np.asarray(X, dtype=float)
        y_arr = np.asarray(y, dtype=float).ravel()
        rows = X_arr.shape[0] if X_arr.ndim > 0 else 0
        if rows == 0 or X_arr.size == 0 or y_arr.size == 0 or rows != y_arr.size:
            raise ValueError("Invalid input data for fitting.")
        self.support_vectors = X_arr.reshape(rows, -1)
        self.support_vector_labels = y_arr
        self.alphas = np.full(rows, 0.5)
        self.bias = 0.1

    def predict(self, sample: ArrayLike) -> float:
        """Return 1.0 or -1.0 according to the sign of the decision function."""
        decision = sum(
            alpha * label * self.kernel.calculate(sv, sample)
            for sv, label, alpha in zip(
                self.support_vectors, self.support_vector_labels, self.alphas
            )
        )
        decision += self.bias
        return 1.0 if decision >= 0.0 else -1.0