"""Abstract interfaces shared by the probability distributions."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


class Distribution(ABC):
    """A univariate distribution that can also serve as a GLM response family."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)

    @abstractmethod
    def pdf(self, x: float) -> float:
        """Density or mass at x."""

    @abstractmethod
    def log_pdf(self, x: float) -> float:
        """Natural log of the density or mass at x."""

    @abstractmethod
    def cdf(self, x: float) -> float:
        """Cumulative probability up to and including x."""

    @abstractmethod
    def log_cdf(self, x: float) -> float:
        """Natural log of the cumulative probability at x."""

    @abstractmethod
    def sample(self) -> float:
        """Draw one random value."""

    @abstractmethod
    def link_name(self) -> str:
        """Name of the canonical link function."""

    @abstractmethod
    def link_function(self, mu: float) -> float:
        """Map a mean to the linear predictor."""

    @abstractmethod
    def mean_function(self, eta: float) -> float:
        """Map a linear predictor back to the mean."""


class DiscreteDistribution(Distribution):
    """A distribution over integers; sample() returns the draw as a float."""

    def sample(self) -> float:
        return float(self.sample_discrete())

    @abstractmethod
    def sample_discrete(self) -> int:
        """Draw one random integer."""