"""Continuous probability distributions usable as GLM response families."""

from __future__ import annotations

import math

import numpy as np
from scipy.special import gammainc, log_ndtr

from learnkit.distribution import Distribution

_NEG_INF = -math.inf


def _log(x: float) -> float:
    return math.log(x) if x > 0.0 else _NEG_INF


class ExponentialDistribution(Distribution):
    """Waiting time between events occurring at the given rate."""

    def __init__(self, rate: float, seed: int | None = None) -> None:
        if rate <= 0:
            raise ValueError("Rate must be positive.")
        super().__init__(seed)
        self.rate = float(rate)

    def pdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return self.rate * math.exp(-self.rate * x)

    def log_pdf(self, x: float) -> float:
        if x < 0:
            return _NEG_INF
        return math.log(self.rate) - self.rate * x

    def cdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return 1.0 - math.exp(-self.rate * x)

    def log_cdf(self, x: float) -> float:
        if x < 0.0:
            return _NEG_INF
        exp_neg = math.exp(-self.rate * x)
        if exp_neg >= 1.0:
            return _NEG_INF
        return math.log1p(-exp_neg)

    def sample(self) -> float:
        return float(self._rng.exponential(1.0 / self.rate))

    def link_name(self) -> str:
        return "log"

    def link_function(self, mu: float) -> float:
        if mu <= 0:
            raise ValueError("Mean must be positive for log link.")
        return math.log(mu)

    def mean_function(self, eta: float) -> float:
        return math.exp(eta)


class GammaDistribution(Distribution):
    """Gamma distribution with a shape and a rate (inverse scale)."""

    def __init__(self, shape: float, rate: float, seed: int | None = None) -> None:
        if shape <= 0 or rate <= 0:
            raise ValueError("Shape and rate must be positive.")
        super().__init__(seed)
        self.shape = float(shape)
        self.rate = float(rate)

    def log_pdf(self, x: float) -> float:
        if x < 0:
            return _NEG_INF
        if x == 0:
            if self.shape == 1.0:
                return math.log(self.rate)
            return math.inf if self.shape < 1.0 else _NEG_INF
        return (
            self.shape * math.log(self.rate)
            - math.lgamma(self.shape)
            + (self.shape - 1.0) * math.log(x)
            - self.rate * x
        )

    def pdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return math.exp(self.log_pdf(x)) if self.log_pdf(x) != math.inf else math.inf

    def cdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return float(gammainc(self.shape, self.rate * x))

    def log_cdf(self, x: float) -> float:
        return _log(self.cdf(x))

    def sample(self) -> float:
        return float(self._rng.gamma(self.shape, 1.0 / self.rate))

    def link_name(self) -> str:
        return "inverse"

    def link_function(self, mu: float) -> float:
        if mu == 0:
            raise ValueError("Mean cannot be zero for inverse link.")
        return 1.0 / mu

    def mean_function(self, eta: float) -> float:
        if eta == 0:
            raise ValueError("Linear predictor cannot be zero for inverse link.")
        return 1.0 / eta


class InverseGaussianDistribution(Distribution):
    """Inverse Gaussian (Wald) distribution with a mean and a shape."""

    def __init__(self, mean: float, shape: float, seed: int | None = None) -> None:
        if mean <= 0 or shape <= 0:
            raise ValueError("Mean and shape must be positive.")
        super().__init__(seed)
        self.mean = float(mean)
        self.shape = float(shape)

    def _exponent(self, x: float) -> float:
        return (self.shape * (x - self.mean) ** 2) / (2.0 * self.mean ** 2 * x)

    def pdf(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return math.sqrt(self.shape / (2.0 * math.pi * x ** 3)) * math.exp(-self._exponent(x))

    def log_pdf(self, x: float) -> float:
        if x <= 0:
            return _NEG_INF
        return (
            0.5 * (math.log(self.shape) - math.log(2.0 * math.pi) - 3.0 * math.log(x))
            - self._exponent(x)
        )

    def cdf(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return min(1.0, math.exp(self.log_cdf(x)))

    def log_cdf(self, x: float) -> float:
        if x <= 0.0:
            return _NEG_INF
        mu, lam = self.mean, self.shape
        root = math.sqrt(lam / x)
        log_a = float(log_ndtr(root * (x / mu - 1.0)))
        log_b = 2.0 * lam / mu + float(log_ndtr(-root * (x / mu + 1.0)))
        return float(np.logaddexp(log_a, log_b))

    def sample(self) -> float:
        mu, lam = self.mean, self.shape
        v = float(self._rng.standard_normal())
        y = v * v
        x1 = (
            mu
            + (mu * mu * y) / (2.0 * lam)
            - (mu / (2.0 * lam)) * math.sqrt(4.0 * mu * lam * y + (mu * y) ** 2)
        )
        u = float(self._rng.random())
        if u <= mu / (mu + x1):
            return x1
        return mu * mu / x1

    def link_name(self) -> str:
        return "inverse-squared"

    def link_function(self, mu: float) -> float:
        if mu == 0:
            raise ValueError("Mean cannot be zero for inverse squared link.")
        return 1.0 / (mu * mu)

    def mean_function(self, eta: float) -> float:
        if eta <= 0:
            raise ValueError("Linear predictor must be positive for inverse squared link.")
        return 1.0 / math.sqrt(eta)


class LaplaceDistribution(Distribution):
    """Double exponential distribution around a location."""

    def __init__(self, loc: float, scale: float, seed: int | None = None) -> None:
        if scale <= 0:
            raise ValueError("Scale parameter must be positive.")
        super().__init__(seed)
        self.location = float(loc)
        self.scale = float(scale)

    def pdf(self, x: float) -> float:
        return (1.0 / (2.0 * self.scale)) * math.exp(-abs(x - self.location) / self.scale)

    def log_pdf(self, x: float) -> float:
        return math.log(0.5) - math.log(self.scale) - abs(x - self.location) / self.scale

    def cdf(self, x: float) -> float:
        z = (x - self.location) / self.scale
        if x < self.location:
            return 0.5 * math.exp(z)
        return 1.0 - 0.5 * math.exp(-z)

    def log_cdf(self, x: float) -> float:
        z = (x - self.location) / self.scale
        if x <= self.location:
            return math.log(0.5) + z
        return math.log1p(-0.5 * math.exp(-z))

    def sample(self) -> float:
        u = float(self._rng.random()) - 0.5
        while u == -0.5:
            u = float(self._rng.random()) - 0.5
        return self.location - self.scale * math.copysign(1.0, u) * math.log(1.0 - 2.0 * abs(u))

    def link_name(self) -> str:
        return "identity"

    def link_function(self, mu: float) -> float:
        return mu

    def mean_function(self, eta: float) -> float:
        return eta


class NormalDistribution(Distribution):
    """Gaussian distribution with a mean and a standard deviation."""

    def __init__(self, mean: float, stddev: float, seed: int | None = None) -> None:
        if stddev <= 0:
            raise ValueError("Standard deviation must be positive.")
        super().__init__(seed)
        self.mean = float(mean)
        self.stddev = float(stddev)

    def pdf(self, x: float) -> float:
        exponent = -0.5 * ((x - self.mean) / self.stddev) ** 2
        return (1.0 / (self.stddev * math.sqrt(2.0 * math.pi))) * math.exp(exponent)

    def log_pdf(self, x: float) -> float:
        return (
            -0.5 * math.log(2.0 * math.pi)
            - math.log(self.stddev)
            - 0.5 * ((x - self.mean) / self.stddev) ** 2
        )

    def cdf(self, x: float) -> float:
        return 0.5 * (1.0 + math.erf((x - self.mean) / (self.stddev * math.sqrt(2.0))))

    def log_cdf(self, x: float) -> float:
        z = (x - self.mean) / (self.stddev * math.sqrt(2.0))
        if z < -6.0:
            return _NEG_INF
        if z > 6.0:
            return 0.0
        return _log(0.5 * math.erfc(-z))

    def sample(self) -> float:
        return float(self._rng.normal(self.mean, self.stddev))

    def link_name(self) -> str:
        return "identity"

    def link_function(self, mu: float) -> float:
        return mu

    def mean_function(self, eta: float) -> float:
        return eta