"""Discrete probability distributions and the multinomial distribution."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from learnkit.distribution import DiscreteDistribution
from learnkit.util import combinations, logistic_function

_EPSILON = 1e-9
_NEG_INF = -math.inf


def _log(x: float) -> float:
    return math.log(x) if x > 0.0 else _NEG_INF


def _xlog(k: float, p: float) -> float:
    """k * log(p), taking 0 * log(0) as 0."""
    return 0.0 if k == 0 else k * _log(p)


def _logit(mu: float) -> float:
    if mu <= 0 or mu >= 1:
        raise ValueError("Mean must be between 0 and 1 for logit link.")
    return math.log(mu / (1.0 - mu))


def log_factorial(n: int) -> float:
    """Return log(n!) through the log-gamma function."""
    return math.lgamma(n + 1)


class BernoulliDistribution(DiscreteDistribution):
    """A single trial that succeeds with probability p."""

    def __init__(self, p: float, seed: int | None = None) -> None:
        if not 0.0 <= p <= 1.0:
            raise ValueError("Probability must be between 0 and 1.")
        super().__init__(seed)
        self.p = float(p)

    def pdf(self, x: float) -> float:
        if x == 1.0:
            return self.p
        if x == 0.0:
            return 1.0 - self.p
        return 0.0

    def log_pdf(self, x: float) -> float:
        if x == 1.0:
            return _log(self.p)
        if x == 0.0:
            return _log(1.0 - self.p)
        return _NEG_INF

    def cdf(self, x: float) -> float:
        if x < 0.0:
            return 0.0
        if x < 1.0:
            return 1.0 - self.p
        return 1.0

    def log_cdf(self, x: float) -> float:
        return _log(self.cdf(x))

    def sample_discrete(self) -> int:
        return int(self._rng.random() < self.p)

    def link_name(self) -> str:
        return "logit"

    def link_function(self, mu: float) -> float:
        return _logit(mu)

    def mean_function(self, eta: float) -> float:
        return logistic_function(eta)


class BinomialDistribution(DiscreteDistribution):
    """Number of successes in t independent trials with success probability p."""

    def __init__(self, t: int, p: float, seed: int | None = None) -> None:
        if t < 0:
            raise ValueError("Number of trials must be non-negative.")
        if not 0.0 <= p <= 1.0:
            raise ValueError("Probability must be between 0 and 1.")
        super().__init__(seed)
        self.t = int(t)
        self.p = float(p)

    def _outside_support(self, x: float) -> bool:
        return x < 0 or x > self.t or math.fmod(x, 1.0) != 0.0

    def pdf(self, x: float) -> float:
        if self._outside_support(x):
            return 0.0
        k = int(x)
        return combinations(self.t, k) * self.p ** k * (1.0 - self.p) ** (self.t - k)

    def log_pdf(self, x: float) -> float:
        if self._outside_support(x):
            return _NEG_INF
        k = int(x)
        n = self.t
        return (
            math.lgamma(n + 1)
            - math.lgamma(k + 1)
            - math.lgamma(n - k + 1)
            + _xlog(k, self.p)
            + _xlog(n - k, 1.0 - self.p)
        )

    def _upper(self, x: float) -> int:
        return self.t if x >= self.t else math.floor(x)

    def cdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return sum((self.pdf(float(i)) for i in range(self._upper(x) + 1)), 0.0)

    def log_cdf(self, x: float) -> float:
        if x < 0.0:
            return _NEG_INF
        n = self.t
        total = 0.0
        log_comb = 0.0
        for i in range(self._upper(x) + 1):
            if i > 0:
                log_comb += math.log(n - i + 1) - math.log(i)
            log_prob = log_comb + _xlog(i, self.p) + _xlog(n - i, 1.0 - self.p)
            total += math.exp(log_prob)
        return _log(total)

    def sample_discrete(self) -> int:
        return int(self._rng.binomial(self.t, self.p))

    def link_name(self) -> str:
        return "logit"

    def link_function(self, mu: float) -> float:
        return _logit(mu)

    def mean_function(self, eta: float) -> float:
        return logistic_function(eta)


class CategoricalDistribution(DiscreteDistribution):
    """A draw of one index 0..k-1 with the given probabilities."""

    def __init__(self, p: Sequence[float], seed: int | None = None) -> None:
        weights = tuple(float(w) for w in p)
        if abs(sum(weights, 0.0) - 1.0) > _EPSILON:
            raise ValueError("Probabilities must sum to 1.0")
        super().__init__(seed)
        self.weights = weights

    def pdf(self, x: float) -> float:
        index = int(x)
        if 0 <= index < len(self.weights):
            return self.weights[index]
        return 0.0

    def log_pdf(self, x: float) -> float:
        return _log(self.pdf(x))

    def cdf(self, x: float) -> float:
        max_index = math.floor(x)
        if max_index < 0:
            return 0.0
        return sum(self.weights[: max_index + 1], 0.0)

    def log_cdf(self, x: float) -> float:
        return _log(self.cdf(x))

    def sample_discrete(self) -> int:
        return int(self._rng.choice(len(self.weights), p=np.asarray(self.weights)))

    def link_name(self) -> str:
        return "N/A"

    def link_function(self, mu: float) -> float:
        raise ValueError(
            "Link function not applicable for Categorical Distribution in a simple GLM context."
        )

    def mean_function(self, eta: float) -> float:
        raise ValueError(
            "Mean function not applicable for Categorical Distribution in a simple GLM context."
        )


class PoissonDistribution(DiscreteDistribution):
    """Counts of events occurring at mean rate lam."""

    def __init__(self, lam: float, seed: int | None = None) -> None:
        if lam <= 0:
            raise ValueError("Lambda must be greater than 0.")
        super().__init__(seed)
        self.lam = float(lam)

    def log_pdf(self, x: float) -> float:
        k = int(x)
        if k < 0:
            return _NEG_INF
        return k * math.log(self.lam) - self.lam - math.lgamma(k + 1.0)

    def pdf(self, x: float) -> float:
        if int(x) < 0:
            return 0.0
        return math.exp(self.log_pdf(x))

    def cdf(self, x: float) -> float:
        k_floor = math.floor(x)
        if k_floor < 0:
            return 0.0
        return sum((self.pdf(float(i)) for i in range(k_floor + 1)), 0.0)

    def log_cdf(self, x: float) -> float:
        return _log(self.cdf(x))

    def sample_discrete(self) -> int:
        return int(self._rng.poisson(self.lam))

    def link_name(self) -> str:
        return "log"

    def link_function(self, mu: float) -> float:
        if mu <= 0:
            raise ValueError("Mean (mu) for Poisson log-link must be positive.")
        return math.log(mu)

    def mean_function(self, eta: float) -> float:
        return math.exp(eta)


class MultinomialDistribution:
    """Counts of each outcome over a fixed number of categorical trials."""

    def __init__(
        self, trials: int, probabilities: Sequence[float], seed: int | None = None
    ) -> None:
        if trials <= 0:
            raise ValueError("Number of trials must be positive.")
        probs = tuple(float(p) for p in probabilities)
        if abs(sum(probs, 0.0) - 1.0) > _EPSILON:
            raise ValueError("Probabilities must sum to 1.0.")
        self.trials = int(trials)
        self.probabilities = probs
        self._rng = np.random.default_rng(seed)

    def pdf(self, counts: Sequence[int]) -> float:
        """Probability of observing exactly these counts."""
        counts = list(counts)
        if len(counts) != len(self.probabilities):
            raise ValueError("The counts vector size must match the probabilities vector size.")
        if sum(counts) != self.trials:
            raise ValueError("The sum of counts must equal the number of trials.")

        log_p = log_factorial(self.trials)
        for count in counts:
            if count < 0:
                raise ValueError("Counts cannot be negative.")
            log_p -= log_factorial(count)

        for count, prob in zip(counts, self.probabilities):
            if prob > 0:
                log_p += count * math.log(prob)
            elif count > 0:
                return 0.0
        return math.exp(log_p)

    def sample(self) -> float:
        """Outcome index of a single trial, as a float."""
        return float(self._rng.choice(len(self.probabilities), p=np.asarray(self.probabilities)))

    def sample_multinomial(self) -> list[int]:
        """Counts per outcome over all trials."""
        counts = [0] * len(self.probabilities)
        outcomes = self._rng.choice(
            len(self.probabilities), size=self.trials, p=np.asarray(self.probabilities)
        )
        for outcome in outcomes:
            counts[int(outcome)] += 1
        return counts

    def link_name(self) -> str:
        return "Not Applicable"

    def link_function(self, mu: float) -> float:
        return 0.0

    def mean_function(self, eta: float) -> float:
        return 0.0