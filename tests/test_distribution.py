import pytest

from learnkit.distribution import DiscreteDistribution, Distribution


class _Constant(DiscreteDistribution):
    def __init__(self, value, seed=None):
        super().__init__(seed)
        self.value = value

    def pdf(self, x):
        return 1.0 if x == self.value else 0.0

    def log_pdf(self, x):
        return 0.0 if x == self.value else float("-inf")

    def cdf(self, x):
        return 1.0 if x >= self.value else 0.0

    def log_cdf(self, x):
        return 0.0 if x >= self.value else float("-inf")

    def sample_discrete(self):
        return self.value

    def link_name(self):
        return "identity"

    def link_function(self, mu):
        return mu

    def mean_function(self, eta):
        return eta


class _RandomInt(DiscreteDistribution):
    def pdf(self, x):
        return 1.0 / 1000 if 0 <= x < 1000 else 0.0

    def log_pdf(self, x):
        return 0.0

    def cdf(self, x):
        return min(max(x / 1000, 0.0), 1.0)

    def log_cdf(self, x):
        return 0.0

    def sample_discrete(self):
        return int(self._rng.integers(0, 1000))

    def link_name(self):
        return "identity"

    def link_function(self, mu):
        return mu

    def mean_function(self, eta):
        return eta


def test_distribution_is_abstract():
    with pytest.raises(TypeError):
        Distribution()


def test_discrete_distribution_is_abstract():
    with pytest.raises(TypeError):
        DiscreteDistribution()


@pytest.mark.parametrize("value", [0, 3, -7])
def test_discrete_sample_returns_float_of_sample_discrete(value):
    dist = _Constant(value)
    drawn = DiscreteDistribution.sample(dist)
    assert isinstance(drawn, float)
    assert drawn == float(value)


def test_seeded_generators_are_reproducible():
    first = _RandomInt(seed=42)
    second = _RandomInt(seed=42)
    first_draws = [DiscreteDistribution.sample(first) for _ in range(5)]
    second_draws = [DiscreteDistribution.sample(second) for _ in range(5)]
    assert first_draws == second_draws
    assert all(0.0 <= d < 1000.0 for d in first_draws)