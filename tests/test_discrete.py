import itertools
import math

import pytest

from learnkit.discrete import (
    BernoulliDistribution,
    BinomialDistribution,
    CategoricalDistribution,
    MultinomialDistribution,
    PoissonDistribution,
    log_factorial,
)


# ---------------------------- Bernoulli ----------------------------
def test_bernoulli_pdf_cdf():
    dist = BernoulliDistribution(0.3)
    assert dist.pdf(1.0) == pytest.approx(0.3)
    assert dist.pdf(0.0) == pytest.approx(0.7)
    assert dist.cdf(-1.0) == 0.0
    assert dist.cdf(0.0) == pytest.approx(0.7)
    assert dist.cdf(1.0) == 1.0
    assert dist.log_cdf(1.0) == pytest.approx(math.log(1.0))
    assert dist.log_pdf(1.0) == pytest.approx(math.log(0.3))


def test_bernoulli_out_of_support():
    dist = BernoulliDistribution(0.3)
    assert dist.pdf(0.5) == 0.0
    assert dist.log_pdf(2.0) == -math.inf
    assert dist.log_cdf(-0.5) == -math.inf


@pytest.mark.parametrize("p", [-0.1, 1.1])
def test_bernoulli_rejects_bad_probability(p):
    with pytest.raises(ValueError):
        BernoulliDistribution(p)


def test_bernoulli_link():
    dist = BernoulliDistribution(0.5)
    assert dist.link_name() == "logit"
    assert dist.link_function(0.5) == pytest.approx(0.0)
    assert dist.mean_function(dist.link_function(0.8)) == pytest.approx(0.8)
    with pytest.raises(ValueError):
        dist.link_function(1.0)


# ---------------------------- Binomial ----------------------------
def test_binomial_pdf_log_pdf_cdf():
    dist = BinomialDistribution(5, 0.5)
    assert dist.pdf(2.0) == pytest.approx(0.3125, abs=1e-6)
    assert math.exp(dist.log_pdf(2.0)) == pytest.approx(0.3125, abs=1e-6)
    assert 0.0 <= dist.cdf(2.0) <= 1.0
    assert dist.log_cdf(2.0) <= 0.0


def test_binomial_cdf_reaches_one_and_log_cdf_agrees():
    dist = BinomialDistribution(6, 0.3)
    assert dist.cdf(6.0) == pytest.approx(1.0)
    assert dist.cdf(100.0) == pytest.approx(1.0)
    for x in range(7):
        assert math.exp(dist.log_cdf(float(x))) == pytest.approx(dist.cdf(float(x)))


def test_binomial_out_of_support():
    dist = BinomialDistribution(5, 0.5)
    assert dist.pdf(2.5) == 0.0
    assert dist.pdf(-1.0) == 0.0
    assert dist.pdf(6.0) == 0.0
    assert dist.log_pdf(2.5) == -math.inf
    assert dist.cdf(-1.0) == 0.0
    assert dist.log_cdf(-1.0) == -math.inf


def test_binomial_rejects_bad_parameters():
    with pytest.raises(ValueError):
        BinomialDistribution(-1, 0.5)
    with pytest.raises(ValueError):
        BinomialDistribution(5, 1.5)


def test_binomial_link():
    dist = BinomialDistribution(5, 0.5)
    assert dist.link_name() == "logit"
    with pytest.raises(ValueError):
        dist.link_function(0.0)


# ---------------------------- Categorical ----------------------------
def test_categorical_pdf_log_pdf_cdf():
    dist = CategoricalDistribution([0.1, 0.4, 0.5])
    assert dist.pdf(0.0) == pytest.approx(0.1)
    assert dist.pdf(1.0) == pytest.approx(0.4)
    assert dist.pdf(2.0) == pytest.approx(0.5)
    assert dist.cdf(0.0) == pytest.approx(0.1)
    assert dist.cdf(1.0) == pytest.approx(0.5)
    assert dist.log_cdf(2.0) == pytest.approx(math.log(1.0))


def test_categorical_edges():
    dist = CategoricalDistribution([0.1, 0.4, 0.5])
    assert dist.pdf(3.0) == 0.0
    assert dist.log_pdf(5.0) == -math.inf
    assert dist.cdf(-1.0) == 0.0
    assert dist.log_cdf(-1.0) == -math.inf
    assert dist.log_pdf(1.0) == pytest.approx(math.log(0.4))


def test_categorical_rejects_unnormalised_weights():
    with pytest.raises(ValueError):
        CategoricalDistribution([0.2, 0.2])


def test_categorical_link_not_applicable():
    dist = CategoricalDistribution([0.5, 0.5])
    assert dist.link_name() == "N/A"
    with pytest.raises(ValueError):
        dist.link_function(0.5)
    with pytest.raises(ValueError):
        dist.mean_function(0.5)


def test_categorical_sample_respects_zero_weight():
    dist = CategoricalDistribution([0.0, 1.0, 0.0], seed=1)
    assert {dist.sample_discrete() for _ in range(20)} == {1}


# ---------------------------- Poisson ----------------------------
def test_poisson_pdf_log_pdf_cdf():
    dist = PoissonDistribution(2.0)
    assert dist.pdf(0.0) == pytest.approx(math.exp(-2.0), abs=1e-6)
    assert dist.log_pdf(0.0) == pytest.approx(-2.0)
    assert dist.cdf(2.0) <= 1.0
    assert dist.log_cdf(2.0) <= 0.0


def test_poisson_cdf_is_monotone_and_bounded():
    dist = PoissonDistribution(3.0)
    values = [dist.cdf(float(k)) for k in range(30)]
    assert values == sorted(values)
    assert values[-1] == pytest.approx(1.0)
    assert dist.cdf(-1.0) == 0.0
    assert dist.log_cdf(-1.0) == -math.inf


def test_poisson_rejects_non_positive_rate():
    with pytest.raises(ValueError):
        PoissonDistribution(0.0)


def test_poisson_link():
    dist = PoissonDistribution(2.0)
    assert dist.link_name() == "log"
    assert dist.mean_function(dist.link_function(4.0)) == pytest.approx(4.0)
    with pytest.raises(ValueError):
        dist.link_function(0.0)


# ---------------------------- Multinomial ----------------------------
def test_multinomial_pdf_sums_to_one():
    dist = MultinomialDistribution(3, [0.2, 0.3, 0.5])
    total = sum(
        dist.pdf(list(counts))
        for counts in itertools.product(range(4), repeat=3)
        if sum(counts) == 3
    )
    assert total == pytest.approx(1.0)


def test_multinomial_pdf_two_outcomes():
    dist = MultinomialDistribution(2, [0.5, 0.5])
    assert dist.pdf([1, 1]) == pytest.approx(0.5)


def test_multinomial_zero_probability_outcome():
    dist = MultinomialDistribution(2, [1.0, 0.0])
    assert dist.pdf([1, 1]) == 0.0
    assert dist.pdf([2, 0]) == pytest.approx(1.0)


def test_multinomial_errors():
    with pytest.raises(ValueError):
        MultinomialDistribution(0, [0.5, 0.5])
    with pytest.raises(ValueError):
        MultinomialDistribution(2, [0.4, 0.4])
    dist = MultinomialDistribution(2, [0.5, 0.5])
    with pytest.raises(ValueError):
        dist.pdf([2])
    with pytest.raises(ValueError):
        dist.pdf([1, 0])
    with pytest.raises(ValueError):
        dist.pdf([3, -1])


def test_multinomial_samples():
    dist = MultinomialDistribution(10, [0.2, 0.3, 0.5], seed=7)
    counts = dist.sample_multinomial()
    assert len(counts) == 3
    assert sum(counts) == 10
    assert all(c >= 0 for c in counts)
    assert dist.sample() in {0.0, 1.0, 2.0}


def test_multinomial_link_not_applicable():
    dist = MultinomialDistribution(2, [0.5, 0.5])
    assert dist.link_name() == "Not Applicable"
    assert dist.link_function(0.3) == 0.0
    assert dist.mean_function(0.3) == 0.0


def test_log_factorial():
    assert log_factorial(0) == pytest.approx(0.0)
    assert math.exp(log_factorial(5)) == pytest.approx(math.factorial(5))


# ---------------------------- Sampling ----------------------------
def test_samples_lie_in_support():
    b = BernoulliDistribution(0.5, seed=1)
    bi = BinomialDistribution(5, 0.5, seed=2)
    p = PoissonDistribution(3.0, seed=3)
    for _ in range(50):
        assert b.sample() in {0.0, 1.0}
        assert bi.sample() in {float(k) for k in range(6)}
        drawn = p.sample()
        assert drawn >= 0.0
        assert drawn == float(int(drawn))


def test_seeded_sampling_is_reproducible():
    first = BinomialDistribution(10, 0.4, seed=99)
    second = BinomialDistribution(10, 0.4, seed=99)
    assert [first.sample_discrete() for _ in range(10)] == [
        second.sample_discrete() for _ in range(10)
    ]