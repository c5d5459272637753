# learnkit

Small, readable implementations of classic statistical models, filters and
learners, built on NumPy and SciPy. Everything is a plain Python library; the
package has no command-line tool.

## What is inside

- `learnkit.util`: `factorial`, `combinations` (binomial coefficient, 0 when
  `k` is out of range) and `logistic_function`.
- `learnkit.distribution`: the abstract `Distribution` base class (`pdf`,
  `log_pdf`, `cdf`, `log_cdf`, `sample`, `link_name`, `link_function`,
  `mean_function`) and `DiscreteDistribution`, whose `sample()` returns
  `sample_discrete()` as a float.
- `learnkit.discrete`: `BernoulliDistribution`, `BinomialDistribution`,
  `CategoricalDistribution`, `PoissonDistribution`, `MultinomialDistribution`
  and `log_factorial`.
- `learnkit.continuous`: `ExponentialDistribution`, `GammaDistribution`,
  `InverseGaussianDistribution`, `LaplaceDistribution` and
  `NormalDistribution`.
- `learnkit.svm`: `LinearKernel`, `PolynomialKernel`, `RBFKernel`,
  `SigmoidKernel` and `SVM`.
- `learnkit.linear_regression`: `FitType`, `LinearRegressionFitMethod`, the
  `GLM` base class and `LinearRegression`, fitted in closed form (normal
  equation) or by stochastic gradient descent.
- `learnkit.decision_tree`: `DecisionTree` over integer features with
  `SplitCriterion.GINI` or `SplitCriterion.ENTROPY`, plus
  `calculate_gini_impurity` and `calculate_entropy`.
- `learnkit.rule_set`: `RuleSet` and `Rule`, the IF-THEN rules of a trained
  tree.
- `learnkit.random_forest`: `RandomForest`, a majority vote of trees trained
  on bootstrap samples.
- `learnkit.boost_tree`: `BoostTree` and `BoostTreeParameters`.
- `learnkit.hmm`: `HMM` with forward and backward passes, log-likelihood,
  Viterbi decoding (`most_likely_states`) and Baum-Welch training, plus
  `log_sum_exp`.
- `learnkit.bandit`: `BanditArm`, `EpsilonGreedyAgent`,
  `DecayingEpsilonGreedyAgent`, `UCBAgent` and `ThompsonSamplingAgent`, with
  `SimulationResult` summaries.
- `learnkit.kalman`: `KalmanFilter` and `ExtendedKalmanFilter`.
- `learnkit.unscented`: `UnscentedKalmanFilter`.
- `learnkit.particle_filter`: `SequentialMonteCarlo` and `Particle`.

Most classes that draw random numbers take an optional `seed` argument for
reproducible runs.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Distributions:

```python
from learnkit.discrete import BinomialDistribution
from learnkit.continuous import NormalDistribution

print(BinomialDistribution(5, 0.5).pdf(2))   # 0.3125
print(NormalDistribution(0.0, 1.0).cdf(0.0))  # 0.5
print(NormalDistribution(0.0, 1.0, seed=1).sample())
```

A decision tree and the rules it learned:

```python
from learnkit.decision_tree import DecisionTree
from learnkit.rule_set import RuleSet

X = [[0, 0], [0, 1], [1, 0], [1, 1]]
y = [1, 1, 0, 0]
tree = DecisionTree()
tree.fit(X, y, 2)
print(tree.predict([0, 1]))   # 1

rules = RuleSet(tree)
for rule in rules.rules():
    print(rule)   # "IF feature[0] == 0 THEN class is 1", ...
print(rules.predict([2, 0]))  # -1: no rule matches
```

Linear regression:

```python
from learnkit.linear_regression import (
    FitType, LinearRegression, LinearRegressionFitMethod,
)

method = LinearRegressionFitMethod(0, 0.0, FitType.CLOSED_FORM)
model = LinearRegression(method)
model.fit([[1.0], [2.0], [3.0], [4.0]], [3.0, 5.0, 7.0, 9.0])
print(model.coefficients())   # approximately ([2.0], 1.0)
print(model.predict([5.0]))   # approximately 11.0
```

A hidden Markov model:

```python
import numpy as np
from learnkit.hmm import HMM

hmm = HMM(2, 3)
hmm.initial_probabilities = np.array([0.6, 0.4])
hmm.transition_matrix = np.array([[0.7, 0.3], [0.4, 0.6]])
hmm.emission_matrix = np.array([[0.1, 0.4, 0.5], [0.6, 0.3, 0.1]])
print(hmm.log_likelihood([0, 1, 2]))
print(hmm.most_likely_states([0, 1, 2]))   # [1, 0, 0]

trained = HMM(2, 3)
iterations = trained.train([[0, 0, 1], [1, 2, 2]], 100, 1e-6, 0.0, 31)
```

A multi-armed bandit:

```python
from learnkit.bandit import UCBAgent

agent = UCBAgent([0.1, 0.5, 0.9], 2.0, seed=7)
agent.run_simulation(1000)
print(agent.results())
```

A Kalman filter:

```python
import numpy as np
from learnkit.kalman import KalmanFilter

A = np.array([[1.0, 1.0], [0.0, 1.0]])
C = np.array([[1.0, 0.0]])
kf = KalmanFilter(1.0, A, C, 0.001 * np.eye(2), 0.1 * np.eye(1), np.eye(2))
kf.initialize(np.array([0.0, 1.0]))
kf.predict()
print(kf.state())   # [1. 1.]
```

## Behaviour worth knowing

- `SVM.fit` does not solve an optimisation problem: it keeps every training
  sample as a support vector with a fixed weight of 0.5 and a bias of 0.1.
  `predict` returns `1.0` or `-1.0` from the sign of the kernel decision
  function.
- `BoostTree.predict` and `predict_batch` return the mean of the training
  targets for every sample; the estimators created by `fit` are not trained.
- `DecisionTree.predict` returns `-1` before fitting; a feature value not seen
  in training yields the label of the child with the smallest feature value.
  `RandomForest.predict` returns `-1` when the forest has no trees.
- `ExtendedKalmanFilter` and `UnscentedKalmanFilter` leave their state
  unchanged when `predict` or `update` is called before the matching model is
  set. The unscented update uses the sigma points of the last `predict`.
- `SequentialMonteCarlo` tracks a pose `(x, y, theta)` with a fixed
  random-walk motion model and weighs particles by a measured `(x, y)`
  position; `update` always resamples.
- `MultinomialDistribution` is not a `Distribution` subclass; its link and
  mean functions return `0.0`. `CategoricalDistribution` raises `ValueError`
  from its link and mean functions.

## What the package does not do

There is no command-line program, no way to save or load trained models, and
no plotting. Models are trained and used in memory from Python code.