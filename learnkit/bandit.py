"""Multi-armed bandit arms and exploration strategies."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field


class BanditArm:
    """A Bernoulli arm paying 1.0 with its true probability, tracking a running mean."""

    def __init__(self, true_reward_prob: float, rng: random.Random | None = None) -> None:
        self.true_prob = float(true_reward_prob)
        self.estimated_prob = 0.0
        self.pull_count = 0
        self._rng = rng if rng is not None else random.Random()

    def pull(self) -> float:
        """Draw a reward of 1.0 or 0.0."""
        return 1.0 if self._rng.random() < self.true_prob else 0.0

    def update(self, reward: float) -> None:
        """Fold a reward into the running mean estimate."""
        self.pull_count += 1
        self.estimated_prob = (
            self.estimated_prob * (self.pull_count - 1) + reward
        ) / self.pull_count


@dataclass(frozen=True)
class BanditResult:
    """Summary of one arm after a simulation."""

    true_probability: float
    estimated_probability: float
    times_pulled: int


@dataclass
class SimulationResult:
    """Per-arm summaries of a simulation."""

    bandit_results: list[BanditResult] = field(default_factory=list)

    def __str__(self) -> str:
        lines = ["Simulation finished."]
        for i, result in enumerate(self.bandit_results):
            lines.append(f"Arm {i}:")
            lines.append(f"  True Probability: {result.true_probability:g}")
            lines.append(f"  Estimated Probability: {result.estimated_probability:g}")
            lines.append(f"  Times Pulled: {result.times_pulled}")
        return "\n".join(lines)


def _first_max_index(values: Sequence[float]) -> int:
    return max(range(len(values)), key=values.__getitem__)


class BanditAgent(ABC):
    """An agent that repeatedly chooses an arm to pull."""

    def __init__(self, true_probs: Sequence[float], seed: int | None = None) -> None:
        if not true_probs:
            raise ValueError("At least one arm is required.")
        self._rng = random.Random(seed)
        self.arms = [BanditArm(p, self._rng) for p in true_probs]

    @abstractmethod
    def choose_and_pull(self) -> None:
        """Choose one arm, pull it and record the reward."""

    def run_simulation(self, num_steps: int) -> None:
        for _ in range(num_steps):
            self.choose_and_pull()

    def results(self) -> SimulationResult:
        return SimulationResult(
            [
                BanditResult(arm.true_prob, arm.estimated_prob, arm.pull_count)
                for arm in self.arms
            ]
        )

    def bandit(self, index: int) -> BanditArm:
        """The arm at the given index."""
        if not 0 <= index < len(self.arms):
            raise IndexError("Bandit index out of range.")
        return self.arms[index]

    def _pull(self, index: int) -> float:
        arm = self.arms[index]
        reward = arm.pull()
        arm.update(reward)
        return reward


class EpsilonGreedyAgent(BanditAgent):
    """Explores a random arm with probability epsilon, otherwise exploits."""

    def __init__(
        self, true_probs: Sequence[float], epsilon: float, seed: int | None = None
    ) -> None:
        super().__init__(true_probs, seed)
        self.epsilon = epsilon

    def choose_and_pull(self) -> None:
        if self._rng.random() < self.epsilon:
            index = self._rng.randrange(len(self.arms))
        else:
            index = self.best_arm_index()
        self._pull(index)

    def best_arm_index(self) -> int:
        """Index of the highest estimate, the first one on ties."""
        return _first_max_index([arm.estimated_prob for arm in self.arms])


class DecayingEpsilonGreedyAgent(BanditAgent):
    """Epsilon-greedy with epsilon shrinking as initial / (1 + decay * pulls)."""

    def __init__(
        self,
        true_probs: Sequence[float],
        initial_epsilon: float,
        decay_rate: float,
        seed: int | None = None,
    ) -> None:
        super().__init__(true_probs, seed)
        self.initial_epsilon = initial_epsilon
        self.decay_rate = decay_rate
        self.total_pulls = 0

    def choose_and_pull(self) -> None:
        self.total_pulls += 1
        if self._rng.random() < self.current_epsilon():
            index = self._rng.randrange(len(self.arms))
        else:
            index = self.best_arm_index()
        self._pull(index)

    def current_epsilon(self) -> float:
        return self.initial_epsilon / (1.0 + self.decay_rate * self.total_pulls)

    def best_arm_index(self) -> int:
        """Index of the highest estimate, the first one on ties."""
        return _first_max_index([arm.estimated_prob for arm in self.arms])


class UCBAgent(BanditAgent):
    """Upper confidence bound agent; every arm is tried once first."""

    def __init__(
        self, true_probs: Sequence[float], c: float, seed: int | None = None
    ) -> None:
        super().__init__(true_probs, seed)
        self.c = c
        self.total_pulls = 0

    def choose_and_pull(self) -> None:
        self.total_pulls += 1
        self._pull(self.best_ucb_index())

    def best_ucb_index(self) -> int:
        """First unpulled arm, else the arm with the highest confidence bound."""
        for i, arm in enumerate(self.arms):
            if arm.pull_count == 0:
                return i
        bounds = [
            arm.estimated_prob
            + self.c * math.sqrt(math.log(self.total_pulls) / arm.pull_count)
            for arm in self.arms
        ]
        return _first_max_index(bounds)


class ThompsonSamplingAgent(BanditAgent):
    """Samples each arm's Beta posterior and pulls the best sample."""

    def __init__(self, true_probs: Sequence[float], seed: int | None = None) -> None:
        super().__init__(true_probs, seed)
        self.alphas = [1.0] * len(self.arms)
        self.betas = [1.0] * len(self.arms)

    def choose_and_pull(self) -> None:
        index = self.best_sampled_index()
        reward = self._pull(index)
        if reward == 1.0:
            self.alphas[index] += 1.0
        else:
            self.betas[index] += 1.0

    def best_sampled_index(self) -> int:
        samples = []
        for alpha, beta in zip(self.alphas, self.betas):
            x = self._rng.gammavariate(alpha, 1.0)
            y = self._rng.gammavariate(beta, 1.0)
            samples.append(x / (x + y))
        return _first_max_index(samples)