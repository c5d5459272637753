"""Discrete hidden Markov model: evaluation, Viterbi decoding and Baum-Welch training."""

from __future__ import annotations

import math
import secrets
from collections.abc import Iterable, Sequence
from functools import reduce

import numpy as np

_NEG_INF = -math.inf


def log_sum_exp(log_a: float, log_b: float) -> float:
    """Return log(a + b) given log(a) and log(b)."""
    log_a = float(log_a)
    log_b = float(log_b)
    if log_a == _NEG_INF:
        return log_b
    if log_b == _NEG_INF:
        return log_a
    top = max(log_a, log_b)
    return top + math.log(math.exp(log_a - top) + math.exp(log_b - top))


def _log(values: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.log(np.asarray(values, dtype=float))


class _MT19937:
    """32-bit Mersenne Twister seeded from a single integer."""

    _N = 624
    _M = 397

    def __init__(self, seed: int) -> None:
        state = [seed & 0xFFFFFFFF]
        for i in range(1, self._N):
            prev = state[-1]
            state.append((1812433253 * (prev ^ (prev >> 30)) + i) & 0xFFFFFFFF)
        self._state = state
        self._index = self._N

    def _twist(self) -> None:
        state = self._state
        n = self._N
        for i in range(n):
            y = (state[i] & 0x80000000) | (state[(i + 1) % n] & 0x7FFFFFFF)
            value = state[(i + self._M) % n] ^ (y >> 1)
            if y & 1:
                value ^= 0x9908B0DF
            state[i] = value
        self._index = 0

    def next_u32(self) -> int:
        if self._index >= self._N:
            self._twist()
        y = self._state[self._index]
        self._index += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y & 0xFFFFFFFF

    def canonical(self) -> float:
        """A double in [0, 1) built from two 32-bit draws."""
        low = self.next_u32()
        high = self.next_u32()
        value = (low + high * 4294967296.0) / 18446744073709551616.0
        return math.nextafter(1.0, 0.0) if value >= 1.0 else value

    def uniform(self, low: float, high: float) -> float:
        return self.canonical() * (high - low) + low


class HMM:
    """Hidden Markov model with discrete observations, computed in the log domain."""

    def __init__(self, states: int, observations: int) -> None:
        self.num_states = states
        self.num_observations = observations
        self.initial_probabilities = np.zeros(states)
        self.transition_matrix = np.zeros((states, states))
        self.emission_matrix = np.zeros((states, observations))
        self._gen = _MT19937(secrets.randbits(32))

    def _checked(self, observations: Iterable[int]) -> list[int]:
        obs = [int(o) for o in observations]
        if any(not 0 <= o < self.num_observations for o in obs):
            raise ValueError("Observation symbol out of range.")
        return obs

    def _nonempty(self, observations: Iterable[int]) -> list[int]:
        obs = self._checked(observations)
        if not obs:
            raise ValueError("Observation sequence must not be empty.")
        return obs

    def forward_pass(self, observations: Sequence[int]) -> np.ndarray:
        """Log forward probabilities, one row per state and one column per time step."""
        obs = self._checked(observations)
        n = self.num_states
        if not obs:
            return np.zeros((n, 0))
        log_pi = _log(self.initial_probabilities)
        log_a = _log(self.transition_matrix)
        log_b = _log(self.emission_matrix)

        alpha = np.empty((n, len(obs)))
        alpha[:, 0] = log_pi + log_b[:, obs[0]]
        for t, symbol in enumerate(obs[1:], start=1):
            alpha[:, t] = (
                np.logaddexp.reduce(alpha[:, t - 1, None] + log_a, axis=0)
                + log_b[:, symbol]
            )
        return alpha

    def backward_pass(self, observations: Sequence[int]) -> np.ndarray:
        """Log backward probabilities, one row per state and one column per time step."""
        obs = self._checked(observations)
        n = self.num_states
        length = len(obs)
        beta = np.zeros((n, length))
        if length == 0:
            return beta
        log_a = _log(self.transition_matrix)
        log_b = _log(self.emission_matrix)
        for t in range(length - 2, -1, -1):
            following = log_b[:, obs[t + 1]] + beta[:, t + 1]
            beta[:, t] = np.logaddexp.reduce(log_a + following[None, :], axis=1)
        return beta

    def log_likelihood(self, observations: Sequence[int]) -> float:
        """Log probability of the observation sequence under the model."""
        alpha = self.forward_pass(self._nonempty(observations))
        return reduce(log_sum_exp, alpha[:, -1], _NEG_INF)

    def most_likely_states(self, observations: Sequence[int]) -> list[int]:
        """Viterbi path: the most probable hidden state at each time step."""
        obs = self._nonempty(observations)
        n = self.num_states
        log_pi = _log(self.initial_probabilities)
        log_a = _log(self.transition_matrix)
        log_b = _log(self.emission_matrix)
        states_idx = np.arange(n)

        delta = np.empty((n, len(obs)))
        psi = np.zeros((n, len(obs)), dtype=int)
        delta[:, 0] = log_pi + log_b[:, obs[0]]
        for t, symbol in enumerate(obs[1:], start=1):
            scores = delta[:, t - 1, None] + log_a
            psi[:, t] = np.argmax(scores, axis=0)
            delta[:, t] = scores[psi[:, t], states_idx] + log_b[:, symbol]

        path = [int(np.argmax(delta[:, -1]))]
        for t in range(len(obs) - 1, 0, -1):
            path.append(int(psi[path[-1], t]))
        path.reverse()
        return path

    def _randomize(self) -> None:
        n, m = self.num_states, self.num_observations
        draw = lambda: self._gen.uniform(0.01, 1.0)  # noqa: E731

        pi = np.array([draw() for _ in range(n)])
        self.initial_probabilities = pi / pi.sum()

        transitions = np.array([[draw() for _ in range(n)] for _ in range(n)])
        self.transition_matrix = transitions / np.linalg.norm(
            transitions, axis=1, keepdims=True
        )

        emissions = np.array([[draw() for _ in range(m)] for _ in range(n)])
        self.emission_matrix = emissions / np.linalg.norm(emissions, axis=1, keepdims=True)

    def train(
        self,
        observation_sequences: Iterable[Sequence[int]],
        max_iterations: int = 100,
        tolerance: float = 1e-6,
        smoothing_factor: float = 0.0,
        seed: int = 0,
    ) -> int:
        """Fit the parameters with Baum-Welch from a random start.

        A non-zero seed makes the random start reproducible. Returns the
        number of iterations run.
        """
        if seed != 0:
            self._gen = _MT19937(seed)
        sequences = [self._nonempty(seq) for seq in observation_sequences]
        n, m = self.num_states, self.num_observations
        s = smoothing_factor

        self._randomize()
        prev_log_likelihood = _NEG_INF

        for iteration in range(max_iterations):
            pi_num = np.zeros(n)
            a_num = np.zeros((n, n))
            b_num = np.zeros((n, m))
            counts_a = np.zeros(n)
            counts_b = np.zeros(n)
            total_log_likelihood = _NEG_INF

            log_a = _log(self.transition_matrix)
            log_b = _log(self.emission_matrix)

            for obs in sequences:
                alpha = self.forward_pass(obs)
                beta = self.backward_pass(obs)
                sequence_log_prob = reduce(log_sum_exp, alpha[:, -1], _NEG_INF)
                total_log_likelihood = log_sum_exp(total_log_likelihood, sequence_log_prob)

                gamma = np.exp(alpha + beta - sequence_log_prob)
                pi_num += gamma[:, 0]

                if len(obs) > 1:
                    following = (log_b[:, obs[1:]] + beta[:, 1:]).T
                    xi_log = (
                        alpha[:, :-1].T[:, :, None]
                        + log_a[None, :, :]
                        + following[:, None, :]
                    )
                    a_num += np.exp(xi_log - sequence_log_prob).sum(axis=0)

                symbols = np.asarray(obs)
                for k in range(m):
                    b_num[:, k] += gamma[:, symbols == k].sum(axis=1)

                counts_a += gamma[:, :-1].sum(axis=1)
                counts_b += gamma.sum(axis=1)

            self.initial_probabilities = (pi_num + s) / (pi_num.sum() + s * n)

            denom_a = counts_a + s * n
            new_a = np.full((n, n), 1.0 / n)
            ok_a = denom_a > 0
            new_a[ok_a] = (a_num[ok_a] + s) / denom_a[ok_a, None]
            self.transition_matrix = new_a

            denom_b = counts_b + s * m
            new_b = np.full((n, m), 1.0 / m)
            ok_b = denom_b > 0
            new_b[ok_b] = (b_num[ok_b] + s) / denom_b[ok_b, None]
            self.emission_matrix = new_b

            if abs(total_log_likelihood - prev_log_likelihood) < tolerance:
                return iteration + 1
            prev_log_likelihood = total_log_likelihood

        return max_iterations