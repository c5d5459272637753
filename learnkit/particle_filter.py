"""Particle filter (sequential Monte Carlo) over a planar pose."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import ArrayLike

_PROCESS_NOISE = np.array([0.2, 0.2, 0.05])
_MEASUREMENT_SIGMA = 1.0


@dataclass
class Particle:
    """A pose hypothesis (x, y, theta) with its weight."""

    state: np.ndarray = field(default_factory=lambda: np.zeros(3))
    weight: float = 0.0


class SequentialMonteCarlo:
    """Particle filter with a random-walk motion model and a Gaussian position likelihood."""

    def __init__(self, num_particles: int, seed: int | None = None) -> None:
        if num_particles <= 0:
            raise ValueError("Number of particles must be positive.")
        self.num_particles = int(num_particles)
        self._rng = np.random.default_rng(seed)
        self._particles = [
            Particle(np.zeros(3), 1.0 / self.num_particles)
            for _ in range(self.num_particles)
        ]

    def predict(self) -> None:
        """Move every particle by Gaussian noise."""
        noise = self._rng.normal(0.0, _PROCESS_NOISE, size=(self.num_particles, 3))
        for particle, step in zip(self._particles, noise):
            particle.state = particle.state + step

    def update(self, z: ArrayLike) -> None:
        """Weight particles by a measured position (x, y), then resample."""
        z = np.atleast_1d(np.asarray(z, dtype=float)).ravel()
        if z.size < 2:
            raise ValueError("Measurement must hold at least an x and a y position.")
        n = self.num_particles
        sigma = _MEASUREMENT_SIGMA
        gauss_norm = 1.0 / (2.0 * math.pi * sigma * sigma)

        for p in self._particles:
            dx = p.state[0] - z[0]
            dy = p.state[1] - z[1]
            p.weight *= gauss_norm * math.exp(-(dx * dx + dy * dy) / (2.0 * sigma * sigma))

        total = sum(p.weight for p in self._particles)
        for p in self._particles:
            p.weight = p.weight / total if total > 0 else 1.0 / n

        step = 1.0 / n
        r = self._rng.uniform(0.0, step)
        cumulative = self._particles[0].weight
        i = 0
        resampled = []
        for m in range(n):
            u = r + m * step
            while u > cumulative and i < n - 1:
                i += 1
                cumulative += self._particles[i].weight
            resampled.append(Particle(self._particles[i].state.copy(), step))
        self._particles = resampled

    def particles(self) -> list[Particle]:
        """The current particles; changing them changes the filter."""
        return self._particles