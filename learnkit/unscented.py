"""Unscented Kalman filter using scaled symmetric sigma points."""

from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike

StateFunction = Callable[[np.ndarray], ArrayLike]


def _vector(v: ArrayLike) -> np.ndarray:
    return np.atleast_1d(np.asarray(v, dtype=float)).ravel()


def _matrix(m: ArrayLike) -> np.ndarray:
    return np.atleast_2d(np.asarray(m, dtype=float))


class UnscentedKalmanFilter:
    """Nonlinear Kalman filter propagating 2n+1 sigma points.

    The measurement update transforms the sigma points drawn in the last
    predict step. Predicting without a process model, or updating without a
    measurement model, leaves the filter unchanged.
    """

    def __init__(
        self,
        state_dim: int,
        meas_dim: int,
        alpha: float = 1e-3,
        beta: float = 2.0,
        kappa: float = 0.0,
    ) -> None:
        if state_dim <= 0 or meas_dim <= 0:
            raise ValueError("State and measurement dimensions must be positive.")
        self.n_x = int(state_dim)
        self.n_z = int(meas_dim)
        self.alpha = float(alpha)
        self.beta = float(beta)
        self.kappa = float(kappa)
        self.lambda_ = self.alpha**2 * (self.n_x + self.kappa) - self.n_x
        denom = self.n_x + self.lambda_
        if denom <= 0:
            raise ValueError("state_dim + lambda must be positive.")

        count = 2 * self.n_x + 1
        self.weights_mean = np.full(count, 1.0 / (2.0 * denom))
        self.weights_mean[0] = self.lambda_ / denom
        self.weights_cov = self.weights_mean.copy()
        self.weights_cov[0] += 1.0 - self.alpha**2 + self.beta

        self._x = np.zeros(self.n_x)
        self._P = np.eye(self.n_x)
        self._Q = np.zeros((self.n_x, self.n_x))
        self._R = np.zeros((self.n_z, self.n_z))
        self._f: StateFunction | None = None
        self._h: StateFunction | None = None
        self._sigma_points = np.empty((0, self.n_x))
        self.last_measurement: np.ndarray | None = None

    def initialize(self, x0: ArrayLike, P0: ArrayLike) -> None:
        """Set the initial state and covariance."""
        self._x = _vector(x0)
        self._P = _matrix(P0)

    def set_process_model(self, f: StateFunction, Q: ArrayLike) -> None:
        """Set the transition function and process noise covariance."""
        self._f = f
        self._Q = _matrix(Q)

    def set_measurement_model(self, h: StateFunction, R: ArrayLike) -> None:
        """Set the measurement function and measurement noise covariance."""
        self._h = h
        self._R = _matrix(R)

    def _generate_sigma_points(self) -> np.ndarray:
        lower = np.linalg.cholesky(self._P)
        offsets = math.sqrt(self.n_x + self.lambda_) * lower.T
        points = np.empty((2 * self.n_x + 1, self.n_x))
        points[0] = self._x
        points[1::2] = self._x + offsets
        points[2::2] = self._x - offsets
        return points

    def predict(self) -> None:
        """Propagate sigma points through the process model."""
        if self._f is None:
            return
        self._sigma_points = self._generate_sigma_points()
        propagated = np.array([_vector(self._f(pt)) for pt in self._sigma_points])
        self._x = self.weights_mean @ propagated
        dx = propagated - self._x
        self._P = (self.weights_cov[:, None] * dx).T @ dx + self._Q

    def update(self, z: ArrayLike) -> None:
        """Correct the estimate with a measurement z."""
        if self._h is None:
            return
        z = _vector(z)
        self.last_measurement = z
        points = self._sigma_points
        count = len(points)
        wm = self.weights_mean[:count]
        wc = self.weights_cov[:count]

        meas_sigma = np.array([_vector(self._h(pt)) for pt in points]).reshape(
            count, self.n_z
        )
        z_pred = wm @ meas_sigma
        dz = meas_sigma - z_pred
        S = (wc[:, None] * dz).T @ dz + self._R
        dx = points - self._x
        Tc = (wc[:, None] * dx).T @ dz

        K = np.linalg.solve(S.T, Tc.T).T
        self._x = self._x + K @ (z - z_pred)
        self._P = self._P - K @ S @ K.T

    def state(self) -> np.ndarray:
        """A copy of the current state estimate."""
        return self._x.copy()

    def covariance(self) -> np.ndarray:
        """A copy of the current error covariance."""
        return self._P.copy()