"""Linear and extended Kalman filters."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike

StateFunction = Callable[[np.ndarray], ArrayLike]


def _vector(v: ArrayLike) -> np.ndarray:
    return np.atleast_1d(np.asarray(v, dtype=float)).ravel()


def _matrix(m: ArrayLike) -> np.ndarray:
    return np.atleast_2d(np.asarray(m, dtype=float))


def _gain(P: np.ndarray, H: np.ndarray, S: np.ndarray) -> np.ndarray:
    """Kalman gain P H^T S^-1."""
    return np.linalg.solve(S.T, (P @ H.T).T).T


class KalmanFilter:
    """Kalman filter for the linear model x' = A x + w, y = C x + v."""

    def __init__(
        self,
        dt: float,
        A: ArrayLike,
        C: ArrayLike,
        Q: ArrayLike,
        R: ArrayLike,
        P: ArrayLike,
    ) -> None:
        self.dt = float(dt)
        self.A = _matrix(A)
        self.C = _matrix(C)
        self.Q = _matrix(Q)
        self.R = _matrix(R)
        self._P = _matrix(P)
        self._x: np.ndarray | None = None

    def initialize(self, x0: ArrayLike) -> None:
        """Set the initial state estimate."""
        self._x = _vector(x0)

    def _current(self) -> np.ndarray:
        if self._x is None:
            raise RuntimeError("Filter state is not initialized; call initialize() first.")
        return self._x

    def predict(self) -> None:
        """Propagate the state and its covariance one step ahead."""
        x = self._current()
        self._x = self.A @ x
        self._P = self.A @ self._P @ self.A.T + self.Q

    def update(self, y: ArrayLike) -> None:
        """Correct the estimate with a measurement y."""
        x = self._current()
        S = self.C @ self._P @ self.C.T + self.R
        K = _gain(self._P, self.C, S)
        self._x = x + K @ (_vector(y) - self.C @ x)
        identity = np.eye(self._P.shape[0])
        self._P = (identity - K @ self.C) @ self._P

    def state(self) -> np.ndarray:
        """A copy of the current state estimate."""
        return self._current().copy()

    def covariance(self) -> np.ndarray:
        """A copy of the current error covariance."""
        return self._P.copy()


class ExtendedKalmanFilter:
    """Kalman filter linearising nonlinear process and measurement models.

    Predicting without a process model, or updating without a measurement
    model, leaves the filter unchanged.
    """

    def __init__(self, x0: ArrayLike, P0: ArrayLike, Q: ArrayLike, R: ArrayLike) -> None:
        self._x = _vector(x0)
        self._P = _matrix(P0)
        self.Q = _matrix(Q)
        self.R = _matrix(R)
        self._f: StateFunction | None = None
        self._F: StateFunction | None = None
        self._h: StateFunction | None = None
        self._H: StateFunction | None = None

    def set_process_model(self, f: StateFunction, F: StateFunction) -> None:
        """Set the transition function f and its Jacobian F."""
        self._f = f
        self._F = F

    def set_measurement_model(self, h: StateFunction, H: StateFunction) -> None:
        """Set the measurement function h and its Jacobian H."""
        self._h = h
        self._H = H

    def predict(self) -> None:
        """Propagate the state through f; the Jacobian is taken at the new state."""
        if self._f is None or self._F is None:
            return
        self._x = _vector(self._f(self._x))
        Fk = _matrix(self._F(self._x))
        self._P = Fk @ self._P @ Fk.T + self.Q

    def update(self, z: ArrayLike) -> None:
        """Correct the estimate with a measurement z."""
        if self._h is None or self._H is None:
            return
        innovation = _vector(z) - _vector(self._h(self._x))
        Hk = _matrix(self._H(self._x))
        S = Hk @ self._P @ Hk.T + self.R
        K = _gain(self._P, Hk, S)
        self._x = self._x + K @ innovation
        self._P = (np.eye(self._x.size) - K @ Hk) @ self._P

    def state(self) -> np.ndarray:
        """A copy of the current state estimate."""
        return self._x.copy()

    def covariance(self) -> np.ndarray:
        """A copy of the current error covariance."""
        return self._P.copy()