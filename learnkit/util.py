"""Small numeric helpers shared by the probability distributions."""

from __future__ import annotations

import math


def factorial(n: int) -> int:
    """Return n! for a non-negative integer n."""
    if n < 0:
        raise ValueError("Factorial is not defined for negative numbers.")
    result = 1
    for i in range(2, n + 1):
        result *= i
    return result


def combinations(n: int, k: int) -> int:
    """Return the binomial coefficient C(n, k), or 0 when k is out of range."""
    if k < 0 or k > n:
        return 0
    if k in (0, n):
        return 1
    k = min(k, n - k)
    result = 1
    for i in range(1, k + 1):
        result = result * (n - i + 1) // i
    return result


def logistic_function(x: float) -> float:
    """Return the standard logistic sigmoid 1 / (1 + exp(-x))."""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)