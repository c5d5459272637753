"""Probability distributions, decision trees, linear regression, kernel SVM,
hidden Markov models, bandit agents, and Kalman and particle filters."""

__version__ = "0.1.0"