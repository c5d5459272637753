import numpy as np
import pytest

from learnkit.linear_regression import (
    FitType,
    LinearRegression,
    LinearRegressionFitMethod,
)

X_LINE = [[1.0], [2.0], [3.0], [4.0]]
Y_LINE = [3.0, 5.0, 7.0, 9.0]


def test_closed_form_solution():
    method = LinearRegressionFitMethod(0, 0, FitType.CLOSED_FORM)
    model = LinearRegression(method)
    model.fit(X_LINE, Y_LINE)
    weights, bias = model.coefficients()
    assert weights == pytest.approx([2.0], abs=1e-6)
    assert bias == pytest.approx(1.0, abs=1e-6)


def test_gradient_descent_solution():
    method = LinearRegressionFitMethod(10000, 0.01, FitType.GRADIENT_DESCENT)
    model = LinearRegression(method, seed=7)
    model.fit(X_LINE, Y_LINE)
    weights, bias = model.coefficients()
    assert weights == pytest.approx([2.0], abs=1e-2)
    assert bias == pytest.approx(1.0, abs=1e-2)


def test_prediction_accuracy():
    method = LinearRegressionFitMethod(10000, 0.01, FitType.GRADIENT_DESCENT)
    model = LinearRegression(method, seed=11)
    model.fit(X_LINE, Y_LINE)
    assert model.predict([5.0]) == pytest.approx(11.0, abs=1e-2)
    assert model.predict([2.5]) == pytest.approx(6.0, abs=1e-2)


def test_raises_on_invalid_fit_input():
    model = LinearRegression(LinearRegressionFitMethod(100, 0.01, FitType.GRADIENT_DESCENT))
    with pytest.raises(ValueError):
        model.fit([], [])
    with pytest.raises(ValueError):
        model.fit([[1.0], [2.0]], [3.0, 5.0, 7.0])


def test_raises_on_invalid_prediction_input():
    model = LinearRegression(LinearRegressionFitMethod(100, 0.01, FitType.GRADIENT_DESCENT))
    model.fit([[1.0], [2.0]], [3.0, 5.0])
    with pytest.raises(ValueError):
        model.predict([1.0, 2.0])


def test_empty_feature_vectors_rejected():
    model = LinearRegression(LinearRegressionFitMethod(fit_type=FitType.CLOSED_FORM))
    with pytest.raises(ValueError):
        model.fit([[], []], [1.0, 2.0])


def test_singular_closed_form_raises():
    model = LinearRegression(LinearRegressionFitMethod(fit_type=FitType.CLOSED_FORM))
    with pytest.raises(np.linalg.LinAlgError):
        model.fit([[1.0], [1.0]], [2.0, 3.0])


def test_invalid_fit_method_raises():
    model = LinearRegression(LinearRegressionFitMethod(10, 0.01, "bogus"))
    with pytest.raises(ValueError):
        model.fit(X_LINE, Y_LINE)


def test_initialize_parameters_resets_state():
    model = LinearRegression(LinearRegressionFitMethod(fit_type=FitType.CLOSED_FORM))
    model.fit(X_LINE, Y_LINE)
    model.initialize_parameters(3)
    assert model.coefficients() == ([0.0, 0.0, 0.0], 0.0)


def test_identity_links_and_cost_derivative():
    model = LinearRegression(LinearRegressionFitMethod())
    assert model.link_function(2.5) == 2.5
    assert model.inverse_link_function(-1.0) == -1.0
    assert model.cost_function_derivative(4.0, 1.5) == 2.5


def test_closed_form_two_features():
    X = [[1.0, 0.0], [0.0, 1.0], [1.0, 1.0], [2.0, 3.0]]
    y = [1.0 * a + 2.0 * b + 0.5 for a, b in X]
    model = LinearRegression(LinearRegressionFitMethod(fit_type=FitType.CLOSED_FORM))
    model.fit(X, y)
    weights, bias = model.coefficients()
    assert weights == pytest.approx([1.0, 2.0], abs=1e-9)
    assert bias == pytest.approx(0.5, abs=1e-9)
    assert model.predict([3.0, 1.0]) == pytest.approx(5.5, abs=1e-9)