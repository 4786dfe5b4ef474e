import numpy as np
import pytest

from nlop.optimize import (
    BisectionParams,
    BisectionSearch,
    LineFunction,
    NotInitializedError,
    ObjectiveFunction,
    ScalarFunction,
)


def shifted_parabola(center: float) -> ScalarFunction:
    return ScalarFunction(lambda lam: (lam - center) ** 2, lambda lam: 2 * (lam - center))


def test_bisection_brackets_minimizer():
    search = BisectionSearch(shifted_parabola(0.3), BisectionParams(epsilon=1e-6))
    lam = search.search()
    assert abs(lam - 0.3) < 1e-6
    assert search.beta - search.alpha < 1e-6
    assert search.alpha <= lam <= search.beta


def test_midpoints_stay_inside_initial_bracket():
    visited = []

    def dphi(lam: float) -> float:
        visited.append(lam)
        return 2 * (lam - 1.7)

    params = BisectionParams(lower_bound=-3.0, upper_bound=2.0, epsilon=1e-8)
    lam = BisectionSearch(ScalarFunction(lambda lam: (lam - 1.7) ** 2, dphi), params).search()
    assert abs(lam - 1.7) < 1e-8
    assert all(-3.0 <= v <= 2.0 for v in visited)


def test_exact_zero_derivative_short_circuits():
    search = BisectionSearch(shifted_parabola(0.5))
    assert search.search() == 0.5
    assert search.iteration_times == 0


def test_derivative_tolerance_stops_early():
    search = BisectionSearch(shifted_parabola(0.3), BisectionParams(derivative_tol=0.5))
    assert search.search() == 0.5
    assert search.iteration_times == 0


def test_positive_slope_discards_right_half():
    search = BisectionSearch(shifted_parabola(0.1), BisectionParams(max_iterations=1))
    lam = search.search()
    assert search.alpha == 0.0
    assert search.beta == 0.5
    assert lam == 0.25


def test_budget_exhaustion_returns_current_midpoint():
    search = BisectionSearch(shifted_parabola(0.3), BisectionParams(max_iterations=3))
    lam = search.search()
    assert search.iteration_times == 3
    assert lam == 0.3125
    assert (search.alpha, search.beta) == (0.25, 0.375)


def test_search_resets_state_between_calls():
    search = BisectionSearch(shifted_parabola(0.3))
    first = search.search()
    search.phi = shifted_parabola(0.8)
    second = search.search()
    assert abs(first - 0.3) < 1e-6
    assert abs(second - 0.8) < 1e-6


def test_line_function_restricts_objective_to_ray():
    f = ObjectiveFunction(lambda x: float(x @ x), grad=lambda x: 2 * x)
    x = np.array([1.0, -2.0])
    f.set_point(x)
    f.update()
    phi = LineFunction(f, f.point, -f.jacobian)
    assert phi(0.0) == 5.0
    assert phi(0.5) == 0.0
    assert phi.derivative(0.0) == -20.0
    assert BisectionSearch(phi).search() == 0.5
    assert np.array_equal(f.point, x)


def test_search_without_function_raises():
    with pytest.raises(NotInitializedError):
        BisectionSearch().search()
