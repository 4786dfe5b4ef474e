import numpy as np
import pytest

from nlop.optimize import (
    ArmijoParams,
    ArmijoSearch,
    BisectionParams,
    ConfigurationError,
    ExactLineSearch,
    NotInitializedError,
    ObjectiveFunction,
)


def bound_quadratic(x: np.ndarray) -> ObjectiveFunction:
    f = ObjectiveFunction(lambda y: float(y @ y), grad=lambda y: 2 * y)
    f.set_point(x)
    f.update()
    return f


def make_search(**kwargs) -> tuple[ArmijoSearch, ObjectiveFunction]:
    f = bound_quadratic(np.array([1.0, -2.0]))
    search = ArmijoSearch(ArmijoParams(**kwargs))
    search.bind(f)
    return search, f


def test_initial_step_accepted_on_first_iteration():
    search, f = make_search(init_lambda_factor=0.5)
    lam = search.search(-f.jacobian)
    assert lam == 0.5
    assert search.params.iteration_times == 1


def test_initial_step_scales_with_upper_bound():
    search, f = make_search(init_lambda_factor=0.25, upper_bound=2.0)
    assert search.search(-f.jacobian) == 0.5
    assert search.params.iteration_times == 1


def test_overshooting_step_is_decreased():
    search, f = make_search(init_lambda_factor=1.0)
    lam = search.search(-f.jacobian)
    assert lam == 0.5
    assert search.params.iteration_times == 2


def test_conservative_step_is_increased():
    search, f = make_search(init_lambda_factor=0.1)
    lam = search.search(-f.jacobian)
    assert lam == pytest.approx(0.4)
    assert search.params.iteration_times == 3


def test_accepted_step_satisfies_both_conditions():
    search, f = make_search(init_lambda_factor=0.05, rho=0.1, mu=4.0)
    d = -f.jacobian
    lam = search.search(d)
    decrease = f.evaluate(f.point + lam * d) - f.value
    slope = float(f.jacobian @ d)
    assert decrease <= 0.1 * lam * slope
    assert decrease >= 0.4 * lam * slope


def test_budget_exhaustion_returns_last_step():
    search, f = make_search(init_lambda_factor=1.0, max_iterations=2)
    lam = search.search(f.jacobian)
    assert lam == 0.25
    assert search.params.iteration_times == 2


def test_search_leaves_current_point_alone():
    search, f = make_search()
    before = f.point.copy()
    search.search(-f.jacobian)
    assert np.array_equal(f.point, before)
    assert f.value == 5.0


def test_counter_restarts_each_search():
    search, f = make_search(init_lambda_factor=1.0)
    search.search(-f.jacobian)
    search.search(-f.jacobian)
    assert search.params.iteration_times == 2


def test_unbound_search_raises():
    with pytest.raises(NotInitializedError):
        ArmijoSearch().search(np.ones(2))


def test_inconsistent_factors_rejected():
    with pytest.raises(ConfigurationError):
        ArmijoParams(increase_factor=0.9, decrease_factor=0.5)


def test_exact_line_search_finds_ray_minimizer():
    f = bound_quadratic(np.array([3.0, 4.0]))
    search = ExactLineSearch(BisectionParams(lower_bound=0.0, upper_bound=2.0, epsilon=1e-10))
    search.bind(f)
    lam = search.search(-f.jacobian)
    assert lam == pytest.approx(0.5, abs=1e-9)
