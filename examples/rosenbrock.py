"""Compare the optimizers on the Rosenbrock function.

Newton's method uses the analytic Hessian, Nesterov momentum a fixed learning
rate, and steepest descent both the Goldstein-Armijo search and an exact
bisection line search. Progress lines are printed at INFO level; per-iteration
traces are written to ``$NLOP_LOG_DIR`` (default ``data/``) for Newton.
"""

from __future__ import annotations

import logging

import numpy as np

import nlop
from nlop.optimize import (
    ArmijoSearch,
    BisectionParams,
    ExactLineSearch,
    GradientDescentParams,
    NesterovMomentumParams,
    NewtonParams,
)


def rosen(x: np.ndarray) -> float:
    return float((1 - x[0]) ** 2 + 100 * (x[1] - x[0] ** 2) ** 2)


def rosen_grad(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            -2 * (1 - x[0]) - 400 * x[0] * (x[1] - x[0] ** 2),
            200 * (x[1] - x[0] ** 2),
        ]
    )


def rosen_hess(x: np.ndarray) -> np.ndarray:
    return np.array(
        [
            [1200 * x[0] ** 2 - 400 * x[1] + 2, -400 * x[0]],
            [-400 * x[0], 200],
        ]
    )


def main() -> None:
    """Run every optimizer from the classic starting point."""
    nlop.configure_logging(level=logging.WARNING)
    x0 = np.array([-1.2, 1.0])

    results = {
        "Newton": nlop.newton_method(
            rosen, x0, grad=rosen_grad, hess=rosen_hess,
            params=NewtonParams(min_delta_x=1e-10, log_file=True),
        ),
        "Nesterov momentum": nlop.nesterov_momentum(
            rosen, x0, grad=rosen_grad,
            params=NesterovMomentumParams(alpha=5e-4, beta=0.9, max_iterations=20000),
        ),
        "Steepest descent (Armijo)": nlop.gradient_descent(
            rosen, x0, grad=rosen_grad,
            params=GradientDescentParams(max_iterations=5000),
            step_search=ArmijoSearch(),
        ),
        "Steepest descent (bisection)": nlop.gradient_descent(
            rosen, x0, grad=rosen_grad,
            params=GradientDescentParams(max_iterations=5000),
            step_search=ExactLineSearch(BisectionParams(upper_bound=0.01, epsilon=1e-12)),
        ),
    }

    for name, res in results.items():
        print(
            f"{name:30s} status={res.status.value:9s} nit={res.nit:6d} "
            f"x={np.array2string(res.x, precision=6)} f={res.fun:.3e}"
        )


if __name__ == "__main__":
    main()
