"""Nesterov accelerated gradient (momentum with lookahead)."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .base import Optimizer, minimize_with
from .core import Array, Gradient, Objective, OptimizeResult
from .evaluator import ObjectiveFunction
from .params import NesterovMomentumParams


class NesterovMomentumOptimizer(Optimizer):
    """
    Momentum descent that takes its gradient at the lookahead point.

    With learning rate ``alpha`` and momentum ``beta``::

        x_look = x_k + beta * v_{k-1}
        v_k    = beta * v_{k-1} - alpha * grad f(x_look)
        x_k+1  = x_k + v_k

    The velocity lives here rather than in the objective, starts at zero on
    :meth:`initialize` and is carried across iterations. Convergence is tested
    on the gradient at ``x_k``, not at the lookahead point.
    """

    name = "Nesterov momentum"

    def __init__(self) -> None:
        super().__init__()
        self.velocity: Optional[Array] = None

    def _reset_state(self) -> None:
        self.velocity = np.zeros_like(self.f.point)

    def converged(self) -> bool:
        return self.f.gradient_norm < self.params.min_gradient

    def advance(self) -> None:
        alpha, beta = self.params.alpha, self.params.beta
        x = self.f.point
        lookahead = x + beta * self.velocity
        grad_look = self.f.gradient_at(lookahead)
        self.velocity = beta * self.velocity - alpha * grad_look
        self.f.set_point(x + self.velocity)


def nesterov_momentum(
    fun: Objective,
    x0: Array | float,
    grad: Optional[Gradient] = None,
    params: Optional[NesterovMomentumParams] = None,
) -> OptimizeResult:
    """Minimize ``fun`` from ``x0`` with Nesterov momentum."""
    f = ObjectiveFunction(fun, grad=grad)
    return minimize_with(
        NesterovMomentumOptimizer(), f, x0, params or NesterovMomentumParams()
    )


__all__ = ["NesterovMomentumOptimizer", "nesterov_momentum"]
