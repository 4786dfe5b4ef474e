"""Steepest descent."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .base import Optimizer, minimize_with
from .core import Array, Gradient, Objective, OptimizeResult
from .evaluator import ObjectiveFunction
from .params import GradientDescentParams

if TYPE_CHECKING:
    from .line_search import StepLengthStrategy


class GradientDescentOptimizer(Optimizer):
    """Move along ``-grad f(x)`` with a fixed or searched step length."""

    name = "Gradient descent"

    def converged(self) -> bool:
        return self.f.gradient_norm < self.params.min_gradient

    def advance(self) -> None:
        direction = -self.f.jacobian
        lam = self.step_length(direction, default=self.params.learning_rate)
        self.f.set_point(self.f.point + lam * direction)


def gradient_descent(
    fun: Objective,
    x0: Array | float,
    grad: Optional[Gradient] = None,
    params: Optional[GradientDescentParams] = None,
    step_search: Optional["StepLengthStrategy"] = None,
) -> OptimizeResult:
    """Minimize ``fun`` from ``x0`` by steepest descent."""
    f = ObjectiveFunction(fun, grad=grad)
    optimizer = GradientDescentOptimizer(step_search=step_search)
    return minimize_with(optimizer, f, x0, params or GradientDescentParams())


__all__ = ["GradientDescentOptimizer", "gradient_descent"]
