"""Newton's method."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from .base import Optimizer, minimize_with
from .core import Array, Gradient, Hessian, Objective, OptimizeResult, Status
from .evaluator import ObjectiveFunction
from .params import NewtonParams
from .utils import solve_newton_step

if TYPE_CHECKING:
    from .line_search import StepLengthStrategy


class NewtonOptimizer(Optimizer):
    """
    Newton iteration ``x <- x - H(x)^{-1} g(x)``.

    Converges when the Newton step ``delta_x`` is shorter than
    ``params.min_delta_x``. A singular or ill-conditioned Hessian raises
    :class:`~nlop.optimize.core.SingularHessianError` instead of producing a
    meaningless iterate.

    Args:
        hessian: ``H(x) -> (n, n) array``. Defaults to the objective's own
            Hessian (analytic or finite differences).
        step_search: Optional step-length strategy applied along
            ``-delta_x``; without one the full Newton step is taken.
    """

    name = "Newton"

    def __init__(
        self,
        hessian: Optional[Hessian] = None,
        step_search: Optional["StepLengthStrategy"] = None,
    ) -> None:
        super().__init__(step_search)
        self.hessian = hessian
        self.delta_x: Optional[Array] = None
        self.nhev = 0

    def _reset_state(self) -> None:
        self.delta_x = None
        self.nhev = 0

    def _hessian_at(self, x: Array) -> Array:
        if self.hessian is None:
            return self.f.hessian(x)
        self.nhev += 1
        return np.asarray(self.hessian(x), dtype=float)

    def converged(self) -> bool:
        x = self.f.point
        if not np.any(self.f.jacobian):
            # stationary point: the step is zero whatever the Hessian
            self.delta_x = np.zeros_like(x)
            return True
        self.delta_x = solve_newton_step(
            self._hessian_at(x),
            self.f.jacobian,
            lambda_reg=self.params.lambda_reg,
            max_condition=self.params.max_condition,
        )
        return float(np.linalg.norm(self.delta_x)) < self.params.min_delta_x

    def advance(self) -> None:
        lam = self.step_length(-self.delta_x, default=1.0)
        self.f.set_point(self.f.point - lam * self.delta_x)

    def _finish(self, status: Status) -> Array:
        point = super()._finish(status)
        self.result.nhev += self.nhev
        return point


def newton_method(
    fun: Objective,
    x0: Array | float,
    grad: Optional[Gradient] = None,
    hess: Optional[Hessian] = None,
    params: Optional[NewtonParams] = None,
    step_search: Optional["StepLengthStrategy"] = None,
) -> OptimizeResult:
    """Minimize ``fun`` from ``x0`` with Newton's method.

    Example
    -------
    >>> res = newton_method(lambda x: float(x[0] ** 2), 10.0,
    ...                     grad=lambda x: 2 * x, hess=lambda x: 2.0)
    >>> res.success, res.nit
    (True, 1)
    """
    f = ObjectiveFunction(fun, grad=grad, hess=hess)
    optimizer = NewtonOptimizer(step_search=step_search)
    return minimize_with(optimizer, f, x0, params or NewtonParams())


__all__ = ["NewtonOptimizer", "newton_method"]
