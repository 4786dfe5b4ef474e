"""Step-length strategies used by the descent optimizers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..logging import get_logger
from .core import Array, NotInitializedError
from .evaluator import ObjectiveFunction
from .one_dim import BisectionSearch, LineFunction
from .params import ArmijoParams, BisectionParams, OptimizerParams

logger = get_logger(__name__)


class StepLengthStrategy(ABC):
    """
    Choose ``lam`` so that ``x + lam * d`` is an acceptable next point.

    A strategy is bound to the optimizer's objective once and then queried
    every outer iteration; it reads, but never moves, the current point.
    """

    def __init__(self, params: OptimizerParams) -> None:
        self.params = params
        self.f: Optional[ObjectiveFunction] = None
        self.lam = 0.0

    def bind(self, f: ObjectiveFunction) -> None:
        self.f = f

    def _require_bound(self) -> ObjectiveFunction:
        if self.f is None:
            raise NotInitializedError(
                f"{type(self).__name__}.search() called before bind()."
            )
        return self.f

    @abstractmethod
    def search(self, d: Array) -> float:
        """Step length along the descent direction ``d``."""


class ArmijoSearch(StepLengthStrategy):
    """
    Inexact search on the Goldstein-Armijo conditions.

    With ``Df = f(x + lam d) - f(x)`` and ``s = grad f(x) . d``, ``lam`` is
    accepted when

        (1) Df <= rho * lam * s        (sufficient decrease)
        (2) Df >= mu * rho * lam * s   (step not too small)

    Failing (1) shrinks ``lam`` by ``decrease_factor``; passing (1) but failing
    (2) grows it by ``increase_factor``. The search starts from
    ``init_lambda_factor * upper_bound``. The iteration counter of ``params``
    is advanced once per trial step; on exhaustion the current ``lam`` is
    returned with a warning.
    """

    def __init__(self, params: Optional[ArmijoParams] = None) -> None:
        super().__init__(params or ArmijoParams())

    def search(self, d: Array) -> float:
        f = self._require_bound()
        params = self.params
        params.validate()
        params.reset()
        rho, mu = params.rho, params.mu
        x, fx = f.point, f.value
        d = np.asarray(d, dtype=float).reshape(x.shape)
        slope = float(np.dot(f.jacobian.ravel(), d.ravel()))

        self.lam = params.init_lambda_factor * params.upper_bound
        while True:
            if params.budget_exhausted():
                logger.warning(
                    "Armijo search exceeded %d iterations; returning lam = %g",
                    params.max_iterations,
                    self.lam,
                )
                return self.lam
            params.next_iteration()
            lhs = f.evaluate(x + self.lam * d) - fx
            if lhs <= rho * slope * self.lam:
                if lhs >= mu * rho * slope * self.lam:
                    return self.lam
                self.lam *= params.increase_factor
            else:
                self.lam *= params.decrease_factor


class ExactLineSearch(StepLengthStrategy):
    """
    Minimize ``f(x + lam d)`` over ``[lower_bound, upper_bound]`` by bisection
    on the directional derivative.
    """

    def __init__(self, params: Optional[BisectionParams] = None) -> None:
        super().__init__(params or BisectionParams())
        self.bisection = BisectionSearch(params=self.params)

    def search(self, d: Array) -> float:
        f = self._require_bound()
        self.bisection.phi = LineFunction(f, f.point, d)
        self.lam = self.bisection.search()
        return self.lam


__all__ = ["StepLengthStrategy", "ArmijoSearch", "ExactLineSearch"]
