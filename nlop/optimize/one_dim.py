"""One-dimensional minimization along a fixed ray."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

import numpy as np

from ..logging import get_logger
from .core import Array, NotInitializedError
from .evaluator import ObjectiveFunction
from .params import BisectionParams

logger = get_logger(__name__)


class ScalarFunction:
    """``phi(lam)`` together with its derivative ``dphi(lam)``."""

    def __init__(self, phi: Callable[[float], float], dphi: Callable[[float], float]) -> None:
        self._phi = phi
        self._dphi = dphi

    def __call__(self, lam: float) -> float:
        return float(self._phi(lam))

    def derivative(self, lam: float) -> float:
        return float(self._dphi(lam))


class LineFunction(ScalarFunction):
    """
    Restriction ``phi(lam) = f(x + lam * d)`` of an objective to a ray.

    ``phi'(lam) = grad f(x + lam * d) . d``. The objective's current point is
    never modified.
    """

    def __init__(self, f: ObjectiveFunction, x: Array, d: Array) -> None:
        self.f = f
        self.x = np.array(x, dtype=float)
        self.d = np.asarray(d, dtype=float).reshape(self.x.shape)
        super().__init__(self._value, self._slope)

    def _value(self, lam: float) -> float:
        return self.f.evaluate(self.x + lam * self.d)

    def _slope(self, lam: float) -> float:
        return float(np.dot(self.f.gradient_at(self.x + lam * self.d).ravel(), self.d.ravel()))


class OneDimensionalSearch(ABC):
    """
    Minimize a scalar function on the bracket ``[alpha, beta]``.

    The search state (``alpha``, ``beta`` and ``lam``) and the iteration
    counter of ``params`` are reset by :meth:`reset`; they are only meaningful
    during and right after one call to :meth:`search`.
    """

    def __init__(
        self,
        phi: Optional[ScalarFunction] = None,
        params: Optional[BisectionParams] = None,
    ) -> None:
        self.phi = phi
        self.params = params or BisectionParams()
        self.alpha = self.params.lower_bound
        self.beta = self.params.upper_bound
        self.lam = 0.5 * (self.alpha + self.beta)

    @property
    def iteration_times(self) -> int:
        return self.params.iteration_times

    def reset(self, params: Optional[BisectionParams] = None) -> None:
        if params is not None:
            self.params = params
        self.params.validate()
        self.params.reset()
        self.alpha = self.params.lower_bound
        self.beta = self.params.upper_bound
        self.lam = 0.5 * (self.alpha + self.beta)

    @abstractmethod
    def search(self) -> float:
        """Return the step length ``lam`` minimizing ``phi``."""


class BisectionSearch(OneDimensionalSearch):
    """
    Bisection on the sign of ``phi'``.

    Stops once the bracket is narrower than ``epsilon`` or ``|phi'(lam)|`` is
    at most ``derivative_tol`` (zero by default, i.e. an exact root). A
    positive slope discards the right half, anything else the left half.
    ``phi'`` must change sign over the initial bracket; this is not checked.
    Running out of iterations returns the current midpoint with a warning.
    """

    def search(self) -> float:
        if self.phi is None:
            raise NotInitializedError("BisectionSearch has no function to search.")
        self.reset()
        eps = self.params.epsilon
        tol = self.params.derivative_tol
        while True:
            slope = self.phi.derivative(self.lam)
            logger.debug(
                "bisection iteration %d: [alpha, lam, beta] = [%g, %g, %g], phi'(lam) = %g",
                self.iteration_times,
                self.alpha,
                self.lam,
                self.beta,
                slope,
            )
            if self.beta - self.alpha < eps or abs(slope) <= tol:
                logger.debug("bisection finished with lam = %g", self.lam)
                return self.lam
            if self.params.budget_exhausted():
                logger.warning(
                    "bisection exceeded %d iterations; returning lam = %g",
                    self.params.max_iterations,
                    self.lam,
                )
                return self.lam
            self.params.next_iteration()
            if slope > 0:
                self.beta = self.lam
            else:
                self.alpha = self.lam
            self.lam = 0.5 * (self.alpha + self.beta)


__all__ = ["ScalarFunction", "LineFunction", "OneDimensionalSearch", "BisectionSearch"]
