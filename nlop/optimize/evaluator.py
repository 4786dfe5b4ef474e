"""Objective evaluator bound to a current point."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .core import Array, Gradient, Hessian, NotInitializedError, Objective
from .utils import approx_grad, approx_hessian, as_square_matrix


class ObjectiveFunction:
    """
    Scalar objective with its derivatives and a mutable current point.

    ``value`` and ``jacobian`` describe the point passed to the last
    :meth:`set_point` only after :meth:`update` has been called; reading them
    in between yields the previous point's data. Evaluations at other points go
    through :meth:`evaluate` and :meth:`evaluate_with_jacobian`, which leave
    the current state untouched.

    Args:
        fun: ``f(x) -> float``.
        grad: ``f'(x) -> array`` with the shape of ``x``. Central finite
            differences are used when omitted.
        hess: ``f''(x) -> (n, n) array``. Central finite differences are used
            when omitted.
    """

    def __init__(
        self,
        fun: Objective,
        grad: Optional[Gradient] = None,
        hess: Optional[Hessian] = None,
    ) -> None:
        self.fun = fun
        self.grad = grad
        self.hess = hess
        self._point: Optional[Array] = None
        self._value = float("nan")
        self._jacobian: Optional[Array] = None
        self.nfev = 0
        self.njev = 0
        self.nhev = 0
        self.n_updates = 0

    # current point -------------------------------------------------------

    def set_point(self, x: Array | float) -> None:
        """Move the current point. Call :meth:`update` before reading values."""
        self._point = np.array(x, dtype=float, ndmin=1)

    @property
    def point(self) -> Array:
        if self._point is None:
            raise NotInitializedError("No point has been set on the objective.")
        return self._point

    @property
    def value(self) -> float:
        return self._value

    @property
    def jacobian(self) -> Array:
        if self._jacobian is None:
            raise NotInitializedError("Objective has not been evaluated yet.")
        return self._jacobian

    @property
    def gradient_norm(self) -> float:
        return float(np.linalg.norm(self.jacobian))

    @property
    def dim(self) -> int:
        return self.point.size

    def update(self) -> None:
        """Recompute value and jacobian at the current point."""
        self._value, self._jacobian = self.evaluate_with_jacobian(self.point)
        self.n_updates += 1

    def update_value(self) -> None:
        """Recompute only the value at the current point."""
        self._value = self.evaluate(self.point)

    # arbitrary points ----------------------------------------------------

    def evaluate(self, x: Array) -> float:
        """Objective value at ``x``; the current point is not modified."""
        self.nfev += 1
        return float(self.fun(np.asarray(x, dtype=float)))

    def gradient_at(self, x: Array) -> Array:
        x = np.asarray(x, dtype=float)
        if self.grad is not None:
            self.njev += 1
            return np.asarray(self.grad(x), dtype=float).reshape(x.shape)
        grad, evals = approx_grad(self.fun, x, return_evals=True)
        self.nfev += int(evals)
        return grad

    def evaluate_with_jacobian(self, x: Array) -> tuple[float, Array]:
        """Value and gradient at ``x``; the current point is not modified."""
        return self.evaluate(x), self.gradient_at(x)

    def hessian(self, x: Optional[Array] = None) -> Array:
        """Hessian at ``x`` (the current point by default) as an ``(n, n)`` array."""
        x = self.point if x is None else np.asarray(x, dtype=float)
        if self.hess is not None:
            self.nhev += 1
            return as_square_matrix(self.hess(x), x.size)
        hess, evals = approx_hessian(self.fun, x, return_evals=True)
        self.nfev += int(evals)
        return hess

    def __call__(self, x: Array) -> float:
        return self.evaluate(x)


__all__ = ["ObjectiveFunction"]
