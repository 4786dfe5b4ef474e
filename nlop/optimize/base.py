"""Iteration loop shared by all descent optimizers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

import numpy as np

from ..diagnostics import IterationLogger
from .core import (
    Array,
    NonFiniteError,
    NotInitializedError,
    OptimizeResult,
    Status,
)
from .evaluator import ObjectiveFunction
from .params import OptimizerParams

if TYPE_CHECKING:
    from .line_search import StepLengthStrategy


class Optimizer(ABC):
    """
    Evaluate, check the budget, test convergence, advance, repeat.

    Subclasses provide the convergence predicate (:meth:`converged`) and the
    update rule (:meth:`advance`). Both see a freshly updated objective.
    :meth:`converged` runs first and may cache work that :meth:`advance` reuses.

    Args:
        step_search: Optional step-length strategy consulted by :meth:`advance`.
    """

    name = "Optimizer"

    def __init__(self, step_search: Optional["StepLengthStrategy"] = None) -> None:
        self.step_search = step_search
        self.f: Optional[ObjectiveFunction] = None
        self.params: Optional[OptimizerParams] = None
        self.status = Status.RUNNING
        self.result: Optional[OptimizeResult] = None
        self.logger = IterationLogger(self.name)
        self._history: List[Array] = []

    def initialize(
        self,
        initial: Array | float,
        f: ObjectiveFunction,
        params: OptimizerParams,
    ) -> None:
        """Bind ``f`` to ``initial`` and evaluate it once."""
        params.validate()
        params.reset()
        self.f = f
        self.params = params
        f.set_point(initial)
        f.update_value()
        if self.step_search is not None:
            self.step_search.bind(f)
        self.status = Status.RUNNING
        self.result = None
        self._history = []
        self._reset_state()

    def _reset_state(self) -> None:
        """Hook for algorithm state that must not outlive a run."""

    @abstractmethod
    def converged(self) -> bool:
        """Convergence predicate at the current point."""

    @abstractmethod
    def advance(self) -> None:
        """Move the objective's current point to the next iterate."""

    def step_length(self, direction: Array, default: float) -> float:
        if self.step_search is None:
            return default
        return self.step_search.search(direction)

    def run(self) -> Array:
        """Iterate until convergence or budget exhaustion; return the final point."""
        if self.f is None or self.params is None:
            raise NotInitializedError(f"{self.name}.run() called before initialize().")
        f, params = self.f, self.params
        with self.logger.session(params):
            while True:
                f.update()
                self._check_finite()
                self.logger.iteration(
                    params.iteration_times, f.point, f.value, f.gradient_norm
                )
                if params.history:
                    self._history.append(f.point.copy())
                if params.budget_exhausted():
                    return self._finish(Status.EXHAUSTED)
                if self.converged():
                    return self._finish(Status.CONVERGED)
                self.advance()
                params.next_iteration()

    def _check_finite(self) -> None:
        f = self.f
        if not np.isfinite(f.value) or not np.all(np.isfinite(f.jacobian)):
            raise NonFiniteError(
                f"{self.name}: objective is not finite at x = {f.point} "
                f"(iteration {self.params.iteration_times})."
            )

    def _finish(self, status: Status) -> Array:
        f, params = self.f, self.params
        k = params.iteration_times
        if status is Status.CONVERGED:
            message = self.logger.success(k, f.point, f.value)
        else:
            message = self.logger.failure(k, f.point, f.value)
        self.status = status
        self.result = OptimizeResult(
            x=f.point.copy(),
            fun=f.value,
            nit=k,
            status=status,
            message=message,
            grad_norm=f.gradient_norm,
            nfev=f.nfev,
            njev=f.njev,
            nhev=f.nhev,
            history=list(self._history),
        )
        return f.point.copy()


def minimize_with(
    optimizer: Optimizer,
    f: ObjectiveFunction,
    x0: Array | float,
    params: OptimizerParams,
) -> OptimizeResult:
    """Initialize ``optimizer``, run it, and return its result."""
    optimizer.initialize(x0, f, params)
    optimizer.run()
    assert optimizer.result is not None
    return optimizer.result


__all__ = ["Optimizer", "minimize_with"]
