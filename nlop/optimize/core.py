"""Core types shared across the optimizers and search strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List

import numpy as np

Array = np.ndarray
Objective = Callable[[Array], float]
Gradient = Callable[[Array], Array]
Hessian = Callable[[Array], Array]


class Status(Enum):
    """Lifecycle of an optimizer run."""

    RUNNING = "running"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


class OptimizationError(Exception):
    """Base class for unrecoverable optimizer failures."""


class ConfigurationError(OptimizationError, ValueError):
    """A parameter bundle holds values the algorithms cannot work with."""


class SingularHessianError(OptimizationError, np.linalg.LinAlgError):
    """The Hessian is singular, ill-conditioned or not finite."""


class NonFiniteError(OptimizationError, FloatingPointError):
    """The objective produced a NaN or infinite value or gradient."""


class NotInitializedError(OptimizationError, RuntimeError):
    """``run`` or ``search`` was called before the component was bound."""


@dataclass
class OptimizeResult:
    """Outcome of one optimizer run.

    Attributes:
        x: Final point (converged or best effort).
        fun: Objective value at ``x``.
        nit: Value of the iteration counter when the loop stopped.
        status: ``Status.CONVERGED`` or ``Status.EXHAUSTED``.
        message: Human-readable summary, also sent to the diagnostic sink.
        grad_norm: Gradient norm at ``x``.
        nfev: Objective value evaluations.
        njev: Gradient evaluations.
        nhev: Hessian evaluations.
        history: Iterates visited, when ``params.history`` is enabled.
    """

    x: Array
    fun: float
    nit: int
    status: Status
    message: str
    grad_norm: float
    nfev: int = 0
    njev: int = 0
    nhev: int = 0
    history: List[Array] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is Status.CONVERGED


__all__ = [
    "Array",
    "Objective",
    "Gradient",
    "Hessian",
    "Status",
    "OptimizeResult",
    "OptimizationError",
    "ConfigurationError",
    "SingularHessianError",
    "NonFiniteError",
    "NotInitializedError",
]
