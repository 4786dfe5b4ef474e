"""Parameter bundles for optimizers and step-length searches.

Each algorithm owns one bundle. A bundle carries the tolerances and factors of
its algorithm plus its own iteration counter; counters are never shared
between bundles, so independent runs never interfere with each other.

All bundles validate themselves on construction. Fields may be reassigned
afterwards; optimizers and searches call :meth:`OptimizerParams.validate`
again when they are initialized.
"""

from __future__ import annotations

import math
import numbers
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .core import ConfigurationError

LOG_DIR_ENV_VAR = "NLOP_LOG_DIR"
DEFAULT_LOG_DIR = "data"


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigurationError(message)


def _require_positive(name: str, value: float) -> None:
    _require(
        math.isfinite(value) and value > 0,
        f"{name} must be a positive finite number, got {value}.",
    )


@dataclass
class OptimizerParams:
    """
    Settings common to every iterative algorithm.

    Args:
        max_iterations: Iteration budget. Reaching it ends the run without
            raising.
        log_file: Also write the per-iteration diagnostics to a plain text file.
        log_dir: Directory of the diagnostic file. Defaults to ``$NLOP_LOG_DIR``
            and then to ``data``.
        history: Record every iterate in the run result.
    """

    max_iterations: int = 1000
    log_file: bool = False
    log_dir: Optional[str] = None
    history: bool = False
    iteration_times: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` if any setting is out of range."""
        _require(
            isinstance(self.max_iterations, numbers.Integral) and self.max_iterations >= 0,
            f"max_iterations must be a non-negative integer, got {self.max_iterations}.",
        )

    def next_iteration(self) -> int:
        """Advance the iteration counter by one and return its new value."""
        self.iteration_times += 1
        return self.iteration_times

    def reset(self) -> None:
        self.iteration_times = 0

    def budget_exhausted(self) -> bool:
        return self.iteration_times >= self.max_iterations

    def log_path(self, name: str) -> Path:
        """Path of the diagnostic file for the algorithm called ``name``."""
        directory = self.log_dir or os.getenv(LOG_DIR_ENV_VAR) or DEFAULT_LOG_DIR
        return Path(directory) / f"{name}.txt"

    def describe(self) -> Dict[str, Any]:
        """Public settings as a dict, excluding the iteration counter."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.init}


@dataclass
class NewtonParams(OptimizerParams):
    """
    Newton's method settings.

    Args:
        min_delta_x: Converged once the Newton step norm drops below this.
        lambda_reg: Ridge term added to the Hessian diagonal before solving.
            Zero means the plain Newton step.
        max_condition: Hessians with a larger condition number are rejected
            as singular.
    """

    min_delta_x: float = 1e-6
    lambda_reg: float = 0.0
    max_condition: float = 1e12

    def validate(self) -> None:
        super().validate()
        _require_positive("min_delta_x", self.min_delta_x)
        _require(
            math.isfinite(self.lambda_reg) and self.lambda_reg >= 0,
            f"lambda_reg must be non-negative, got {self.lambda_reg}.",
        )
        _require(
            self.max_condition > 1,
            f"max_condition must exceed 1, got {self.max_condition}.",
        )


@dataclass
class NesterovMomentumParams(OptimizerParams):
    """
    Nesterov accelerated gradient settings.

    Args:
        min_gradient: Converged once the gradient norm drops below this.
        alpha: Learning rate.
        beta: Momentum factor in ``[0, 1)``. Zero gives plain gradient descent.
    """

    min_gradient: float = 1e-4
    alpha: float = 0.01
    beta: float = 0.9

    def validate(self) -> None:
        super().validate()
        _require_positive("min_gradient", self.min_gradient)
        _require_positive("alpha", self.alpha)
        _require(0.0 <= self.beta < 1.0, f"beta must lie in [0, 1), got {self.beta}.")


@dataclass
class GradientDescentParams(OptimizerParams):
    """
    Steepest descent settings.

    Args:
        min_gradient: Converged once the gradient norm drops below this.
        learning_rate: Fixed step length, used when no step-length strategy is
            attached to the optimizer.
    """

    min_gradient: float = 1e-4
    learning_rate: float = 0.01

    def validate(self) -> None:
        super().validate()
        _require_positive("min_gradient", self.min_gradient)
        _require_positive("learning_rate", self.learning_rate)


@dataclass
class StepsizeSearchParams(OptimizerParams):
    """
    Settings shared by inexact step-length searches.

    Args:
        lower_bound: Smallest admissible step length.
        upper_bound: Largest admissible step length.
        increase_factor: Multiplier applied when a step is too conservative.
        decrease_factor: Multiplier applied when a step overshoots.
    """

    max_iterations: int = 50
    lower_bound: float = 0.0
    upper_bound: float = 1.0
    increase_factor: float = 2.0
    decrease_factor: float = 0.5

    def validate(self) -> None:
        super().validate()
        _require(
            math.isfinite(self.lower_bound) and math.isfinite(self.upper_bound),
            "step length bounds must be finite.",
        )
        _require(
            self.lower_bound < self.upper_bound,
            f"lower_bound ({self.lower_bound}) must be below upper_bound ({self.upper_bound}).",
        )
        _require(
            0.0 < self.decrease_factor < 1.0 < self.increase_factor,
            "factors must satisfy 0 < decrease_factor < 1 < increase_factor, "
            f"got decrease_factor={self.decrease_factor}, "
            f"increase_factor={self.increase_factor}.",
        )


@dataclass
class ArmijoParams(StepsizeSearchParams):
    """
    Goldstein-Armijo search settings.

    A trial step ``lam`` is accepted when the actual decrease lies between
    ``mu * rho`` and ``rho`` times the decrease predicted by the directional
    derivative.

    Args:
        rho: Sufficient-decrease coefficient.
        mu: Multiplier for the lower (not too small step) bound.
        init_lambda_factor: First trial step as a fraction of ``upper_bound``.
    """

    rho: float = 0.25
    mu: float = 3.0
    init_lambda_factor: float = 1.0

    def validate(self) -> None:
        super().validate()
        _require(0.0 < self.rho < 1.0, f"rho must lie in (0, 1), got {self.rho}.")
        _require(self.mu > 1.0, f"mu must exceed 1, got {self.mu}.")
        _require(
            self.mu * self.rho < 1.0,
            f"mu * rho must stay below 1, got {self.mu * self.rho}.",
        )
        _require(
            0.0 < self.init_lambda_factor <= 1.0,
            f"init_lambda_factor must lie in (0, 1], got {self.init_lambda_factor}.",
        )
        _require(self.upper_bound > 0, "upper_bound must be positive for Armijo search.")


@dataclass
class BisectionParams(OptimizerParams):
    """
    Bisection search settings.

    Args:
        lower_bound: Left end of the bracket.
        upper_bound: Right end of the bracket.
        epsilon: Stop once the bracket is narrower than this.
        derivative_tol: Stop once ``|phi'(lam)|`` is at most this. The default
            of zero only stops on an exactly vanishing derivative.
    """

    max_iterations: int = 100
    lower_bound: float = 0.0
    upper_bound: float = 1.0
    epsilon: float = 1e-6
    derivative_tol: float = 0.0

    def validate(self) -> None:
        super().validate()
        _require(
            self.lower_bound < self.upper_bound,
            f"lower_bound ({self.lower_bound}) must be below upper_bound ({self.upper_bound}).",
        )
        _require_positive("epsilon", self.epsilon)
        _require(
            self.derivative_tol >= 0,
            f"derivative_tol must be non-negative, got {self.derivative_tol}.",
        )


__all__ = [
    "LOG_DIR_ENV_VAR",
    "OptimizerParams",
    "NewtonParams",
    "NesterovMomentumParams",
    "GradientDescentParams",
    "StepsizeSearchParams",
    "ArmijoParams",
    "BisectionParams",
]
