"""Iterative unconstrained minimization.

Example
-------
>>> import numpy as np
>>> from nlop.optimize import NewtonParams, newton_method
>>> A = np.array([[3.0, 0.5], [0.5, 2.0]])
>>> b = np.array([1.0, -1.0])
>>> res = newton_method(
...     lambda x: 0.5 * x @ A @ x - b @ x,
...     np.array([2.0, 2.0]),
...     grad=lambda x: A @ x - b,
...     hess=lambda x: A,
...     params=NewtonParams(min_delta_x=1e-8),
... )
>>> res.success, res.nit
(True, 1)
"""

from .base import Optimizer, minimize_with
from .core import (
    ConfigurationError,
    NonFiniteError,
    NotInitializedError,
    OptimizationError,
    OptimizeResult,
    SingularHessianError,
    Status,
)
from .evaluator import ObjectiveFunction
from .gradient import GradientDescentOptimizer, gradient_descent
from .line_search import ArmijoSearch, ExactLineSearch, StepLengthStrategy
from .nesterov import NesterovMomentumOptimizer, nesterov_momentum
from .newton import NewtonOptimizer, newton_method
from .one_dim import BisectionSearch, LineFunction, OneDimensionalSearch, ScalarFunction
from .params import (
    ArmijoParams,
    BisectionParams,
    GradientDescentParams,
    NesterovMomentumParams,
    NewtonParams,
    OptimizerParams,
    StepsizeSearchParams,
)
from .utils import approx_grad, approx_hessian, solve_newton_step

__all__ = [
    # Loop and results
    "Optimizer",
    "OptimizeResult",
    "Status",
    "minimize_with",
    "ObjectiveFunction",
    # Errors
    "OptimizationError",
    "ConfigurationError",
    "SingularHessianError",
    "NonFiniteError",
    "NotInitializedError",
    # Optimizers
    "NewtonOptimizer",
    "NesterovMomentumOptimizer",
    "GradientDescentOptimizer",
    "newton_method",
    "nesterov_momentum",
    "gradient_descent",
    # Searches
    "StepLengthStrategy",
    "ArmijoSearch",
    "ExactLineSearch",
    "OneDimensionalSearch",
    "BisectionSearch",
    "ScalarFunction",
    "LineFunction",
    # Parameters
    "OptimizerParams",
    "NewtonParams",
    "NesterovMomentumParams",
    "GradientDescentParams",
    "StepsizeSearchParams",
    "ArmijoParams",
    "BisectionParams",
    # Helpers
    "approx_grad",
    "approx_hessian",
    "solve_newton_step",
]
