"""nlop - iterative nonlinear optimization with pluggable step-length searches."""

__version__ = "0.1.0"

from .logging import configure_logging, file_trace, get_logger, set_log_level
from .optimize import (
    ArmijoParams,
    ArmijoSearch,
    BisectionParams,
    BisectionSearch,
    ConfigurationError,
    ExactLineSearch,
    GradientDescentOptimizer,
    GradientDescentParams,
    NesterovMomentumOptimizer,
    NesterovMomentumParams,
    NewtonOptimizer,
    NewtonParams,
    NonFiniteError,
    ObjectiveFunction,
    OptimizationError,
    OptimizeResult,
    SingularHessianError,
    Status,
    gradient_descent,
    nesterov_momentum,
    newton_method,
)

__all__ = [
    "__version__",
    "configure_logging",
    "file_trace",
    "get_logger",
    "set_log_level",
    "ObjectiveFunction",
    "OptimizeResult",
    "Status",
    "OptimizationError",
    "ConfigurationError",
    "SingularHessianError",
    "NonFiniteError",
    "NewtonOptimizer",
    "NewtonParams",
    "NesterovMomentumOptimizer",
    "NesterovMomentumParams",
    "GradientDescentOptimizer",
    "GradientDescentParams",
    "ArmijoSearch",
    "ArmijoParams",
    "ExactLineSearch",
    "BisectionSearch",
    "BisectionParams",
    "newton_method",
    "nesterov_momentum",
    "gradient_descent",
]
