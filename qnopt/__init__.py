"""qnopt - gradient descent and L-BFGS minimization of smooth objectives."""

__version__ = "0.1.0"

from . import vector
from .logging import configure_logging, get_logger, set_log_level
from .optimize import (
    LBFGS,
    BacktrackingLineSearch,
    CachingGradientFunction,
    CurvatureError,
    GradientDescent,
    GradientFunction,
    LineSearchError,
    NewtonOptions,
    NonDescentError,
    OptimizationError,
    OptimizeResult,
    Status,
    gradient_descent,
    lbfgs,
    new_caching_gradient_fn,
    new_gradient_fn,
)

__all__ = [
    "BacktrackingLineSearch",
    "CachingGradientFunction",
    "CurvatureError",
    "GradientDescent",
    "GradientFunction",
    "LBFGS",
    "LineSearchError",
    "NewtonOptions",
    "NonDescentError",
    "OptimizationError",
    "OptimizeResult",
    "Status",
    "__version__",
    "configure_logging",
    "get_logger",
    "gradient_descent",
    "lbfgs",
    "new_caching_gradient_fn",
    "new_gradient_fn",
    "set_log_level",
    "vector",
]
