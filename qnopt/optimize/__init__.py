"""Unconstrained smooth minimization: gradient descent and L-BFGS.

Example
-------
>>> import numpy as np
>>> from qnopt.optimize import LBFGS, NewtonOptions, new_gradient_fn
>>> def quartic(xs):
...     x, y = xs
...     val = (x - 1.0) ** 4 + (y + 2.0) ** 4
...     return val, np.array([4 * (x - 1.0) ** 3, 4 * (y + 2.0) ** 3])
>>> f = new_gradient_fn(2, quartic)
>>> res = LBFGS(NewtonOptions(tolerance=1e-5), max_history=2).minimize(f)
>>> res.fun < 1e-4
True
"""

from .core import (
    RTOL,
    CurvatureError,
    GradientFn,
    LineSearchError,
    Minimizer,
    NewtonOptions,
    NonDescentError,
    OptimizationError,
    OptimizeResult,
    Status,
)
from .gradient import GradientDescent, IdentityStrategy, gradient_descent
from .gradient_fn import (
    CachingGradientFunction,
    GradientFunction,
    new_caching_gradient_fn,
    new_gradient_fn,
)
from .line_search import BacktrackingLineSearch, LineSearcher, backtracking_armijo
from .newton import InverseHessianStrategy, newton_minimize, newton_step
from .quasi_newton import LBFGS, SecantPair, TwoLoopRecursion, lbfgs, two_loop_recursion

__all__ = [
    "BacktrackingLineSearch",
    "CachingGradientFunction",
    "CurvatureError",
    "GradientDescent",
    "GradientFn",
    "GradientFunction",
    "IdentityStrategy",
    "InverseHessianStrategy",
    "LBFGS",
    "LineSearchError",
    "LineSearcher",
    "Minimizer",
    "NewtonOptions",
    "NonDescentError",
    "OptimizationError",
    "OptimizeResult",
    "RTOL",
    "SecantPair",
    "Status",
    "TwoLoopRecursion",
    "backtracking_armijo",
    "gradient_descent",
    "lbfgs",
    "new_caching_gradient_fn",
    "new_gradient_fn",
    "newton_minimize",
    "newton_step",
    "two_loop_recursion",
]
