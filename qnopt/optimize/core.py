"""Core interfaces shared across the unconstrained minimizers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Protocol

import numpy as np

Array = np.ndarray
EvalFn = Callable[[Array], tuple[float, Array]]
InverseHessianMultiply = Callable[[Array], Array]
IterationCallback = Callable[[int, Array, float], None]

RTOL = 1e-8

# Backtracking factors for the first and for later line searches.
DEFAULT_INIT_BACKTRACK = 0.5
DEFAULT_BACKTRACK = 0.5

ARMIJO_BETA = 0.01
MIN_STEP = 1e-10
STATIONARY_TOL = 1e-20


class OptimizationError(RuntimeError):
    """Base class for unrecoverable numerical failures during minimization."""


class LineSearchError(OptimizationError):
    """No step length satisfied the sufficient-decrease condition."""


class NonDescentError(OptimizationError):
    """An accepted step increased the objective value."""


class CurvatureError(OptimizationError):
    """A secant pair violated the curvature condition ``s . y > 0``."""


class GradientFn(Protocol):
    """Objective exposing its value and gradient at a point."""

    def evaluate_at(self, x: Array) -> tuple[float, Array]:
        """Return ``(f(x), grad f(x))``."""
        ...

    def dimension(self) -> int:
        """Return the length of the points ``evaluate_at`` accepts."""
        ...


class Status(Enum):
    """Exit status of a minimization run."""

    CONVERGED = "converged"
    MAX_ITER = "max_iter"


@dataclass
class NewtonOptions:
    """
    Options for a single ``minimize`` call.

    Attributes:
        init_guess: Starting point. ``None`` starts from the zero vector of
            the objective's dimension.
        max_iters: Iteration cap, ``0`` for unbounded.
        tolerance: Stop once the relative improvement or the squared
            gradient norm drops to this value.
        init_alpha: Backtracking factor of the first line search.
        alpha: Backtracking factor of every later line search.
        callback: Called as ``callback(nit, x, fx)`` after each step.
        history: Record every iterate on the result.
    """

    init_guess: Optional[Array] = None
    max_iters: int = 0
    tolerance: float = RTOL
    init_alpha: float = DEFAULT_INIT_BACKTRACK
    alpha: float = DEFAULT_BACKTRACK
    callback: Optional[IterationCallback] = None
    history: bool = False

    def __post_init__(self) -> None:
        if self.max_iters < 0:
            raise ValueError("max_iters must be non-negative (0 means unbounded)")
        if self.tolerance < 0:
            raise ValueError("tolerance must be non-negative")
        for name in ("init_alpha", "alpha"):
            if not (0 < getattr(self, name) < 1):
                raise ValueError(f"{name} must lie in (0, 1)")
        if self.init_guess is not None:
            self.init_guess = np.array(self.init_guess, dtype=float)
            if self.init_guess.ndim != 1:
                raise ValueError("init_guess must be a 1-D vector")


@dataclass
class OptimizeResult:
    """Result returned by every minimizer in this package.

    ``grad_norm`` is the squared L2 norm of the gradient at ``x``, the same
    quantity the stopping test compares against the tolerance.
    """

    x: Array
    fun: float
    nit: int
    status: Status
    message: str
    grad_norm: float
    nfev: int
    history: List[Array] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is Status.CONVERGED


class Minimizer(Protocol):
    """Anything that can minimize a :class:`GradientFn`."""

    def minimize(self, f: GradientFn) -> OptimizeResult:
        ...


__all__ = [
    "ARMIJO_BETA",
    "Array",
    "CurvatureError",
    "DEFAULT_BACKTRACK",
    "DEFAULT_INIT_BACKTRACK",
    "EvalFn",
    "GradientFn",
    "InverseHessianMultiply",
    "IterationCallback",
    "LineSearchError",
    "MIN_STEP",
    "Minimizer",
    "NewtonOptions",
    "NonDescentError",
    "OptimizationError",
    "OptimizeResult",
    "RTOL",
    "STATIONARY_TOL",
    "Status",
]
