"""Backtracking line search with the Armijo sufficient-decrease test."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from qnopt import vector
from qnopt.logging import get_logger

from .core import (
    ARMIJO_BETA,
    MIN_STEP,
    STATIONARY_TOL,
    Array,
    GradientFn,
    LineSearchError,
)

logger = get_logger(__name__)


class LineSearcher(Protocol):
    """Approximately minimize ``t -> f(x + t * direction)``."""

    def search(self, f: GradientFn, x: Array, direction: Array) -> tuple[float, float]:
        """Return ``(t, f(x + t * direction))``."""
        ...


@dataclass(frozen=True)
class BacktrackingLineSearch:
    """
    Geometric backtracking from a unit step.

    The trial step ``t`` starts at 1 and is multiplied by ``alpha`` until
    ``f(x + t d) <= f(x) + beta * t * (grad . d)``. Correct only when ``d``
    is a descent direction.

    Attributes:
        alpha: Backtracking factor in (0, 1).
        beta: Sufficient-decrease coefficient in (0, 0.5).
        min_step: Give up once the trial step falls to this value.
        stationary_tol: Return a zero step when the squared gradient norm at
            ``x`` is below this value.
    """

    alpha: float
    beta: float = ARMIJO_BETA
    min_step: float = MIN_STEP
    stationary_tol: float = STATIONARY_TOL

    def __post_init__(self) -> None:
        if not (0 < self.alpha < 1):
            raise ValueError("alpha must lie in (0, 1)")
        if not (0 < self.beta < 0.5):
            raise ValueError("beta must lie in (0, 0.5)")
        if self.min_step <= 0:
            raise ValueError("min_step must be positive")
        if self.stationary_tol < 0:
            raise ValueError("stationary_tol must be non-negative")

    def search(self, f: GradientFn, x: Array, direction: Array) -> tuple[float, float]:
        f0, grad = f.evaluate_at(x)
        if vector.l2(grad) < self.stationary_tol:
            return 0.0, f0
        slope = self.beta * vector.dot(grad, direction)
        step = 1.0
        while step > self.min_step:
            fnval, _ = f.evaluate_at(vector.add(x, direction, 1.0, step))
            if fnval <= f0 + step * slope:
                logger.debug("accepted step %.3g with value %.6g", step, fnval)
                return step, fnval
            step *= self.alpha
        raise LineSearchError(
            f"Step-size underflow: no step above {self.min_step:g} satisfies "
            f"sufficient decrease from f={f0:.6g} (slope {slope:.3g})"
        )


def backtracking_armijo(
    f: GradientFn,
    x: Array,
    direction: Array,
    alpha: float = 0.5,
    beta: float = ARMIJO_BETA,
    min_step: float = MIN_STEP,
) -> tuple[float, float]:
    """Functional form of :class:`BacktrackingLineSearch`."""
    searcher = BacktrackingLineSearch(alpha=alpha, beta=beta, min_step=min_step)
    return searcher.search(f, x, direction)


__all__ = ["BacktrackingLineSearch", "LineSearcher", "backtracking_armijo"]
