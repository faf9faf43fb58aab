"""Shared Newton-style iteration loop.

Every minimizer in this package is the same loop with a different
inverse-Hessian approximation: at each iterate the strategy hands back an
operator ``g -> H^{-1} g``, the loop steps along ``-H^{-1} g`` using a
backtracking line search, and stops when the relative improvement or the
squared gradient norm falls to the tolerance.
"""

from __future__ import annotations

from typing import Optional, Protocol

import numpy as np

from qnopt import vector
from qnopt.logging import get_logger

from .core import (
    Array,
    GradientFn,
    InverseHessianMultiply,
    NewtonOptions,
    NonDescentError,
    OptimizeResult,
    Status,
)
from .line_search import BacktrackingLineSearch, LineSearcher

logger = get_logger(__name__)


class InverseHessianStrategy(Protocol):
    """Produces an inverse-Hessian multiply for the current iterate.

    Strategies may keep state between calls, so a fresh instance is needed
    for every ``minimize`` call.
    """

    def update(self, x: Array, grad: Array) -> InverseHessianMultiply:
        ...


class _CountingGradientFn:
    def __init__(self, fn: GradientFn) -> None:
        self.fn = fn
        self.nfev = 0

    def evaluate_at(self, x: Array) -> tuple[float, Array]:
        self.nfev += 1
        return self.fn.evaluate_at(x)

    def dimension(self) -> int:
        return self.fn.dimension()


def relative_improvement(fx: float, fxnew: float) -> float:
    """Return ``|fx - fxnew| / |fxnew|``, zero when the values are identical."""
    if fx == fxnew:
        return 0.0
    if fxnew == 0.0:
        return float("inf")
    return abs(fx - fxnew) / abs(fxnew)


def newton_step(
    f: GradientFn,
    x: Array,
    searcher: LineSearcher,
    hinv: InverseHessianMultiply,
    grad: Optional[Array] = None,
) -> tuple[Array, float]:
    """Take one line-searched step along ``-hinv(grad)``.

    Returns the new point and the accepted step length.
    """
    if grad is None:
        _, grad = f.evaluate_at(x)
    direction = np.array(hinv(grad), dtype=float)
    vector.scale_in_place(direction, -1.0)
    step, _ = searcher.search(f, x, direction)
    return vector.add(x, direction, 1.0, step), step


def _initial_point(f: GradientFn, options: NewtonOptions) -> Array:
    dim = f.dimension()
    if options.init_guess is None:
        return np.zeros(dim, dtype=float)
    if len(options.init_guess) != dim:
        raise ValueError(
            f"init_guess has length {len(options.init_guess)}, objective expects {dim}"
        )
    return np.array(options.init_guess, dtype=float)


def newton_minimize(
    f: GradientFn, strategy: InverseHessianStrategy, options: NewtonOptions
) -> OptimizeResult:
    """Run the descent loop until convergence or the iteration cap."""
    counted = _CountingGradientFn(f)
    x = _initial_point(f, options)
    hist: list[Array] = []
    if options.history:
        hist.append(x.copy())
    tol = options.tolerance
    status = Status.MAX_ITER
    message = "Maximum iterations reached."

    fx, grad = counted.evaluate_at(x)
    grad_norm = vector.l2(grad)
    nit = 0
    while options.max_iters == 0 or nit < options.max_iters:
        alpha = options.init_alpha if nit == 0 else options.alpha
        hinv = strategy.update(x, grad)
        xnew, step = newton_step(
            counted, x, BacktrackingLineSearch(alpha=alpha), hinv, grad=grad
        )
        fxnew, gradnew = counted.evaluate_at(xnew)
        if fxnew > fx:
            raise NonDescentError(
                f"Step did not decrease the objective: {fx:.6g} -> {fxnew:.6g}"
            )
        reldiff = relative_improvement(fx, fxnew)
        logger.debug(
            "iteration %d began with %.6g, ended with %.6g (step %.3g)",
            nit,
            fx,
            fxnew,
            step,
        )
        x, fx, grad = xnew, fxnew, gradnew
        grad_norm = vector.l2(grad)
        nit += 1
        if options.history:
            hist.append(x.copy())
        if options.callback is not None:
            options.callback(nit, x.copy(), fx)
        if reldiff <= tol or grad_norm <= tol:
            status = Status.CONVERGED
            message = (
                "Gradient tolerance satisfied."
                if grad_norm <= tol
                else "Relative improvement tolerance satisfied."
            )
            break

    logger.info("%s f=%.6g after %d iterations", message, fx, nit)
    return OptimizeResult(
        x=x,
        fun=float(fx),
        nit=nit,
        status=status,
        message=message,
        grad_norm=grad_norm,
        nfev=counted.nfev,
        history=hist,
    )


__all__ = [
    "InverseHessianStrategy",
    "newton_minimize",
    "newton_step",
    "relative_improvement",
]
