"""Steepest descent: the Newton loop with an identity inverse Hessian."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from .core import Array, GradientFn, InverseHessianMultiply, NewtonOptions, OptimizeResult
from .newton import newton_minimize


class IdentityStrategy:
    """Use the gradient unchanged as the (negated) search direction."""

    def update(self, x: Array, grad: Array) -> InverseHessianMultiply:
        return _identity


def _identity(g: Array) -> Array:
    return np.array(g, dtype=float)


class GradientDescent:
    """Gradient descent with backtracking line search."""

    def __init__(self, options: Optional[NewtonOptions] = None) -> None:
        self.options = options if options is not None else NewtonOptions()

    def minimize(self, f: GradientFn) -> OptimizeResult:
        return newton_minimize(f, IdentityStrategy(), self.options)


def gradient_descent(
    f: GradientFn, x0: Optional[Array] = None, **options: Any
) -> OptimizeResult:
    """Minimize ``f`` from ``x0``; keyword arguments become :class:`NewtonOptions`."""
    return GradientDescent(NewtonOptions(init_guess=x0, **options)).minimize(f)


__all__ = ["GradientDescent", "IdentityStrategy", "gradient_descent"]
