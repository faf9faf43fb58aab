"""Limited-memory BFGS using the two-loop recursion.

References:
    - Nocedal & Wright, *Numerical Optimization* (2006), Algorithm 7.4
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Optional, Sequence

import numpy as np

from qnopt import vector
from qnopt.logging import get_logger

from .core import (
    Array,
    CurvatureError,
    GradientFn,
    InverseHessianMultiply,
    NewtonOptions,
    OptimizeResult,
)
from .newton import newton_minimize

logger = get_logger(__name__)


@dataclass(frozen=True)
class SecantPair:
    """Step ``xdelta = x_k - x_{k-1}`` and gradient change ``graddelta``."""

    xdelta: Array
    graddelta: Array
    curvature: float


def two_loop_recursion(pairs: Sequence[SecantPair], grad: Array, gamma: float) -> Array:
    """
    Apply the implicit L-BFGS inverse Hessian to ``grad``.

    ``pairs`` is ordered oldest first. The initial inverse Hessian is
    ``gamma * I``.
    """
    q = np.array(grad, dtype=float)
    alphas = []
    for pair in reversed(pairs):
        alpha = vector.dot(pair.xdelta, q) / pair.curvature
        vector.add_in_place(q, pair.graddelta, -alpha)
        alphas.append(alpha)
    vector.scale_in_place(q, gamma)
    for pair, alpha in zip(pairs, reversed(alphas)):
        beta = vector.dot(pair.graddelta, q) / pair.curvature
        vector.add_in_place(q, pair.xdelta, alpha - beta)
    return q


class TwoLoopRecursion:
    """
    Inverse-Hessian strategy keeping the last ``max_history`` secant pairs.

    Each call to :meth:`update` records the pair formed with the previous
    iterate, then returns an operator applying the two-loop recursion over
    the current window. The initial scaling ``gamma`` comes from the newest
    pair, ``s.y / y.y``, and is 1 while the window is empty, so a zero-sized
    window reduces to gradient descent.
    """

    def __init__(self, max_history: int) -> None:
        if max_history < 0:
            raise ValueError("max_history must be non-negative")
        self.max_history = max_history
        self.pairs: Deque[SecantPair] = deque(maxlen=max_history)
        self._last_x: Optional[Array] = None
        self._last_grad: Optional[Array] = None

    @property
    def gamma(self) -> float:
        if not self.pairs:
            return 1.0
        newest = self.pairs[-1]
        return newest.curvature / vector.l2(newest.graddelta)

    def update(self, x: Array, grad: Array) -> InverseHessianMultiply:
        if self.max_history > 0 and self._last_x is not None:
            self._record(x, grad)
        self._last_x = np.array(x, dtype=float)
        self._last_grad = np.array(grad, dtype=float)
        pairs = tuple(self.pairs)
        gamma = self.gamma

        def multiply(g: Array) -> Array:
            return two_loop_recursion(pairs, g, gamma)

        return multiply

    def _record(self, x: Array, grad: Array) -> None:
        xdelta = vector.add(x, self._last_x, 1.0, -1.0)
        graddelta = vector.add(grad, self._last_grad, 1.0, -1.0)
        curvature = vector.dot(xdelta, graddelta)
        if curvature <= 0:
            raise CurvatureError(
                f"Non-positive curvature {curvature:.3g}: the secant pair would "
                "make the inverse Hessian approximation indefinite"
            )
        self.pairs.append(SecantPair(xdelta, graddelta, curvature))
        logger.debug(
            "stored secant pair %d/%d, curvature %.3g",
            len(self.pairs),
            self.max_history,
            curvature,
        )


class LBFGS:
    """L-BFGS minimizer; ``max_history`` is the number of secant pairs kept."""

    def __init__(self, options: Optional[NewtonOptions], max_history: int) -> None:
        if max_history < 0:
            raise ValueError("max_history must be non-negative")
        self.options = options if options is not None else NewtonOptions()
        self.max_history = max_history

    def minimize(self, f: GradientFn) -> OptimizeResult:
        return newton_minimize(f, TwoLoopRecursion(self.max_history), self.options)


def lbfgs(
    f: GradientFn, m: int, x0: Optional[Array] = None, **options: Any
) -> OptimizeResult:
    """Minimize ``f`` with an ``m``-pair L-BFGS; keyword arguments become :class:`NewtonOptions`."""
    return LBFGS(NewtonOptions(init_guess=x0, **options), m).minimize(f)


__all__ = ["LBFGS", "SecantPair", "TwoLoopRecursion", "lbfgs", "two_loop_recursion"]
