"""Length-checked vector arithmetic on 1-D NumPy arrays.

NumPy broadcasting would happily stretch a length-1 operand across a longer
one. The optimizers never want that, so every binary operation here insists
on equal lengths and raises ``ValueError`` otherwise.

Note that :func:`l2` returns the sum of squares, not its square root.
"""

from __future__ import annotations

import numpy as np

Array = np.ndarray


def check_equal_len(xs: Array, ys: Array) -> None:
    """Raise ``ValueError`` if ``xs`` and ``ys`` differ in length."""
    if len(xs) != len(ys):
        raise ValueError(f"Lengths not equal: {len(xs)} {len(ys)}")


def dot(xs: Array, ys: Array) -> float:
    check_equal_len(xs, ys)
    return float(np.dot(xs, ys))


def add(xs: Array, ys: Array, alpha: float = 1.0, beta: float = 1.0) -> Array:
    """Return ``alpha * xs + beta * ys`` as a new array."""
    check_equal_len(xs, ys)
    return alpha * np.asarray(xs, dtype=float) + beta * np.asarray(ys, dtype=float)


def add_in_place(accum: Array, xs: Array, alpha: float = 1.0) -> None:
    """Accumulate ``accum += alpha * xs``."""
    check_equal_len(accum, xs)
    accum += alpha * np.asarray(xs, dtype=float)


def scale(xs: Array, alpha: float) -> Array:
    return alpha * np.asarray(xs, dtype=float)


def scale_in_place(xs: Array, alpha: float) -> None:
    xs *= alpha


def l2(xs: Array) -> float:
    """Sum of squared components."""
    xs = np.asarray(xs, dtype=float)
    return float(np.dot(xs, xs))


def l1(xs: Array) -> float:
    """Sum of absolute components."""
    return float(np.sum(np.abs(xs)))


__all__ = [
    "Array",
    "add",
    "add_in_place",
    "check_equal_len",
    "dot",
    "l1",
    "l2",
    "scale",
    "scale_in_place",
]
