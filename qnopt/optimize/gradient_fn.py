"""Objective wrappers: a plain value-and-gradient function and a bounded cache."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque

import numpy as np

from .core import Array, EvalFn, GradientFn


@dataclass(frozen=True)
class GradientFunction:
    """Objective built from a dimension and a function returning ``(f(x), grad)``."""

    dim: int
    fun: EvalFn

    def __post_init__(self) -> None:
        if self.dim <= 0:
            raise ValueError("dim must be positive")

    def evaluate_at(self, x: Array) -> tuple[float, Array]:
        if len(x) != self.dim:
            raise ValueError(f"Expected a point of length {self.dim}, got {len(x)}")
        val, grad = self.fun(x)
        grad = np.asarray(grad, dtype=float)
        if grad.shape != (self.dim,):
            raise ValueError(
                f"Gradient has shape {grad.shape}, expected ({self.dim},)"
            )
        return float(val), grad

    def dimension(self) -> int:
        return self.dim


@dataclass(frozen=True)
class _CacheEntry:
    input: Array
    val: float
    grad: Array


class CachingGradientFunction:
    """
    Memoize the most recent evaluations of another objective.

    Lookup is by exact element-wise equality of the input, so only repeated
    evaluations of an identical point hit the cache. Entries are kept
    most-recent-first; once more than ``max_to_cache`` distinct points have
    been seen the oldest one is evicted. ``max_to_cache=0`` turns the cache
    off entirely.
    """

    def __init__(self, fn: GradientFn, max_to_cache: int) -> None:
        if max_to_cache < 0:
            raise ValueError("max_to_cache must be non-negative")
        self.fn = fn
        self.max_to_cache = max_to_cache
        self._entries: Deque[_CacheEntry] = deque()
        self.hits = 0
        self.misses = 0

    def evaluate_at(self, x: Array) -> tuple[float, Array]:
        for entry in self._entries:
            if np.array_equal(entry.input, x):
                self.hits += 1
                return entry.val, entry.grad.copy()
        self.misses += 1
        val, grad = self.fn.evaluate_at(x)
        if self.max_to_cache > 0:
            self._entries.appendleft(
                _CacheEntry(np.array(x, dtype=float), val, np.array(grad, dtype=float))
            )
            if len(self._entries) > self.max_to_cache:
                self._entries.pop()
        return val, grad

    def dimension(self) -> int:
        return self.fn.dimension()

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def new_gradient_fn(dim: int, fun: EvalFn) -> GradientFunction:
    """Build an objective from its dimension and a ``x -> (f(x), grad)`` function."""
    return GradientFunction(dim=dim, fun=fun)


def new_caching_gradient_fn(max_to_cache: int, fn: GradientFn) -> CachingGradientFunction:
    """Wrap ``fn`` in a cache holding at most ``max_to_cache`` evaluations."""
    return CachingGradientFunction(fn, max_to_cache)


__all__ = [
    "CachingGradientFunction",
    "GradientFunction",
    "new_caching_gradient_fn",
    "new_gradient_fn",
]
