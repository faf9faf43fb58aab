"""Pytest configuration and shared fixtures for qnopt tests.

This module provides:
- A deterministic NumPy RNG fixture
- The small objectives most optimizer tests share
"""

import os

import numpy as np
import pytest

from qnopt.optimize import new_gradient_fn


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


def _x_squared(xs: np.ndarray) -> tuple[float, np.ndarray]:
    return xs[0] * xs[0], np.array([2 * xs[0]])


def _quartic(xs: np.ndarray) -> tuple[float, np.ndarray]:
    x, y = xs
    val = (x - 1.0) ** 4 + (y + 2.0) ** 4
    grad = np.array([4 * (x - 1.0) ** 3, 4 * (y + 2.0) ** 3])
    return val, grad


@pytest.fixture
def x_squared():
    """f(x) = x^2 in one dimension."""
    return new_gradient_fn(1, _x_squared)


@pytest.fixture
def quartic():
    """f(x, y) = (x - 1)^4 + (y + 2)^4, minimized at (1, -2)."""
    return new_gradient_fn(2, _quartic)
