import numpy as np
import pytest

from qnopt.optimize import LineSearchError, new_gradient_fn
from qnopt.optimize.line_search import BacktrackingLineSearch, backtracking_armijo


def test_line_search_minimizes_along_direction(x_squared):
    ls = BacktrackingLineSearch(alpha=0.5)
    step, fnval = ls.search(x_squared, np.array([1.0]), np.array([-1.0]))
    assert step == 1.0
    assert fnval == 0.0


def test_line_search_does_nothing_at_minimum(x_squared):
    ls = BacktrackingLineSearch(alpha=0.5)
    step, fnval = ls.search(x_squared, np.array([0.0]), np.array([1.0]))
    assert step == 0.0
    assert fnval == 0.0


def test_line_search_backtracks_geometrically(x_squared):
    ls = BacktrackingLineSearch(alpha=0.5)
    step, fnval = ls.search(x_squared, np.array([1.0]), np.array([-4.0]))
    assert step == 0.25
    assert fnval == 0.0


def test_line_search_ascent_direction_underflows(x_squared):
    ls = BacktrackingLineSearch(alpha=0.5)
    with pytest.raises(LineSearchError, match="Step-size underflow"):
        ls.search(x_squared, np.array([1.0]), np.array([1.0]))


def test_armijo_condition_holds_on_quadratic(rng):
    mat = rng.normal(size=(4, 4))
    A = mat @ mat.T + 4 * np.eye(4)
    f = new_gradient_fn(4, lambda x: (0.5 * float(x @ A @ x), A @ x))
    x = rng.normal(size=4)
    f0, grad = f.evaluate_at(x)
    direction = -grad
    step, fnval = backtracking_armijo(f, x, direction, alpha=0.5, beta=0.01)
    assert 0 < step <= 1.0
    assert fnval == pytest.approx(f.evaluate_at(x + step * direction)[0])
    assert fnval <= f0 + 0.01 * step * float(grad @ direction)


def test_backtracking_raises_on_invalid_params():
    with pytest.raises(ValueError):
        BacktrackingLineSearch(alpha=1.5)
    with pytest.raises(ValueError):
        BacktrackingLineSearch(alpha=0.5, beta=0.6)
    with pytest.raises(ValueError):
        BacktrackingLineSearch(alpha=0.5, min_step=0.0)
