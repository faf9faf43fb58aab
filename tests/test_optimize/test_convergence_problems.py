import numpy as np
import pytest

from qnopt.optimize import (
    LBFGS,
    NewtonOptions,
    gradient_descent,
    lbfgs,
    new_caching_gradient_fn,
    new_gradient_fn,
)


def logistic_objective(X, labels, reg):
    n = X.shape[0]

    def fun(w):
        margins = labels * (X @ w)
        loss = np.logaddexp(0.0, -margins).mean() + 0.5 * reg * float(w @ w)
        weights = -labels / (1.0 + np.exp(margins))
        grad = X.T @ weights / n + reg * w
        return float(loss), grad

    return new_gradient_fn(X.shape[1], fun)


@pytest.fixture
def logistic(rng):
    X = rng.normal(size=(60, 3))
    true_w = np.array([1.5, -2.0, 0.5])
    labels = np.where(X @ true_w + 0.3 * rng.normal(size=60) > 0, 1.0, -1.0)
    return logistic_objective(X, labels, reg=1.0)


def test_gradient_descent_and_lbfgs_agree_on_logistic_regression(logistic):
    res_gd = gradient_descent(logistic, tolerance=1e-10)
    res_lbfgs = lbfgs(logistic, 4, tolerance=1e-10)
    assert res_gd.success and res_lbfgs.success
    assert np.allclose(res_gd.x, res_lbfgs.x, atol=1e-3)
    _, grad = logistic.evaluate_at(res_lbfgs.x)
    assert float(grad @ grad) < 1e-6


@pytest.mark.parametrize("history", [0, 1, 5])
def test_lbfgs_values_never_increase(quartic, history):
    values = []
    opts = NewtonOptions(
        init_guess=np.array([-2.0, 3.0]),
        tolerance=1e-6,
        callback=lambda nit, x, fx: values.append(fx),
    )
    res = LBFGS(opts, history).minimize(quartic)
    assert res.fun < 1e-4
    assert values[-1] == res.fun
    assert all(b <= a for a, b in zip(values, values[1:]))


def test_cached_objective_gives_same_answer_with_fewer_calls(quartic):
    calls = {"n": 0}

    def counted(xs):
        calls["n"] += 1
        return quartic.evaluate_at(xs)

    f = new_caching_gradient_fn(4, new_gradient_fn(2, counted))
    opts = NewtonOptions(init_guess=np.zeros(2), tolerance=1e-5)
    cached = LBFGS(opts, 2).minimize(f)
    plain = LBFGS(opts, 2).minimize(quartic)
    assert np.array_equal(cached.x, plain.x)
    assert f.hits > 0
    assert calls["n"] == f.misses
    assert calls["n"] < plain.nfev
