import numpy as np
import pytest

from sparse_lp.sparse.lp_negative import surrogate_gradient, surrogate_objective


@pytest.mark.parametrize("theta,p", [(0.5, -1.0), (3.0, -0.5), (1000.0, -2.0)])
def test_gradient_vanishes_at_zero(theta, p):
    grad = surrogate_gradient(np.zeros(4), theta, p)
    assert np.array_equal(grad, np.zeros(4))


def test_gradient_matches_closed_form():
    grad = surrogate_gradient(np.array([2.0, -2.0, 0.0]), 0.5, -1.0)
    # -p * theta * (1 - (1 + theta * 2)^(p - 1)) = 0.5 * (1 - 2^-2)
    assert grad == pytest.approx([0.375, -0.375, 0.0])


def test_objective_matches_closed_form():
    value = surrogate_objective(np.array([2.0, 0.0, -1.0]), 1.0, -1.0)
    assert value == pytest.approx((1 - 1 / 3) + (1 - 1 / 2))


def test_objective_is_nonnegative():
    rng = np.random.default_rng(7)
    for _ in range(20):
        x = rng.normal(scale=5.0, size=6)
        assert surrogate_objective(x, rng.uniform(0.01, 100.0), -rng.uniform(0.1, 3.0)) >= 0.0


def test_objective_grows_with_theta():
    x = np.array([0.3, 0.0, -4.0])
    values = [surrogate_objective(x, theta, -1.0) for theta in (0.1, 0.5, 2.0, 10.0)]
    assert all(lo < hi for lo, hi in zip(values, values[1:]))


def test_objective_approaches_cardinality():
    x = np.array([1.0, 0.0, 3.0, 0.0])
    assert surrogate_objective(x, 1e7, -1.0) == pytest.approx(2.0, abs=1e-6)


def test_large_theta_does_not_overflow():
    x = np.array([1e300, -1e300])
    with np.errstate(over="raise", invalid="raise", divide="raise"):
        grad = surrogate_gradient(x, 1000.0, -1.0)
    assert np.all(np.isfinite(grad))
    assert grad == pytest.approx([1000.0, -1000.0])
