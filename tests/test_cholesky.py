import numpy as np
import pytest

from gpbo.core.linalg import factorize, extend, extension_row, solve_lower, CholeskyFactor
from gpbo.errors import NotPositiveDefinite


def _spd(n, seed=0):
    rng = np.random.default_rng(seed)
    A = rng.standard_normal((n, n))
    return A @ A.T + n * np.eye(n)


def test_factorize():
    K = _spd(6)
    L = factorize(K)
    np.testing.assert_allclose(L @ L.T, K, atol=1e-10)
    np.testing.assert_array_equal(np.triu(L, 1), 0.0)


def test_factorize_failing_pivot():
    K = np.array([[1.0, 0.0, 0.0], [0.0, 1.0, 1.0], [0.0, 1.0, 1.0]])
    with pytest.raises(NotPositiveDefinite) as excinfo:
        factorize(K)
    assert excinfo.value.pivot == 2
    assert isinstance(excinfo.value, np.linalg.LinAlgError)


def test_factorize_non_finite():
    K = np.eye(3)
    K[1, 1] = np.nan
    with pytest.raises(NotPositiveDefinite):
        factorize(K)


def test_extend_matches_full_factorization():
    K = _spd(7, seed=1)
    L = factorize(K[:4, :4])
    for i in range(4, 7):
        L = extend(L, K[i, :i], K[i, i])
    np.testing.assert_allclose(L, factorize(K), atol=1e-10)


def test_extend_from_empty():
    L = extend(np.zeros((0, 0)), np.zeros(0), 4.0)
    np.testing.assert_array_equal(L, [[2.0]])


def test_extension_failure():
    L = factorize(np.array([[1.0]]))
    with pytest.raises(NotPositiveDefinite) as excinfo:
        extension_row(L, [1.0], 1.0)
    assert excinfo.value.pivot == 1


def test_solve_lower():
    K = _spd(4, seed=2)
    L = factorize(K)
    B = np.arange(8.0).reshape(4, 2)
    np.testing.assert_allclose(L @ solve_lower(L, B), B, atol=1e-10)
    assert solve_lower(L, np.zeros((4, 0))).shape == (4, 0)


def test_cholesky_factor_growth():
    K = _spd(40, seed=3)
    cf = CholeskyFactor(capacity=2)
    cf.factorize(K[:1, :1])
    for i in range(1, 40):
        cf.append(K[i, :i], K[i, i])
    assert len(cf) == 40
    assert cf.capacity >= 40
    np.testing.assert_allclose(cf.matrix, factorize(K), atol=1e-9)
    with pytest.raises(ValueError):
        cf.matrix[0, 0] = 1.0


def test_cholesky_factor_failed_extension_leaves_factor_unchanged():
    cf = CholeskyFactor()
    cf.factorize(np.array([[1.0]]))
    before = np.array(cf.matrix)
    with pytest.raises(NotPositiveDefinite):
        cf.append([1.0], 1.0)
    assert len(cf) == 1
    np.testing.assert_array_equal(cf.matrix, before)
