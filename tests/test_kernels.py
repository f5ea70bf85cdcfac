import numpy as np
import pytest

import gpbo.num as gnp
from gpbo.kernel import DEFAULT_KERNELS, KernelFactory, create_kernel, KernelModel
from gpbo.kernel.exponential import squared_exponential_kernel
from gpbo.errors import DimensionMismatch, ParseError, StructureError
from gpbo.parameters import KernelParameters

PRIMITIVES = [name for name in DEFAULT_KERNELS if name not in ("kSum", "kProd")]


def _points(name, n, dim, seed=0):
    rng = np.random.default_rng(seed)
    if name == "kHamming":
        return rng.integers(0, 3, size=(n, dim)).astype(float)
    return rng.random((n, dim))


def _random_theta(kernel, seed=1):
    rng = np.random.default_rng(seed)
    return 0.5 + rng.random(kernel.n_hyperparameters)


@pytest.mark.parametrize("name", PRIMITIVES + ["kSum(kSEISO, kConst)", "kProd(kMaternARD5, kPoly2)"])
def test_gradient_matches_finite_differences(name):
    dim = 3
    k = create_kernel(name, dim)
    theta = _random_theta(k)
    k.set_hyperparameters(theta)
    X1 = _points(name, 4, dim, seed=2)
    X2 = _points(name, 5, dim, seed=3)

    for j in range(k.n_hyperparameters):

        def f(log_tj):
            t = theta.copy()
            t[j] = np.exp(log_tj)
            k.set_hyperparameters(t)
            return k.matrix(X1, X2)

        fd = gnp.derivative_finite_diff(f, np.log(theta[j]), 1e-5)
        k.set_hyperparameters(theta)
        np.testing.assert_allclose(k.gradient_matrix(X1, X2, j), fd, rtol=1e-6, atol=1e-8)


@pytest.mark.parametrize("name", PRIMITIVES)
def test_symmetry_and_diag(name):
    k = create_kernel(name, 2)
    k.set_hyperparameters(_random_theta(k))
    X = _points(name, 6, 2)
    K = k.matrix(X, X)
    np.testing.assert_allclose(K, K.T, atol=1e-12)
    np.testing.assert_allclose(k.diag(X), np.diag(K), atol=1e-12)


def test_sum_and_product_laws():
    X = _points("kSEISO", 5, 2)
    a = create_kernel("kSEISO", 2)
    b = create_kernel("kMaternISO3", 2)
    a.set_hyperparameters([0.3])
    b.set_hyperparameters([0.7])

    ksum = create_kernel("kSum(kSEISO, kMaternISO3)", 2)
    kprod = create_kernel("kProd(kSEISO, kMaternISO3)", 2)
    ksum.set_hyperparameters([0.3, 0.7])
    kprod.set_hyperparameters([0.3, 0.7])

    np.testing.assert_allclose(ksum.matrix(X, X), a.matrix(X, X) + b.matrix(X, X))
    np.testing.assert_allclose(kprod.matrix(X, X), a.matrix(X, X) * b.matrix(X, X))
    assert ksum.value(X[0], X[1]) == pytest.approx(a(X[0], X[1]) + b(X[0], X[1]))
    # the gradient of a sum with respect to a right-hand parameter only
    # involves the right child
    np.testing.assert_allclose(ksum.gradient_matrix(X, X, 1), b.gradient_matrix(X, X, 0))


def test_hyperparameter_concatenation():
    k = create_kernel("kSum(kSEARD, kProd(kConst, kMaternARD3))", 2)
    assert k.n_hyperparameters == 2 + 1 + 2
    theta = np.array([0.1, 0.2, 0.3, 0.4, 0.5])
    k.set_hyperparameters(theta)
    np.testing.assert_array_equal(k.get_hyperparameters(), theta)
    np.testing.assert_array_equal(k.right.left.get_hyperparameters(), [0.3])
    np.testing.assert_array_equal(k.right.right.get_hyperparameters(), [0.4, 0.5])


def test_known_values():
    k = create_kernel("kSEISO", 1)
    k.set_hyperparameters([2.0])
    assert k.value([0.0], [1.0]) == pytest.approx(np.exp(-0.5 * 0.25))
    assert squared_exponential_kernel(np.array([0.0]))[0] == 1.0

    m = create_kernel("kMaternISO1", 1)
    assert m.value([0.0], [1.0]) == pytest.approx(np.exp(-1.0))

    h = create_kernel("kHamming", 3)
    assert h.value([0, 1, 2], [0, 1, 1]) == pytest.approx(np.exp(-1.0))

    p = create_kernel("kPoly2", 2)
    assert p.value([1.0, 1.0], [1.0, 2.0]) == pytest.approx((1.0 + 3.0) ** 2)


def test_invalid_hyperparameters():
    k = create_kernel("kSEARD", 2)
    with pytest.raises(DimensionMismatch):
        k.set_hyperparameters([1.0])
    with pytest.raises(ValueError):
        k.set_hyperparameters([1.0, -1.0])
    with pytest.raises(IndexError):
        k.gradient([0.0, 0.0], [1.0, 1.0], 2)
    with pytest.raises(DimensionMismatch):
        k.value([0.0, 0.0, 0.0], [1.0, 1.0])


def test_factory_errors():
    f = KernelFactory()
    with pytest.raises(ParseError):
        f.create("kNope", 1)
    with pytest.raises(StructureError):
        f.create("kSum(kSEISO)", 1)
    with pytest.raises(StructureError):
        f.create("kSEISO(kConst)", 1)


def test_custom_registry():
    registry = dict(DEFAULT_KERNELS)
    registry["kMySE"] = DEFAULT_KERNELS["kSEISO"]
    k = KernelFactory(registry).create("kSum(kMySE, kConst)", 1)
    assert k.n_hyperparameters == 2
    with pytest.raises(ParseError):
        create_kernel("kMySE", 1)


def test_kernel_model_prior():
    model = KernelModel(2, KernelParameters("kSEARD", hp_mean=[1.0, 2.0], hp_std=[1.0, 0.0]))
    np.testing.assert_array_equal(model.get_hyperparameters(), [1.0, 2.0])
    np.testing.assert_array_equal(model.fixed, [False, True])
    # at the prior mean the log-prior is maximal
    assert model.log_prior() == pytest.approx(-0.5 * np.log(2 * np.pi))
    model.set_hyperparameters([1.5, 3.0])
    # the fixed component does not contribute
    expected = -0.5 * 0.25 - 0.5 * np.log(2 * np.pi)
    assert model.log_prior() == pytest.approx(expected)
    np.testing.assert_allclose(model.log_prior_gradient(), [-0.5 * 1.5, 0.0])


def test_kernel_model_matrices():
    model = KernelModel(1, KernelParameters("kSEISO", hp_mean=[0.5]))
    X = np.array([[0.0], [0.3], [0.9]])
    K = model.corr_matrix(X, 0.1)
    np.testing.assert_allclose(np.diag(K), 1.1)
    q = np.array([[0.2], [0.4]])
    assert model.cross_correlation(X, q).shape == (3, 2)
    np.testing.assert_allclose(model.self_correlation(q), [1.0, 1.0])
