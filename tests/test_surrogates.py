import numpy as np
import pytest

import gpbo.num as gnp
from gpbo.core import DEFAULT_SURROGATES, create_surrogate
from gpbo.errors import DimensionMismatch, NotPositiveDefinite, NotReady, UnsupportedName
from gpbo.parameters import BOptParams, KernelParameters, MeanParameters

SURROGATES = sorted(DEFAULT_SURROGATES)


def _params(surr_name, **kwargs):
    kwargs.setdefault("kernel", KernelParameters("kMaternISO5", hp_mean=[0.4], hp_std=[1.0]))
    kwargs.setdefault("noise", 1e-8)
    return BOptParams(surr_name=surr_name, **kwargs)


def _data(n=10, dim=2, seed=0):
    rng = np.random.default_rng(seed)
    X = rng.random((n, dim))
    y = np.sin(3.0 * X[:, 0]) + X[:, 1] ** 2
    return X, y


@pytest.mark.parametrize("name", SURROGATES)
def test_incremental_update_matches_full_fit(name):
    X, y = _data(10)
    q = np.random.default_rng(5).random((7, 2))

    incremental = create_surrogate(2, _params(name))
    incremental.set_samples(X[:6], y[:6])
    incremental.fit_surrogate_model()
    for i in range(6, 10):
        incremental.update_surrogate_model(X[i], y[i])
    assert incremental.n_factorized == 6

    full = create_surrogate(2, _params(name))
    full.set_samples(X, y)
    full.fit_surrogate_model()

    np.testing.assert_allclose(incremental.cholesky_factor, full.cholesky_factor, atol=1e-8)
    m1, v1 = incremental.predict(q)
    m2, v2 = full.predict(q)
    np.testing.assert_allclose(m1, m2, rtol=1e-8, atol=1e-8)
    np.testing.assert_allclose(v1, v2, rtol=1e-8, atol=1e-8)
    assert incremental.dof == full.dof


@pytest.mark.parametrize("name", SURROGATES)
def test_interpolation(name):
    X, y = _data(8)
    s = create_surrogate(2, _params(name, noise=1e-10))
    s.set_samples(X, y)
    s.fit_surrogate_model()
    mean, var = s.predict(X)
    assert mean.shape == (8,) and var.shape == (8,)
    np.testing.assert_allclose(mean, y, atol=1e-4)
    assert np.all(var >= 0.0)
    assert np.all(var < 1e-4)
    # far from the data the variance is larger
    _, var_far = s.predict(np.array([[3.0, 3.0]]))
    assert var_far[0] > 10 * np.max(var)


def test_state_errors():
    s = create_surrogate(2, _params("sGaussianProcess"))
    with pytest.raises(NotReady):
        s.fit_surrogate_model()
    with pytest.raises(NotReady):
        s.predict([0.5, 0.5])
    X, y = _data(4)
    with pytest.raises(DimensionMismatch):
        s.set_samples(X, y[:3])
    with pytest.raises(DimensionMismatch):
        s.set_samples(X[:, :1], y)
    s.set_samples(X, y)
    with pytest.raises(NotReady):
        s.update_surrogate_model([0.1, 0.1], 0.0)
    s.fit_surrogate_model()
    with pytest.raises(DimensionMismatch):
        s.predict([0.5, 0.5, 0.5])
    s.add_sample([0.2, 0.2], 1.0)
    assert not s.is_fitted
    with pytest.raises(NotReady):
        s.predict([0.5, 0.5])


def test_minimum_tracking():
    s = create_surrogate(1, _params("sGaussianProcess", kernel=KernelParameters("kSEISO", [0.3])))
    s.set_samples([[0.0], [0.5], [1.0]], [2.0, -1.0, 3.0])
    s.fit_surrogate_model()
    assert s.get_value_at_minimum() == -1.0
    np.testing.assert_array_equal(s.get_point_at_minimum(), [0.5])
    s.update_surrogate_model([0.25], -2.0)
    assert s.get_value_at_minimum() == -2.0
    x, y = s.get_last_sample()
    np.testing.assert_array_equal(x, [0.25])
    assert y == -2.0
    x, y = s.get_sample(0)
    assert y == 2.0


def test_failed_update_leaves_model_unchanged():
    params = _params(
        "sGaussianProcess",
        kernel=KernelParameters("kConst", [1.0]),
        mean=MeanParameters("mZero"),
        noise=0.0,
    )
    s = create_surrogate(1, params)
    s.set_samples([[0.0]], [1.0])
    s.fit_surrogate_model()
    before = s.predict([[0.3]])
    with pytest.raises(NotPositiveDefinite):
        s.update_surrogate_model([0.5], 2.0)
    assert s.n_samples == 1
    assert s.is_fitted
    after = s.predict([[0.3]])
    np.testing.assert_array_equal(before[0], after[0])
    np.testing.assert_array_equal(before[1], after[1])


def test_degrees_of_freedom():
    X, y = _data(9)
    jef = create_surrogate(2, _params("sStudentTProcessJef"))
    jef.set_samples(X, y)
    assert jef.dof is None
    jef.fit_surrogate_model()
    assert jef.dof == 9 - 1

    nig = create_surrogate(2, _params("sStudentTProcessNIG", alpha=2.0, beta=0.5))
    nig.set_samples(X, y)
    nig.fit_surrogate_model()
    assert nig.dof == pytest.approx(2.0 * (2.0 + 9 / 2))

    gp = create_surrogate(2, _params("sGaussianProcessML"))
    gp.set_samples(X, y)
    gp.fit_surrogate_model()
    assert gp.dof is None


def test_jeffreys_needs_more_samples_than_features():
    s = create_surrogate(1, _params("sStudentTProcessJef", kernel=KernelParameters("kSEISO", [0.3])))
    s.set_samples([[0.5]], [1.0])
    with pytest.raises(NotReady):
        s.fit_surrogate_model()
    assert not s.is_fitted


def test_signal_variance_scales_known_scale_variance():
    X, y = _data(6)
    q = np.array([[0.9, 0.1]])
    variances = []
    for sigma_s in (1.0, 4.0):
        s = create_surrogate(2, _params("sGaussianProcess", sigma_s=sigma_s))
        s.set_samples(X, y)
        s.fit_surrogate_model()
        variances.append(s.predict(q)[1][0])
    assert variances[1] == pytest.approx(4.0 * variances[0])


@pytest.mark.parametrize("name", SURROGATES)
@pytest.mark.parametrize("sc_type", ["ml", "map"])
def test_likelihood_gradient(name, sc_type):
    X, y = _data(8, seed=3)
    params = _params(
        name,
        kernel=KernelParameters("kMaternARD5", hp_mean=[0.5, 0.8], hp_std=[1.0]),
        noise=1e-6,
        sc_type=sc_type,
    )
    s = create_surrogate(2, params)
    s.set_samples(X, y)
    p0 = np.log(np.array([0.4, 0.6]))
    _, dJ = s.negative_log_likelihood(p0)
    for j in range(2):

        def f(t):
            p = p0.copy()
            p[j] = t
            return s.negative_log_likelihood(p)[0]

        fd = gnp.derivative_finite_diff(f, p0[j], 1e-5)
        assert dJ[j] == pytest.approx(fd, rel=1e-5, abs=1e-6)


def test_map_criterion_subtracts_log_prior():
    X, y = _data(8)
    common = dict(kernel=KernelParameters("kSEISO", [0.5], [0.2]), noise=1e-6)
    ml = create_surrogate(2, _params("sGaussianProcessML", sc_type="ml", **common))
    map_ = create_surrogate(2, _params("sGaussianProcessML", sc_type="map", **common))
    for s in (ml, map_):
        s.set_samples(X, y)
    p = np.log([0.3])
    J_ml, _ = ml.negative_log_likelihood(p)
    J_map, _ = map_.negative_log_likelihood(p)
    assert J_map == pytest.approx(J_ml - map_.log_prior())


@pytest.mark.parametrize("name", ["sGaussianProcessML", "sStudentTProcessJef"])
def test_learning_decreases_criterion(name):
    X, y = _data(12, seed=4)
    s = create_surrogate(2, _params(name, kernel=KernelParameters("kMaternARD5", [0.2], [1.0]), noise=1e-6))
    s.set_samples(X, y)
    theta0 = s.get_hyperparameters()
    J0, _ = s.negative_log_likelihood(np.log(theta0))
    s.set_hyperparameters(theta0)
    s.update_hyper_parameters()
    assert s.is_fitted
    J1, _ = s.negative_log_likelihood(np.log(s.get_hyperparameters()))
    assert J1 <= J0


def test_fixed_hyperparameters_stay_fixed():
    X, y = _data(10)
    kernel = KernelParameters("kMaternARD5", hp_mean=[0.3, 0.7], hp_std=[1.0, 0.0])
    s = create_surrogate(2, _params("sGaussianProcessML", kernel=kernel))
    s.set_samples(X, y)
    s.update_hyper_parameters()
    assert s.get_hyperparameters()[1] == pytest.approx(0.7, rel=1e-12)


def test_fixed_learning_type_only_fits():
    X, y = _data(6)
    s = create_surrogate(2, _params("sGaussianProcessML", l_type="fixed"))
    s.set_samples(X, y)
    s.update_hyper_parameters()
    np.testing.assert_array_equal(s.get_hyperparameters(), [0.4])
    assert s.is_fitted


def test_unknown_surrogate():
    with pytest.raises(UnsupportedName) as excinfo:
        create_surrogate(1, BOptParams(surr_name="sNope"))
    assert excinfo.value.kind == "surrogate"
    assert excinfo.value.name == "sNope"


def test_sample_index_out_of_range():
    s = create_surrogate(1, _params("sGaussianProcess", kernel=KernelParameters("kSEISO", [0.3])))
    s.set_samples([[0.0], [1.0]], [0.0, 1.0])
    with pytest.raises(IndexError):
        s.get_sample(2)


@pytest.mark.parametrize("name", ["sGaussianProcessNormal", "sStudentTProcessNIG"])
def test_unit_mean_coefficient_is_not_estimated(name):
    X, _ = _data(8)
    y = np.full(8, 10.0)
    mean = MeanParameters("mOne", coef_mean=[5.0], coef_std=[1000.0])
    s = create_surrogate(2, _params(name, mean=mean))
    s.set_samples(X, y)
    s.fit_surrogate_model()
    np.testing.assert_allclose(s.mean_coefficients, [1.0], atol=1e-6)
    far, _ = s.predict(np.array([[50.0, 50.0]]))
    assert far[0] == pytest.approx(1.0, abs=1e-6)


def test_likelihood_evaluation_invalidates_fit():
    X, y = _data(8)
    s = create_surrogate(2, _params("sGaussianProcessML"))
    s.set_samples(X, y)
    s.fit_surrogate_model()
    s.negative_log_likelihood(np.log([0.6]))
    np.testing.assert_allclose(s.get_hyperparameters(), [0.6])
    assert not s.is_fitted
    with pytest.raises(NotReady):
        s.predict(X)
    s.fit_surrogate_model()
    mean, _ = s.predict(X)
    np.testing.assert_allclose(mean, y, atol=1e-4)
