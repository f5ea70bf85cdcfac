import numpy as np
import pytest
from scipy.stats import norm, t

from gpbo.criteria import DEFAULT_CRITERIA, create_criterion
from gpbo.errors import UnsupportedName


def test_expected_improvement_gaussian():
    ei = create_criterion("cEI")
    mean = np.array([0.0, 1.0, -1.0])
    var = np.array([1.0, 4.0, 0.25])
    z = (0.0 - mean) / np.sqrt(var)
    expected = (0.0 - mean) * norm.cdf(z) + np.sqrt(var) * norm.pdf(z)
    np.testing.assert_allclose(ei(mean, var, 0.0), expected)
    assert ei(np.array([0.0]), np.array([1.0]), 0.0)[0] == pytest.approx(1.0 / np.sqrt(2 * np.pi))


def test_expected_improvement_zero_variance():
    ei = create_criterion("cEI")
    np.testing.assert_allclose(ei(np.array([1.0, -2.0]), np.zeros(2), 0.0), [0.0, 2.0])


def test_expected_improvement_student_t():
    ei = create_criterion("cEI")
    nu = 5.0
    mean, var, y_min = np.array([0.5]), np.array([2.0]), 0.0
    s = np.sqrt(var)
    z = (y_min - mean) / s
    expected = (y_min - mean) * t.cdf(z, nu) + s * (nu + z**2) / (nu - 1) * t.pdf(z, nu)
    np.testing.assert_allclose(ei(mean, var, y_min, dof=nu), expected)
    # converges to the Gaussian form
    np.testing.assert_allclose(ei(mean, var, y_min, dof=1e7), ei(mean, var, y_min), rtol=1e-5)


def test_expected_improvement_is_monotone():
    ei = create_criterion("cEI")
    # decreasing in the mean, increasing in the variance
    assert ei(np.array([0.0]), np.array([1.0]), 0.0) > ei(np.array([0.5]), np.array([1.0]), 0.0)
    assert ei(np.array([0.0]), np.array([2.0]), 0.0) > ei(np.array([0.0]), np.array([1.0]), 0.0)


def test_lower_confidence_bound():
    lcb = create_criterion("cLCB", [2.0])
    np.testing.assert_allclose(lcb(np.array([1.0]), np.array([4.0]), 0.0), [-(1.0 - 2.0 * 2.0)])
    default = create_criterion("cLCB")
    assert default.params == [1.0]


def test_probability_of_improvement():
    poi = create_criterion("cPOI", [0.0])
    np.testing.assert_allclose(poi(np.array([0.0]), np.array([1.0]), 0.0), [0.5])
    poi = create_criterion("cPOI")
    assert poi.params == [0.01]
    np.testing.assert_allclose(
        poi(np.array([0.0]), np.array([1.0]), 0.0, dof=3.0), t.cdf(-0.01, 3.0)
    )
    np.testing.assert_array_equal(poi(np.array([-1.0, 1.0]), np.zeros(2), 0.0), [1.0, 0.0])


def test_expected_return():
    er = create_criterion("cExpReturn")
    np.testing.assert_array_equal(er(np.array([1.0, -3.0]), np.ones(2), 0.0), [-1.0, 3.0])


def test_registry_and_errors():
    assert set(DEFAULT_CRITERIA) == {"cEI", "cLCB", "cPOI", "cExpReturn"}
    with pytest.raises(UnsupportedName):
        create_criterion("cNope")
    with pytest.raises(ValueError):
        create_criterion("cEI", [1.0])
