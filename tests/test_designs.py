import numpy as np
import pytest

from gpbo.misc import designs
from gpbo.misc.testfunctions import (
    forrester,
    braninhoo,
    branin_normalized,
    FORRESTER_MINIMUM,
    FORRESTER_MINIMIZER,
    BRANIN_MINIMUM,
)


@pytest.mark.parametrize("method", ["lhs", "sobol", "halton", "uniform"])
def test_designs_in_unit_cube(method):
    x = designs.sample(10, 3, method, np.random.default_rng(0))
    assert x.shape == (10, 3)
    assert np.all((x >= 0.0) & (x <= 1.0))
    assert designs.mindist(x) > 0.0


def test_lhs_strata():
    x = designs.lhs(2, 8, np.random.default_rng(1))
    for j in range(2):
        np.testing.assert_array_equal(np.sort(np.floor(x[:, j] * 8)), np.arange(8))


def test_quasi_random_designs_are_deterministic():
    np.testing.assert_array_equal(designs.sobol(2, 5), designs.sobol(2, 5))
    # the origin is skipped
    assert not np.any(np.all(designs.halton(2, 5) == 0.0, axis=1))


def test_random_designs_follow_the_generator():
    a = designs.sample(4, 2, "uniform", np.random.default_rng(3))
    b = designs.sample(4, 2, "uniform", np.random.default_rng(3))
    np.testing.assert_array_equal(a, b)
    with pytest.raises(ValueError):
        designs.sample(4, 2, "grid", np.random.default_rng(3))


def test_test_functions():
    assert forrester(FORRESTER_MINIMIZER)[0] == pytest.approx(FORRESTER_MINIMUM, abs=1e-5)
    np.testing.assert_allclose(
        braninhoo(np.array([[-np.pi, 12.275], [np.pi, 2.275], [9.42478, 2.475]])),
        BRANIN_MINIMUM,
        atol=1e-5,
    )
    x = np.array([(np.pi + 5.0) / 15.0, 2.275 / 15.0])
    assert branin_normalized(x)[0] == pytest.approx(BRANIN_MINIMUM, abs=1e-5)


def test_scale_maps_the_unit_cube_to_the_box():
    box = [[-5.0, 0.0], [10.0, 15.0]]
    X = designs.scale(np.array([[0.0, 0.0], [1.0, 1.0], [0.5, 0.2]]), box)
    np.testing.assert_allclose(X, [[-5.0, 0.0], [10.0, 15.0], [2.5, 3.0]])
