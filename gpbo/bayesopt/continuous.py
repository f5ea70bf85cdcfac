# gpbo/bayesopt/continuous.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Bayesian optimization over a box.
"""
import numpy as np

from gpbo.errors import DimensionMismatch
from gpbo.misc import designs
from .base import BayesOptBase
from .inner import maximize_on_unit_cube


class BayesOptContinuous(BayesOptBase):
    """Minimize an objective over the box [lower_bound, upper_bound].

    The surrogate works in the unit hypercube; `evaluate_sample` and
    `check_reachability` receive points in the box.

    Parameters
    ----------
    dim : int
    params : BOptParams, optional
    lower_bound, upper_bound : array_like, shape (dim,), optional
        Box bounds, [0, 1]^dim by default.
    objective : callable, optional
        ``objective(x) -> float`` with x of shape (dim,).

    Examples
    --------
    >>> from gpbo.misc.testfunctions import forrester
    >>> from gpbo.parameters import BOptParams
    >>> bo = BayesOptContinuous(1, BOptParams(n_iterations=10), objective=forrester)
    >>> x_min, y_min = bo.optimize()
    """

    MAX_RANDOM_DRAWS = 1000

    def __init__(self, dim, params=None, lower_bound=None, upper_bound=None, objective=None, **kwargs):
        super().__init__(dim, params, objective, **kwargs)
        self.set_bounding_box(
            np.zeros(self.dim) if lower_bound is None else lower_bound,
            np.ones(self.dim) if upper_bound is None else upper_bound,
        )

    def set_bounding_box(self, lower_bound, upper_bound):
        lower_bound = np.asarray(lower_bound, dtype=float).reshape(-1)
        upper_bound = np.asarray(upper_bound, dtype=float).reshape(-1)
        if lower_bound.shape[0] != self.dim or upper_bound.shape[0] != self.dim:
            raise DimensionMismatch(f"bounds must have {self.dim} components")
        if np.any(upper_bound <= lower_bound):
            raise ValueError("upper bounds must be greater than lower bounds")
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound

    def remap(self, x):
        return self.lower_bound + np.asarray(x, dtype=float) * (self.upper_bound - self.lower_bound)

    def sample_initial_points(self, n):
        return designs.sample(n, self.dim, self.params.init_method, self.rng)

    def random_point(self):
        """Uniform point of the unit cube, redrawn while unreachable."""
        for _ in range(self.MAX_RANDOM_DRAWS):
            x = self.rng.random(self.dim)
            if self._is_reachable(x):
                return x
        raise ValueError(f"no reachable point found in {self.MAX_RANDOM_DRAWS} random draws")

    def find_optimal(self):
        x, _ = maximize_on_unit_cube(
            lambda x: self.evaluation_criterion(x)[0],
            self.dim,
            self.params.n_inner_iterations * self.dim,
            reachable=self._is_reachable,
        )
        return x


def optimize(func, dim, lower_bound, upper_bound, params=None):
    """Minimize `func` over a box.

    Returns
    -------
    y_min : float
    x_min : numpy.ndarray, shape (dim,)
    """
    bo = BayesOptContinuous(dim, params, lower_bound, upper_bound, objective=func)
    x_min, y_min = bo.optimize()
    return y_min, x_min
