# gpbo/bayesopt/discrete.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Bayesian optimization over a finite set of candidates.
"""
import numpy as np

from gpbo.errors import DimensionMismatch
from .base import BayesOptBase


class BayesOptDiscrete(BayesOptBase):
    """Minimize an objective over a finite candidate set.

    The criterion is computed at every candidate; unreachable
    candidates are never proposed and evaluated ones only once every
    other reachable candidate has been evaluated.

    Parameters
    ----------
    valid_set : array_like, shape (m, dim)
        Candidate points.
    params : BOptParams, optional
    objective : callable, optional
    """

    def __init__(self, valid_set, params=None, objective=None, **kwargs):
        valid_set = np.array(valid_set, dtype=float)
        if valid_set.ndim != 2 or valid_set.shape[0] == 0:
            raise DimensionMismatch("valid_set must be a non-empty (m, dim) array")
        super().__init__(valid_set.shape[1], params, objective, **kwargs)
        self.valid_set = valid_set
        if self.params.n_init_samples > valid_set.shape[0]:
            raise ValueError("n_init_samples exceeds the number of candidates")

    def sample_initial_points(self, n):
        idx = self.rng.choice(self.valid_set.shape[0], n, replace=False)
        return self.valid_set[idx]

    def _unevaluated(self, candidates):
        """Mask of the rows of `candidates` not yet in the sample set."""
        X = np.asarray(self.surrogate.samples.X)
        if X.shape[0] == 0:
            return np.ones(candidates.shape[0], dtype=bool)
        return ~np.any(np.all(candidates[:, None, :] == X[None, :, :], axis=2), axis=1)

    def random_point(self):
        reachable = np.array([self._is_reachable(x) for x in self.valid_set])
        if not np.any(reachable):
            raise ValueError("no reachable candidate")
        pool = reachable & self._unevaluated(self.valid_set)
        if not np.any(pool):
            pool = reachable
        idx = np.flatnonzero(pool)
        return self.valid_set[idx[self.rng.integers(idx.shape[0])]]

    def find_optimal(self):
        """Reachable candidate maximizing the criterion.

        Candidates already evaluated are skipped while others remain.
        """
        scores = np.asarray(self.evaluation_criterion(self.valid_set), dtype=float).copy()
        reachable = np.array([self._is_reachable(x) for x in self.valid_set])
        scores[~reachable | ~np.isfinite(scores)] = -np.inf
        if not np.any(np.isfinite(scores)):
            raise ValueError("no reachable candidate with a finite criterion")
        fresh = np.where(self._unevaluated(self.valid_set), scores, -np.inf)
        if np.any(np.isfinite(fresh)):
            scores = fresh
        return self.valid_set[int(np.argmax(scores))]


def optimize_discrete(func, valid_set, params=None):
    """Minimize `func` over the rows of `valid_set`.

    Returns
    -------
    y_min : float
    x_min : numpy.ndarray, shape (dim,)
    """
    bo = BayesOptDiscrete(valid_set, params, objective=func)
    x_min, y_min = bo.optimize()
    return y_min, x_min
