# gpbo/bayesopt/inner.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Inner optimizer: maximization of the acquisition criterion on [0, 1]^d.

Global search with DIRECT followed by a bounded L-BFGS-B polish of the
best point. Both steps are deterministic.
"""
import numpy as np
from scipy.optimize import direct, minimize

# finite value returned for unreachable points
PENALTY = 1e100


def maximize_on_unit_cube(score, dim, n_evals, reachable=None, polish=True):
    """Maximize ``score(x) -> float`` over [0, 1]^dim.

    Parameters
    ----------
    score : callable
        Criterion at a single point of shape (dim,).
    dim : int
    n_evals : int
        Budget of criterion evaluations for DIRECT.
    reachable : callable, optional
        ``reachable(x) -> bool``; unreachable points are penalized.
    polish : bool, default=True
        Refine the DIRECT solution with L-BFGS-B.

    Returns
    -------
    x : numpy.ndarray, shape (dim,)
    value : float
        Criterion at x; -PENALTY if no reachable point was found.
    """
    bounds = [(0.0, 1.0)] * dim

    def f(x):
        if reachable is not None and not reachable(x):
            return PENALTY
        v = -float(score(x))
        if not np.isfinite(v):
            return PENALTY
        return v

    r = direct(f, bounds, maxfun=int(n_evals), maxiter=int(n_evals), locally_biased=True)
    x_best, f_best = np.clip(r.x, 0.0, 1.0), float(r.fun)

    if polish and f_best < PENALTY:
        r2 = minimize(
            f,
            x_best,
            method="L-BFGS-B",
            bounds=bounds,
            options={"maxiter": 50, "maxfun": 20 * (dim + 1)},
        )
        x2 = np.clip(r2.x, 0.0, 1.0)
        f2 = f(x2)
        if f2 < f_best:
            x_best, f_best = x2, f2

    return x_best, -f_best
