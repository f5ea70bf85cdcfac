# gpbo/kernel/parameter_selection.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernel hyperparameter selection criteria and optimization helpers.

Hyperparameters are optimized in log scale. A selection criterion is a
function ``f(log_theta) -> (value, gradient)``; surrogates provide
their negative log marginal likelihood (or posterior) in that form.
"""

import time
import numpy as np
from scipy.optimize import minimize
import gpbo.num as gnp


# ---------------------- criterion + gradient maker --------------------
def make_selection_criterion_with_gradient(value_and_gradient):
    """
    Split a joint value/gradient function into two SciPy callables.

    Parameters
    ----------
    value_and_gradient : callable
        ``f(p) -> (J, dJ)``.

    Returns
    -------
    evaluate : callable
        ``p -> J``.
    gradient : callable
        ``p -> dJ``; reuses the result of the last `evaluate` call at
        the same point.

    Notes
    -----
    When the joint evaluation fails with a linear-algebra error,
    `evaluate` propagates it (`autoselect_parameters` maps it to +inf)
    and `gradient` returns zeros.
    """
    cache = {"p": None, "J": None, "dJ": None}

    def _compute(p):
        p = np.asarray(p, dtype=float)
        if cache["p"] is None or not np.array_equal(cache["p"], p):
            J, dJ = value_and_gradient(p)
            cache["p"], cache["J"], cache["dJ"] = p.copy(), float(J), np.asarray(dJ)
        return cache["J"], cache["dJ"]

    def evaluate(p):
        return _compute(p)[0]

    def gradient(p):
        try:
            return _compute(p)[1]
        except Exception as exc:
            if gnp._is_linalg_exception(exc):
                return np.zeros(len(p))
            raise

    return evaluate, gradient


# ------------------------------ optimizer -----------------------------
def autoselect_parameters(
    p0,
    criterion,
    gradient,
    bounds=None,
    bounds_auto=True,
    bounds_delta=10.0,
    info=False,
):
    """
    Minimize a scalar selection criterion with SciPy L-BFGS-B.

    Parameters
    ----------
    p0 : array_like
        Initial parameter vector (log scale).
    criterion : callable
        Objective function ``criterion(p) -> scalar``.
    gradient : callable
        Gradient function ``gradient(p) -> array_like``.
    bounds : sequence of tuple, optional
        Bounds passed to SciPy.
    bounds_auto : bool, default=True
        If True and ``bounds`` is None, construct local bounds around ``p0``
        using ``bounds_delta``.
    bounds_delta : float, default=10.0
        Half-width used for automatic local bounds.
    info : bool, default=False
        If True, return the full SciPy result object.

    Returns
    -------
    p_opt : array_like
        Best parameter vector found.
    info_ret : scipy.optimize.OptimizeResult or None
        Optimization diagnostics if ``info=True``, else None.

    Notes
    -----
    The full history of visited points is tracked; if the final SciPy
    result is worse than the best visited point, the best seen point is
    returned and ``best_value_returned`` is set to False.

    Criterion evaluations failing with a linear-algebra error are
    mapped to ``+inf`` so the optimization can continue. Other
    exceptions are re-raised.
    """
    tic = time.time()

    p0 = np.asarray(p0, dtype=float)
    safe_lower, safe_upper = -30.0, 30.0
    if bounds is None and bounds_auto:
        bounds = [
            (
                max(param - bounds_delta, safe_lower),
                min(param + bounds_delta, safe_upper),
            )
            for param in p0
        ]

    history_params, history_criterion = [], []
    best_params, best_criterion = None, float("inf")

    def record(p, J):
        nonlocal best_params, best_criterion
        history_params.append(p.copy())
        history_criterion.append(J)
        if J < best_criterion:
            best_criterion, best_params = J, p.copy()

    def criterion_with_history(p):
        try:
            J = criterion(p)
        except Exception as exc:
            if gnp._is_linalg_exception(exc):
                J = np.inf
            else:
                raise
        if not np.isfinite(J):
            J = np.inf
        record(p, J)
        return J

    options = dict(
        maxcor=20,
        ftol=1e-8,
        gtol=1e-6,
        maxfun=2000,
        maxiter=1000,
        maxls=40,
    )

    r = minimize(
        criterion_with_history,
        p0,
        method="L-BFGS-B",
        jac=gradient,
        bounds=bounds,
        options=options,
    )

    # ensure returning best seen
    if best_params is not None and not (r.fun <= best_criterion):
        r.x, r.fun, r.best_value_returned = best_params, best_criterion, False
    else:
        r.best_value_returned = True

    r.history_params = history_params
    r.history_criterion = history_criterion
    r.initial_params = p0
    r.final_params = r.x
    r.bounds = bounds
    r.selection_criterion = criterion
    r.total_time = time.time() - tic

    return (r.x, r) if info else (r.x, None)
