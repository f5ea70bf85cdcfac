# gpbo/core/kriging.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Posterior coefficients and predictive moments shared by the surrogates.

Notation: L is the lower Cholesky factor of the correlation matrix K
of the samples (regularizer included), y the outputs and F the (n, p)
matrix of mean features. Whitened quantities are

    ly = L^{-1} y,    KF = L^{-1} F,    v = L^{-1} k(X, q).

Functions
---------
whiten(L, y, F)
    Return (ly, KF).
generalized_least_squares(KF, ly, prior_precision=None, prior_term=None)
    Coefficients of the mean and Cholesky factor of the normal matrix.
universal_kriging_correction(A_chol, KF, v, Fq)
    Extra variance due to the estimation of the mean coefficients.
"""
import gpbo.num as gnp
from .linalg import factorize, solve_lower


def whiten(L, y, F):
    return solve_lower(L, y), solve_lower(L, F)


def generalized_least_squares(KF, ly, prior_precision=None, prior_term=None):
    """Solve the (possibly regularized) normal equations for the mean coefficients.

    .. math::
        A = KF^T KF + B_0^{-1}, \\qquad A\\, w = KF^T ly + B_0^{-1} w_0

    Parameters
    ----------
    KF : array_like, shape (n, p)
    ly : array_like, shape (n,)
    prior_precision : array_like, shape (p,), optional
        Diagonal of B_0^{-1}. None for plain GLS.
    prior_term : array_like, shape (p,), optional
        B_0^{-1} w_0.

    Returns
    -------
    w : array_like, shape (p,)
        Coefficients (empty when p == 0).
    A_chol : array_like, shape (p, p)
        Lower Cholesky factor of A.

    Raises
    ------
    NotPositiveDefinite
        If A is singular (features not identifiable from the samples).
    """
    p = KF.shape[1]
    if p == 0:
        return gnp.zeros(0), gnp.zeros((0, 0))
    A = gnp.matmul(KF.T, KF)
    b = gnp.matmul(KF.T, ly)
    if prior_precision is not None:
        A = A + gnp.diag(prior_precision)
        b = b + prior_term
    A_chol = factorize(A)
    w = gnp.cholesky_solve_factored(A_chol, b)
    return w, A_chol


def universal_kriging_correction(A_chol, KF, v, Fq):
    """Variance term ||A_chol^{-1} (f_q - KF^T v)||^2 for every query.

    Parameters
    ----------
    A_chol : array_like, shape (p, p)
    KF : array_like, shape (n, p)
    v : array_like, shape (n, m)
    Fq : array_like, shape (m, p)

    Returns
    -------
    array_like, shape (m,)
    """
    if A_chol.shape[0] == 0:
        return gnp.zeros(v.shape[1])
    R = Fq.T - gnp.matmul(KF.T, v)
    rho = solve_lower(A_chol, R)
    return gnp.sum(rho * rho, axis=0)


def reduced_variance(kqq, v):
    """kqq - ||v||^2 for every query (v has one column per query)."""
    return kqq - gnp.sum(v * v, axis=0)
