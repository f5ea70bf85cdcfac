# gpbo/core/likelihood.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Negative log-likelihoods of the kernel hyperparameters, with gradients.

Two forms are used by the surrogates:

- known scale: the covariance is sigma2 * K with sigma2 given and the
  residual is taken against the prior mean;
- profile: sigma2 is replaced by its maximum-likelihood estimate and
  the residual is the generalized-least-squares residual.

Gradients are with respect to log(theta), using
d K / d log(theta_j) from the kernel.
"""
import gpbo.num as gnp
from .linalg import factorize, solve_lower
from .kriging import whiten, generalized_least_squares


def _trace_and_quadratic_terms(kernel_model, X, L, r):
    """Return (K^{-1} r, [tr(K^{-1} dK_j)], [a^T dK_j a]) with a = K^{-1} r."""
    n = L.shape[0]
    a = gnp.cholesky_solve_factored(L, r)
    Linv = solve_lower(L, gnp.eye(n))
    Kinv = gnp.matmul(Linv.T, Linv)
    k = kernel_model.n_hyperparameters
    traces = gnp.zeros(k)
    quads = gnp.zeros(k)
    for j in range(k):
        dK = kernel_model.derivative_corr_matrix(X, j)
        traces[j] = gnp.sum(Kinv * dK)
        quads[j] = gnp.inner(a, gnp.matmul(dK, a))
    return a, traces, quads


def negative_log_likelihood_known_scale(kernel_model, X, y, m, regularizer, sigma2):
    """Negative log-likelihood (up to a constant) and its gradient.

    .. math::
        J = \\frac{1}{2\\sigma^2} r^T K^{-1} r + \\frac{1}{2} \\log|K|
            + \\frac{n}{2}\\log \\sigma^2, \\quad r = y - m

    Parameters
    ----------
    kernel_model : KernelModel
        Kernel with the trial hyperparameters already set.
    X : array_like, shape (n, d)
    y : array_like, shape (n,)
    m : array_like, shape (n,)
        Prior mean at X.
    regularizer : float
    sigma2 : float
        Known signal variance.

    Returns
    -------
    J : float
    dJ : array_like
        Gradient with respect to log(theta).
    """
    n = X.shape[0]
    K = kernel_model.corr_matrix(X, regularizer)
    L = factorize(K)
    r = y - m
    a, traces, quads = _trace_and_quadratic_terms(kernel_model, X, L, r)
    J = 0.5 * gnp.inner(r, a) / sigma2 + 0.5 * gnp.logdet_from_chol(L) + 0.5 * n * gnp.log(sigma2)
    dJ = 0.5 * traces - 0.5 * quads / sigma2
    return float(J), dJ


def negative_log_likelihood_profile(kernel_model, X, y, F, regularizer):
    """Profile negative log-likelihood (sigma2 and mean coefficients estimated).

    .. math::
        J = \\frac{n}{2} \\log \\hat\\sigma^2 + \\frac{1}{2} \\log|K|,
        \\quad \\hat\\sigma^2 = r^T K^{-1} r / n

    with r the generalized-least-squares residual. The dependence of
    the estimates on theta does not enter the gradient since they are
    stationary points.
    """
    n = X.shape[0]
    K = kernel_model.corr_matrix(X, regularizer)
    L = factorize(K)
    ly, KF = whiten(L, y, F)
    w, _ = generalized_least_squares(KF, ly)
    r = y - gnp.matmul(F, w)
    a, traces, quads = _trace_and_quadratic_terms(kernel_model, X, L, r)
    s2 = max(float(gnp.inner(r, a)) / n, gnp.eps)
    J = 0.5 * n * gnp.log(s2) + 0.5 * gnp.logdet_from_chol(L)
    dJ = 0.5 * traces - 0.5 * quads / s2
    return float(J), dJ
