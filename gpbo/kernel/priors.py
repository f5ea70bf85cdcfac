# gpbo/kernel/priors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Priors on kernel hyperparameters.

Functions
---------
log_prior_normal
    Sum of independent normal log-densities on raw theta, skipping
    fixed components (zero std).
log_prior_normal_gradient
    Gradient of `log_prior_normal` with respect to log(theta).
"""
import gpbo.num as gnp


def log_prior_normal(theta, mu, std):
    """
    Compute independent normal log-prior on raw hyperparameters.

    Parameters
    ----------
    theta : array_like, shape (k,)
        Hyperparameters (positive).
    mu : array_like, shape (k,)
        Prior means.
    std : array_like, shape (k,)
        Prior standard deviations. Components with ``std == 0`` are
        considered fixed and do not contribute.

    Returns
    -------
    float
        Log-prior value.
    """
    theta = gnp.asarray(theta)
    mu = gnp.asarray(mu)
    std = gnp.asarray(std)
    free = std > 0.0
    if not gnp.any(free):
        return 0.0
    return float(gnp.sum(gnp.normal.logpdf(theta[free], loc=mu[free], scale=std[free])))


def log_prior_normal_gradient(theta, mu, std):
    """Gradient of `log_prior_normal` with respect to log(theta).

    d/dlog(theta) log N(theta; mu, s^2) = -(theta - mu) / s^2 * theta
    """
    theta = gnp.asarray(theta)
    mu = gnp.asarray(mu)
    std = gnp.asarray(std)
    free = std > 0.0
    grad = gnp.zeros(theta.shape)
    grad[free] = -(theta[free] - mu[free]) / std[free] ** 2 * theta[free]
    return grad
