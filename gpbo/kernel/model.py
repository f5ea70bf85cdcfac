# gpbo/kernel/model.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Kernel tree together with the prior on its hyperparameters.

`KernelModel` is what a surrogate holds: it builds the correlation
matrices the surrogate factorizes, and evaluates the normal log-prior
on the kernel hyperparameters.
"""
import gpbo.num as gnp
from gpbo.parameters import KernelParameters, broadcast_to
from .factory import DEFAULT_KERNELS, KernelFactory
from .priors import log_prior_normal, log_prior_normal_gradient


class KernelModel:
    """
    Parameters
    ----------
    dim : int
        Input dimension.
    params : KernelParameters, optional
        Kernel expression and prior. ``hp_mean`` is also the initial
        value of the hyperparameters.
    registry : Mapping, optional
        Kernel registry used to resolve names.
    """

    def __init__(self, dim, params=None, registry=DEFAULT_KERNELS):
        self.dim = int(dim)
        params = KernelParameters() if params is None else params
        self.kernel = KernelFactory(registry).create(params.name, self.dim)
        n = self.kernel.n_hyperparameters
        self.prior_mean = gnp.asarray(broadcast_to(params.hp_mean, n, "hp_mean"))
        self.prior_std = gnp.asarray(broadcast_to(params.hp_std, n, "hp_std"))
        self.kernel.set_hyperparameters(self.prior_mean)

    def __repr__(self):
        return f"KernelModel(dim={self.dim}, kernel={self.kernel!r})"

    # -- hyperparameters -------------------------------------------------

    @property
    def n_hyperparameters(self):
        return self.kernel.n_hyperparameters

    def get_hyperparameters(self):
        return self.kernel.get_hyperparameters()

    def set_hyperparameters(self, theta):
        self.kernel.set_hyperparameters(theta)

    @property
    def fixed(self):
        """Mask of hyperparameters with a zero prior std."""
        return self.prior_std <= 0.0

    # -- correlation matrices --------------------------------------------

    def corr_matrix(self, X, nugget=0.0):
        """K[i, j] = k(x_i, x_j) + nugget * [i == j]."""
        K = self.kernel.matrix(X, X)
        n = K.shape[0]
        K[gnp.arange(n), gnp.arange(n)] += nugget
        return K

    def derivative_corr_matrix(self, X, index):
        return self.kernel.gradient_matrix(X, X, index)

    def cross_correlation(self, X, q):
        """Correlation between every sample and each query point, shape (n, m)."""
        return self.kernel.matrix(X, q)

    def self_correlation(self, q):
        return self.kernel.diag(q)

    # -- prior -----------------------------------------------------------

    def log_prior(self):
        return log_prior_normal(self.get_hyperparameters(), self.prior_mean, self.prior_std)

    def log_prior_gradient(self):
        """Gradient of `log_prior` with respect to log(theta)."""
        return log_prior_normal_gradient(
            self.get_hyperparameters(), self.prior_mean, self.prior_std
        )
