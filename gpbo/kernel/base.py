# gpbo/kernel/base.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Base classes of the kernel tree.

A kernel is either a primitive, which owns a vector of positive
hyperparameters theta, or a combinator (see `combined`) which owns two
children. Gradients are partial derivatives with respect to
log(theta[index]); the hyperparameter index space of a tree is the
left-to-right concatenation of the index spaces of its primitives.

Subclasses implement the vectorized methods `matrix`,
`gradient_matrix` and `diag`; `value` and `gradient` evaluate a single
pair of points through them.
"""
import gpbo.num as gnp
from gpbo.errors import DimensionMismatch


def _as_rows(x, dim):
    x = gnp.asarray(x)
    if x.ndim == 1:
        x = x.reshape(1, -1)
    if x.ndim != 2 or x.shape[1] != dim:
        raise DimensionMismatch(
            f"expected points of dimension {dim}, got array of shape {tuple(x.shape)}"
        )
    return x


class Kernel:
    """Abstract covariance function k(x1, x2) on R^dim."""

    name = "kernel"

    def __init__(self, dim):
        if int(dim) < 1:
            raise ValueError("input dimension must be >= 1")
        self.dim = int(dim)

    # -- hyperparameters -------------------------------------------------

    @property
    def n_hyperparameters(self):
        raise NotImplementedError

    def get_hyperparameters(self):
        raise NotImplementedError

    def set_hyperparameters(self, theta):
        raise NotImplementedError

    @property
    def hyperparameters(self):
        return self.get_hyperparameters()

    @hyperparameters.setter
    def hyperparameters(self, theta):
        self.set_hyperparameters(theta)

    # -- vectorized evaluation -------------------------------------------

    def matrix(self, X1, X2):
        """Kernel matrix, shape (n1, n2)."""
        raise NotImplementedError

    def gradient_matrix(self, X1, X2, index):
        """d k / d log(theta[index]) for every pair, shape (n1, n2)."""
        raise NotImplementedError

    def diag(self, X):
        """k(x, x) for every row of X, shape (n,)."""
        X = _as_rows(X, self.dim)
        return gnp.einsum("ii->i", self.matrix(X, X)).copy()

    # -- pointwise evaluation --------------------------------------------

    def value(self, x1, x2):
        x1 = _as_rows(x1, self.dim)
        x2 = _as_rows(x2, self.dim)
        return float(self.matrix(x1, x2)[0, 0])

    def gradient(self, x1, x2, index):
        self._check_index(index)
        x1 = _as_rows(x1, self.dim)
        x2 = _as_rows(x2, self.dim)
        return float(self.gradient_matrix(x1, x2, index)[0, 0])

    def __call__(self, x1, x2):
        return self.value(x1, x2)

    def _check_index(self, index):
        if not 0 <= index < self.n_hyperparameters:
            raise IndexError(
                f"hyperparameter index {index} out of range "
                f"[0, {self.n_hyperparameters}) for {self}"
            )


class PrimitiveKernel(Kernel):
    """Kernel with its own hyperparameter vector theta (all positive)."""

    def __init__(self, dim):
        super().__init__(dim)
        self._theta = gnp.ones(self.n_hyperparameters)

    def get_hyperparameters(self):
        return gnp.copy(self._theta)

    def set_hyperparameters(self, theta):
        theta = gnp.atleast_1d(gnp.asarray(theta, dtype=gnp.float64)).ravel()
        if theta.shape[0] != self.n_hyperparameters:
            raise DimensionMismatch(
                f"{self.name} expects {self.n_hyperparameters} hyperparameter(s), "
                f"got {theta.shape[0]}"
            )
        if gnp.any(theta <= 0.0) or not gnp.all(gnp.isfinite(theta)):
            raise ValueError(f"{self.name} hyperparameters must be positive and finite")
        self._theta = gnp.copy(theta)

    def __repr__(self):
        return f"{self.name}(theta={self._theta.tolist()})"

    def __str__(self):
        return self.name


class IsotropicKernel(PrimitiveKernel):
    """Primitive with a single scale parameter."""

    @property
    def n_hyperparameters(self):
        return 1

    def scaled_distance(self, X1, X2):
        r2 = gnp.sqeuclidean_distance(X1, X2)
        return gnp.sqrt(r2) / self._theta[0]


class ARDKernel(PrimitiveKernel):
    """Primitive with one length scale per input dimension."""

    @property
    def n_hyperparameters(self):
        return self.dim

    def scaled_distance(self, X1, X2):
        r2 = gnp.sqeuclidean_distance(X1 / self._theta, X2 / self._theta)
        return gnp.sqrt(r2)

    def scaled_sqdiff(self, X1, X2, j):
        """((x1_j - x2_j) / theta_j)^2 for every pair."""
        u = (X1[:, j][:, None] - X2[:, j][None, :]) / self._theta[j]
        return u * u
