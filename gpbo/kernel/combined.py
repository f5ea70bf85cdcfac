# gpbo/kernel/combined.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Sum and product of two kernels.

The combinator owns its two children; its hyperparameter vector is
the concatenation [theta_left, theta_right].
"""
import gpbo.num as gnp
from gpbo.errors import DimensionMismatch
from .base import Kernel


class CombinedKernel(Kernel):
    def __init__(self, left, right):
        if left.dim != right.dim:
            raise DimensionMismatch(
                f"cannot combine kernels of dimensions {left.dim} and {right.dim}"
            )
        super().__init__(left.dim)
        self.left = left
        self.right = right

    @property
    def n_hyperparameters(self):
        return self.left.n_hyperparameters + self.right.n_hyperparameters

    def get_hyperparameters(self):
        return gnp.concatenate(
            [self.left.get_hyperparameters(), self.right.get_hyperparameters()]
        )

    def set_hyperparameters(self, theta):
        theta = gnp.atleast_1d(gnp.asarray(theta, dtype=gnp.float64)).ravel()
        if theta.shape[0] != self.n_hyperparameters:
            raise DimensionMismatch(
                f"{self} expects {self.n_hyperparameters} hyperparameters, "
                f"got {theta.shape[0]}"
            )
        nl = self.left.n_hyperparameters
        self.left.set_hyperparameters(theta[:nl])
        self.right.set_hyperparameters(theta[nl:])

    def _split(self, index):
        """Return (child, local index, True if child is left)."""
        nl = self.left.n_hyperparameters
        if index < nl:
            return self.left, index, True
        return self.right, index - nl, False

    def __str__(self):
        return f"{self.name}({self.left}, {self.right})"

    def __repr__(self):
        return f"{self.name}({self.left!r}, {self.right!r})"


class KernelSum(CombinedKernel):
    name = "kSum"

    def matrix(self, X1, X2):
        return self.left.matrix(X1, X2) + self.right.matrix(X1, X2)

    def gradient_matrix(self, X1, X2, index):
        child, j, _ = self._split(index)
        return child.gradient_matrix(X1, X2, j)

    def diag(self, X):
        return self.left.diag(X) + self.right.diag(X)


class KernelProd(CombinedKernel):
    name = "kProd"

    def matrix(self, X1, X2):
        return self.left.matrix(X1, X2) * self.right.matrix(X1, X2)

    def gradient_matrix(self, X1, X2, index):
        child, j, is_left = self._split(index)
        other = self.right if is_left else self.left
        return child.gradient_matrix(X1, X2, j) * other.matrix(X1, X2)

    def diag(self, X):
        return self.left.diag(X) * self.right.diag(X)
