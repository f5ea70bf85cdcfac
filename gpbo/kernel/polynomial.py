# gpbo/kernel/polynomial.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Non-stationary kernels: constant, linear and polynomial.

For the linear family theta is a scale on the inputs,
k(x1, x2) = <x1 / theta, x2 / theta>.
"""
import gpbo.num as gnp
from .base import IsotropicKernel, ARDKernel


class ConstKernel(IsotropicKernel):
    """k(x1, x2) = theta."""

    name = "kConst"

    def matrix(self, X1, X2):
        return gnp.full((X1.shape[0], X2.shape[0]), self._theta[0])

    def gradient_matrix(self, X1, X2, index):
        return self.matrix(X1, X2)

    def diag(self, X):
        return gnp.full((gnp.asarray(X).reshape(-1, self.dim).shape[0],), self._theta[0])


class LinearKernel(IsotropicKernel):
    name = "kLinear"

    def matrix(self, X1, X2):
        return gnp.matmul(X1, X2.T) / self._theta[0] ** 2

    def gradient_matrix(self, X1, X2, index):
        return -2.0 * self.matrix(X1, X2)


class LinearARDKernel(ARDKernel):
    name = "kLinearARD"

    def matrix(self, X1, X2):
        return gnp.matmul(X1 / self._theta, (X2 / self._theta).T)

    def gradient_matrix(self, X1, X2, index):
        t = self._theta[index]
        return -2.0 * gnp.outer(X1[:, index], X2[:, index]) / t**2


class PolynomialKernel(IsotropicKernel):
    """k(x1, x2) = (1 + <x1, x2> / theta^2)^degree."""

    degree = 1

    def matrix(self, X1, X2):
        z = gnp.matmul(X1, X2.T) / self._theta[0] ** 2
        return (1.0 + z) ** self.degree

    def gradient_matrix(self, X1, X2, index):
        z = gnp.matmul(X1, X2.T) / self._theta[0] ** 2
        p = self.degree
        return -2.0 * z * p * (1.0 + z) ** (p - 1)


def _polynomial_class(degree):
    return type(
        f"Polynomial{degree}Kernel",
        (PolynomialKernel,),
        {"name": f"kPoly{degree}", "degree": degree, "__module__": __name__},
    )


Polynomial1Kernel = _polynomial_class(1)
Polynomial2Kernel = _polynomial_class(2)
Polynomial3Kernel = _polynomial_class(3)
Polynomial4Kernel = _polynomial_class(4)
Polynomial5Kernel = _polynomial_class(5)
Polynomial6Kernel = _polynomial_class(6)
