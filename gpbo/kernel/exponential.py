# gpbo/kernel/exponential.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gpbo.num as gnp
from .base import IsotropicKernel, ARDKernel
from .matern import _StationaryMixin


def squared_exponential_kernel(r2):
    """Squared-exponential kernel.

    .. math::
        k(r) = \\exp(-r^2 / 2)

    Parameters
    ----------
    r2 : gnp.array
        Squared scaled distances.

    Returns
    -------
    gnp.array
        Kernel values.
    """
    return gnp.exp(-0.5 * r2)


def rational_quadratic_kernel(r2, alpha=1.0):
    """Rational-quadratic kernel.

    .. math::
        k(r) = (1 + r^2 / (2\\alpha))^{-\\alpha}
    """
    return (1.0 + r2 / (2.0 * alpha)) ** (-alpha)


class SEISO(_StationaryMixin, IsotropicKernel):
    name = "kSEISO"

    def _r2(self, X1, X2):
        return gnp.sqeuclidean_distance(X1, X2) / self._theta[0] ** 2

    def matrix(self, X1, X2):
        return squared_exponential_kernel(self._r2(X1, X2))

    def gradient_matrix(self, X1, X2, index):
        r2 = self._r2(X1, X2)
        return r2 * squared_exponential_kernel(r2)


class SEARD(_StationaryMixin, ARDKernel):
    name = "kSEARD"

    def matrix(self, X1, X2):
        return squared_exponential_kernel(self.scaled_distance(X1, X2) ** 2)

    def gradient_matrix(self, X1, X2, index):
        k = self.matrix(X1, X2)
        return self.scaled_sqdiff(X1, X2, index) * k


class RQISO(_StationaryMixin, IsotropicKernel):
    """Rational-quadratic kernel with fixed shape alpha = 1."""

    name = "kRQISO"
    alpha = 1.0

    def _r2(self, X1, X2):
        return gnp.sqeuclidean_distance(X1, X2) / self._theta[0] ** 2

    def matrix(self, X1, X2):
        return rational_quadratic_kernel(self._r2(X1, X2), self.alpha)

    def gradient_matrix(self, X1, X2, index):
        r2 = self._r2(X1, X2)
        return r2 * (1.0 + r2 / (2.0 * self.alpha)) ** (-self.alpha - 1.0)
