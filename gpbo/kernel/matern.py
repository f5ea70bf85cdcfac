# gpbo/kernel/matern.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Matérn kernels with half-integer regularity nu = 1/2, 3/2, 5/2."""
from math import sqrt
import gpbo.num as gnp
from .base import IsotropicKernel, ARDKernel


def matern1_kernel(r):
    """Matérn 1/2 (exponential) kernel.

    .. math::
        k(r) = \\exp(-r)
    """
    return gnp.exp(-r)


def matern3_kernel(r):
    """Matérn 3/2 kernel.

    .. math::
        k(r) = (1 + \\sqrt{3}\\,r) \\exp(-\\sqrt{3}\\,r)
    """
    s = sqrt(3.0) * r
    return (1.0 + s) * gnp.exp(-s)


def matern5_kernel(r):
    """Matérn 5/2 kernel.

    .. math::
        k(r) = (1 + s + s^2/3) \\exp(-s), \\quad s = \\sqrt{5}\\,r
    """
    s = sqrt(5.0) * r
    return (1.0 + s * (1.0 + s / 3.0)) * gnp.exp(-s)


class _StationaryMixin:
    def diag(self, X):
        return gnp.ones(gnp.asarray(X).reshape(-1, self.dim).shape[0])


class MaternISO1(_StationaryMixin, IsotropicKernel):
    name = "kMaternISO1"

    def matrix(self, X1, X2):
        return matern1_kernel(self.scaled_distance(X1, X2))

    def gradient_matrix(self, X1, X2, index):
        r = self.scaled_distance(X1, X2)
        return r * gnp.exp(-r)


class MaternISO3(_StationaryMixin, IsotropicKernel):
    name = "kMaternISO3"

    def matrix(self, X1, X2):
        return matern3_kernel(self.scaled_distance(X1, X2))

    def gradient_matrix(self, X1, X2, index):
        s = sqrt(3.0) * self.scaled_distance(X1, X2)
        return s * s * gnp.exp(-s)


class MaternISO5(_StationaryMixin, IsotropicKernel):
    name = "kMaternISO5"

    def matrix(self, X1, X2):
        return matern5_kernel(self.scaled_distance(X1, X2))

    def gradient_matrix(self, X1, X2, index):
        s = sqrt(5.0) * self.scaled_distance(X1, X2)
        return s * s * (1.0 + s) / 3.0 * gnp.exp(-s)


class MaternARD1(_StationaryMixin, ARDKernel):
    name = "kMaternARD1"

    def matrix(self, X1, X2):
        return matern1_kernel(self.scaled_distance(X1, X2))

    def gradient_matrix(self, X1, X2, index):
        r = self.scaled_distance(X1, X2)
        u2 = self.scaled_sqdiff(X1, X2, index)
        # d r / d log(theta_j) = -u_j^2 / r, and the kernel is flat along
        # a coordinate where u_j = 0
        safe_r = gnp.where(r > 0.0, r, 1.0)
        return gnp.where(r > 0.0, u2 / safe_r * gnp.exp(-r), 0.0)


class MaternARD3(_StationaryMixin, ARDKernel):
    name = "kMaternARD3"

    def matrix(self, X1, X2):
        return matern3_kernel(self.scaled_distance(X1, X2))

    def gradient_matrix(self, X1, X2, index):
        s = sqrt(3.0) * self.scaled_distance(X1, X2)
        return 3.0 * self.scaled_sqdiff(X1, X2, index) * gnp.exp(-s)


class MaternARD5(_StationaryMixin, ARDKernel):
    name = "kMaternARD5"

    def matrix(self, X1, X2):
        return matern5_kernel(self.scaled_distance(X1, X2))

    def gradient_matrix(self, X1, X2, index):
        s = sqrt(5.0) * self.scaled_distance(X1, X2)
        u2 = self.scaled_sqdiff(X1, X2, index)
        return 5.0 * u2 * (1.0 + s) * gnp.exp(-s) / 3.0
