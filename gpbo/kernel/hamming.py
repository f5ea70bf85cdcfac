# gpbo/kernel/hamming.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
import gpbo.num as gnp
from .base import IsotropicKernel
from .matern import _StationaryMixin


class HammingKernel(_StationaryMixin, IsotropicKernel):
    """Kernel for categorical inputs.

    .. math::
        k(x_1, x_2) = \\exp(-h(x_1, x_2) / \\theta)

    where h is the number of coordinates on which x1 and x2 differ.
    """

    name = "kHamming"

    def matrix(self, X1, X2):
        h = gnp.hamming_count(X1, X2)
        return gnp.exp(-h / self._theta[0])

    def gradient_matrix(self, X1, X2, index):
        h = gnp.hamming_count(X1, X2) / self._theta[0]
        return h * gnp.exp(-h)
