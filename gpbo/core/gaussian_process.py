# gpbo/core/gaussian_process.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Gaussian process surrogates.

sGaussianProcess
    Known signal variance and known mean function.
sGaussianProcessML
    Mean coefficients (GLS) and signal variance by maximum likelihood.
sGaussianProcessNormal
    Normal prior on the mean coefficients, known signal variance.
"""
import gpbo.num as gnp

from .process import NonParametricProcess
from .likelihood import negative_log_likelihood_known_scale, negative_log_likelihood_profile
from .kriging import (
    whiten,
    generalized_least_squares,
    universal_kriging_correction,
    reduced_variance,
)
from .linalg import solve_lower


class GaussianProcess(NonParametricProcess):
    """Gaussian process with known signal variance and known mean.

    .. math::
        \\mu(q) = m(q) + v^T L^{-1}(y - m), \\qquad
        \\sigma^2(q) = \\sigma_s (k(q, q) - v^T v)
    """

    name = "sGaussianProcess"

    def _precompute_prediction(self):
        self._alpha = solve_lower(self._L, self.samples.y - self.samples.m)

    def _posterior(self, v, kqq, Fq, mq):
        mean = mq + gnp.matmul(v.T, self._alpha)
        variance = self.signal_variance * reduced_variance(kqq, v)
        return mean, variance

    def _negative_log_likelihood(self):
        return negative_log_likelihood_known_scale(
            self.kernel_model,
            self.samples.X,
            self.samples.y,
            self.samples.m,
            self.regularizer,
            self.signal_variance,
        )


class GaussianProcessML(NonParametricProcess):
    """Gaussian process with maximum-likelihood mean coefficients and variance.

    The coefficients are the generalized-least-squares estimate and
    sigma2 = ||L^{-1}(y - F w)||^2 / n. The predictive variance
    includes the universal-kriging term accounting for the estimation
    of w.
    """

    name = "sGaussianProcessML"
    estimates_scale = True

    def _precompute_prediction(self):
        ly, KF = whiten(self._L, self.samples.y, self.samples.F)
        self._w, self._A_chol = generalized_least_squares(KF, ly)
        self._KF = KF
        self._alpha = ly - gnp.matmul(KF, self._w)
        self._sigma2 = float(gnp.inner(self._alpha, self._alpha)) / self.n_samples

    @property
    def sigma2(self):
        return self._sigma2

    @property
    def mean_coefficients(self):
        return gnp.copy(self._w)

    def _posterior(self, v, kqq, Fq, mq):
        mean = gnp.matmul(Fq, self._w) + gnp.matmul(v.T, self._alpha)
        s2 = reduced_variance(kqq, v) + universal_kriging_correction(
            self._A_chol, self._KF, v, Fq
        )
        return mean, self._sigma2 * s2

    def _negative_log_likelihood(self):
        return negative_log_likelihood_profile(
            self.kernel_model,
            self.samples.X,
            self.samples.y,
            self.samples.F,
            self.regularizer,
        )


class GaussianProcessNormal(NonParametricProcess):
    """Gaussian process with a normal prior on the mean coefficients.

    .. math::
        w \\sim \\mathcal{N}(w_0, \\sigma_s\\, \\mathrm{diag}(s^2))

    The posterior mean of w solves
    (KF^T KF + diag(1/s^2)) w = KF^T ly + w_0 / s^2.
    """

    name = "sGaussianProcessNormal"

    def _precompute_prediction(self):
        ly, KF = whiten(self._L, self.samples.y, self.samples.F)
        precision = 1.0 / self.mean_model.prior_std**2
        self._w, self._A_chol = generalized_least_squares(
            KF, ly, precision, precision * self.mean_model.prior_mean
        )
        self._KF = KF
        self._alpha = ly - gnp.matmul(KF, self._w)

    @property
    def mean_coefficients(self):
        return gnp.copy(self._w)

    def _posterior(self, v, kqq, Fq, mq):
        mean = gnp.matmul(Fq, self._w) + gnp.matmul(v.T, self._alpha)
        s2 = reduced_variance(kqq, v) + universal_kriging_correction(
            self._A_chol, self._KF, v, Fq
        )
        return mean, self.signal_variance * s2

    def _negative_log_likelihood(self):
        return negative_log_likelihood_known_scale(
            self.kernel_model,
            self.samples.X,
            self.samples.y,
            gnp.matmul(self.samples.F, self.mean_model.prior_mean),
            self.regularizer,
            self.signal_variance,
        )
