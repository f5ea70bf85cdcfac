# gpbo/core/student_t.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Student-t process surrogates.

Marginalizing the signal variance (and the mean coefficients) under a
conjugate prior gives a Student-t predictive distribution. `predict`
returns its location and squared scale; `dof` gives its degrees of
freedom, which grow with the number of samples.
"""
import gpbo.num as gnp
from gpbo.errors import NotReady
from gpbo.parameters import BOptParams

from .process import NonParametricProcess
from .likelihood import negative_log_likelihood_profile
from .kriging import (
    whiten,
    generalized_least_squares,
    universal_kriging_correction,
    reduced_variance,
)


class _StudentTProcess(NonParametricProcess):
    estimates_scale = True

    @property
    def dof(self):
        return self._dof if self._fitted else None

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


class StudentTProcessJeffreys(_StudentTProcess):
    """Student-t process with Jeffreys prior p(w, sigma2) ∝ 1/sigma2.

    .. math::
        \\hat\\sigma^2 = \\frac{\\|L^{-1}(y - F w)\\|^2}{n - p},
        \\qquad \\nu = n - p
    """

    name = "sStudentTProcessJef"

    def _precompute_prediction(self):
        n, p = self.n_samples, self.mean_model.n_features
        if n <= p:
            raise NotReady(
                f"{self.name} needs more samples ({n}) than mean features ({p})"
            )
        ly, KF = whiten(self._L, self.samples.y, self.samples.F)
        self._w, self._A_chol = generalized_least_squares(KF, ly)
        self._KF = KF
        self._alpha = ly - gnp.matmul(KF, self._w)
        self._dof = n - p
        self._sigma2 = float(gnp.inner(self._alpha, self._alpha)) / self._dof


class StudentTProcessNIG(_StudentTProcess):
    """Student-t process with Normal-Inverse-Gamma prior.

    .. math::
        w \\mid \\sigma^2 \\sim \\mathcal{N}(w_0, \\sigma^2 B_0),
        \\qquad \\sigma^2 \\sim \\mathcal{IG}(\\alpha, \\beta)

    with B_0 = diag(s^2). The posterior hyperparameters are
    alpha_n = alpha + n/2 and
    beta_n = beta + (||L^{-1}(y - F w)||^2 + (w - w_0)^T B_0^{-1} (w - w_0)) / 2,
    and the predictive distribution has 2 alpha_n degrees of freedom.
    """

    name = "sStudentTProcessNIG"

    def __init__(self, dim, params=None, **kwargs):
        super().__init__(dim, params, **kwargs)
        params = BOptParams() if params is None else params
        self.alpha = float(params.alpha)
        self.beta = float(params.beta)

    def _precompute_prediction(self):
        n = self.n_samples
        w0 = self.mean_model.prior_mean
        precision = 1.0 / self.mean_model.prior_std**2
        ly, KF = whiten(self._L, self.samples.y, self.samples.F)
        self._w, self._A_chol = generalized_least_squares(KF, ly, precision, precision * w0)
        self._KF = KF
        self._alpha = ly - gnp.matmul(KF, self._w)
        dw = self._w - w0
        alpha_n = self.alpha + 0.5 * n
        beta_n = self.beta + 0.5 * (
            float(gnp.inner(self._alpha, self._alpha)) + float(gnp.sum(precision * dw * dw))
        )
        self._dof = 2.0 * alpha_n
        self._sigma2 = beta_n / alpha_n
