# gpbo/core/process.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Surrogate model base class.
"""
import gpbo.num as gnp
from gpbo.config import get_logger
from gpbo.errors import NotReady, DimensionMismatch
from gpbo.kernel.factory import DEFAULT_KERNELS
from gpbo.kernel.model import KernelModel
from gpbo.kernel.parameter_selection import (
    make_selection_criterion_with_gradient,
    autoselect_parameters,
)
from gpbo.mean import DEFAULT_MEANS, MeanModel
from gpbo.parameters import BOptParams

from . import utils
from .linalg import CholeskyFactor, factorize, solve_lower
from .samples import SampleSet

_logger = get_logger()


class NonParametricProcess:
    """Nonparametric surrogate of the objective (Gaussian or Student-t process).

    The surrogate owns its sample history, its kernel and mean models,
    the Cholesky factor L of the correlation matrix of the samples,
    and the coefficients derived from (L, y) used for prediction.

    States: empty (`is_fitted` False) and fitted. `fit_surrogate_model`
    factorizes the correlation matrix from scratch;
    `update_surrogate_model` appends one sample and extends L in
    O(n^2). Both lead to the same posterior up to rounding errors.

    Parameters
    ----------
    dim : int
        Input dimension.
    params : BOptParams, optional
        Uses ``kernel``, ``mean``, ``noise`` (regularizer), ``sigma_s``
        (signal variance of the known-scale variants), ``alpha``,
        ``beta``, ``l_type`` and ``sc_type``.
    kernel_registry, mean_registry : Mapping, optional
        Registries resolving kernel and mean names.

    Attributes
    ----------
    regularizer : float
        Value added to the diagonal of the correlation matrix.
    n_factorized : int
        Number of samples at the last full factorization.
    """

    name = None
    # profile likelihood (scale estimated) in hyperparameter learning
    estimates_scale = False

    def __init__(
        self,
        dim,
        params=None,
        kernel_registry=DEFAULT_KERNELS,
        mean_registry=DEFAULT_MEANS,
    ):
        params = BOptParams() if params is None else params
        self.dim = int(dim)
        self.kernel_model = KernelModel(self.dim, params.kernel, kernel_registry)
        self.mean_model = MeanModel(self.dim, params.mean, mean_registry)
        self.regularizer = float(params.noise)
        self.signal_variance = float(params.sigma_s)
        self.l_type = params.l_type
        self.sc_type = params.sc_type
        self.samples = SampleSet(self.dim, self.mean_model.n_features)
        self.factor = CholeskyFactor()
        self.n_factorized = 0
        self._L = None
        self._fitted = False

    def __repr__(self):
        return (
            f"{type(self).__name__}(dim={self.dim}, kernel={self.kernel_model.kernel}, "
            f"mean={self.mean_model.function}, n_samples={self.n_samples})"
        )

    # ------------------------------------------------------------------
    # State and accessors
    # ------------------------------------------------------------------
    @property
    def is_fitted(self):
        return self._fitted

    @property
    def n_samples(self):
        return len(self.samples)

    @property
    def dof(self):
        """Degrees of freedom of the predictive distribution (None if Gaussian)."""
        return None

    @property
    def cholesky_factor(self):
        """Read-only view of L."""
        return self.factor.matrix

    def get_hyperparameters(self):
        return self.kernel_model.get_hyperparameters()

    def set_hyperparameters(self, theta):
        """Set kernel hyperparameters; the model must be refit afterwards."""
        self.kernel_model.set_hyperparameters(theta)
        self._invalidate()

    def get_sample(self, index):
        return self.samples.get_sample(index)

    def get_last_sample(self):
        return self.samples.get_last_sample()

    def get_value_at_minimum(self):
        return self.samples.value_at_minimum()

    def get_point_at_minimum(self):
        return self.samples.point_at_minimum()

    def log_prior(self):
        """Log-density of the kernel hyperparameters under their normal prior.

        Hyperparameters with a zero prior std are fixed and do not
        contribute.
        """
        return self.kernel_model.log_prior()

    def _invalidate(self):
        self._fitted = False
        self._L = None

    # ------------------------------------------------------------------
    # Samples
    # ------------------------------------------------------------------
    def set_samples(self, X, y):
        """Replace the sample history by (X, y); the model must then be fit.

        Raises
        ------
        DimensionMismatch
            If X and y have different numbers of rows, or the columns of X
            differ from the input dimension.
        """
        X, y, _ = utils.ensure_shapes_and_type(dim=self.dim, X=X, y=y)
        if X.shape[0] == 0:
            raise DimensionMismatch("set_samples requires at least one sample")
        F = self.mean_model.features(X)
        m = self.mean_model.mean(X)
        self.samples.set(X, y, F, m)
        self.factor.clear()
        self.n_factorized = 0
        self._invalidate()

    def add_sample(self, x, y):
        """Append a sample without updating the model."""
        _, _, q = utils.ensure_shapes_and_type(dim=self.dim, q=x)
        if q.shape[0] != 1:
            raise DimensionMismatch("add_sample takes a single point")
        self.samples.append(
            q[0], float(y), self.mean_model.features(q)[0], self.mean_model.mean(q)[0]
        )
        self._invalidate()

    # ------------------------------------------------------------------
    # Fit and incremental update
    # ------------------------------------------------------------------
    def fit_surrogate_model(self):
        """Factorize the correlation matrix of all samples and precompute
        the posterior coefficients.

        Raises
        ------
        NotReady
            If there are no samples.
        NotPositiveDefinite
            If the correlation matrix cannot be factorized; the model is
            left unfitted.
        """
        n = self.n_samples
        if n == 0:
            raise NotReady("no samples to fit; call set_samples first")
        self._invalidate()
        K = self.kernel_model.corr_matrix(self.samples.X, self.regularizer)
        self.factor.reset(factorize(K))
        self.n_factorized = n
        self._refresh()

    def update_surrogate_model(self, x_new, y_new):
        """Append (x_new, y_new) and extend the factor in O(n^2).

        The extension is computed before anything is committed: if it
        fails with NotPositiveDefinite, the sample history and the
        model are left unchanged.
        """
        if not self._fitted:
            raise NotReady("update_surrogate_model requires a fitted model")
        _, _, q = utils.ensure_shapes_and_type(dim=self.dim, q=x_new)
        if q.shape[0] != 1:
            raise DimensionMismatch("update_surrogate_model takes a single point")
        k = self.kernel_model.cross_correlation(self.samples.X, q)[:, 0]
        kqq = float(self.kernel_model.self_correlation(q)[0]) + self.regularizer
        v, d = self.factor.compute_extension(k, kqq)

        self.samples.append(
            q[0], float(y_new), self.mean_model.features(q)[0], self.mean_model.mean(q)[0]
        )
        self.factor.commit_extension(v, d)
        self._refresh()

    def _refresh(self):
        self._L = gnp.ascontiguousarray(self.factor.matrix)
        self._precompute_prediction()
        self._fitted = True

    def _precompute_prediction(self):
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def predict(self, x_query):
        """Posterior mean and variance at one or several query points.

        Parameters
        ----------
        x_query : array_like, shape (d,) or (m, d)

        Returns
        -------
        mean : array_like, shape (m,)
        variance : array_like, shape (m,)
            Posterior variance; for Student-t surrogates, the squared
            scale of the predictive distribution (see `dof`).

        Raises
        ------
        NotReady
            If the model has not been fit.
        """
        if not self._fitted:
            raise NotReady("predict called before fit_surrogate_model")
        _, _, q = utils.ensure_shapes_and_type(dim=self.dim, q=x_query)
        kq = self.kernel_model.cross_correlation(self.samples.X, q)
        v = solve_lower(self._L, kq)
        kqq = self.kernel_model.self_correlation(q)
        Fq = self.mean_model.features(q)
        mq = self.mean_model.mean(q)
        mean, variance = self._posterior(v, kqq, Fq, mq)
        return mean, utils.clip_negative_variances(variance)

    def _posterior(self, v, kqq, Fq, mq):
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Hyperparameter learning
    # ------------------------------------------------------------------
    def _negative_log_likelihood(self):
        raise NotImplementedError

    def negative_log_likelihood(self, log_theta):
        """Selection criterion and its gradient with respect to log(theta).

        Returns the negative log marginal likelihood (``sc_type='ml'``)
        or the negative log posterior (``sc_type='map'``) at
        theta = exp(log_theta). The kernel hyperparameters are left set
        to theta and the model must be refit afterwards.
        """
        self.kernel_model.set_hyperparameters(gnp.exp(gnp.asarray(log_theta)))
        self._invalidate()
        J, dJ = self._negative_log_likelihood()
        if self.sc_type == "map":
            J = J - self.kernel_model.log_prior()
            dJ = dJ - self.kernel_model.log_prior_gradient()
        return J, dJ

    def update_hyper_parameters(self):
        """Learn the kernel hyperparameters (if ``l_type='empirical'``) and refit.

        Hyperparameters with a zero prior std stay fixed.
        """
        if self.n_samples == 0:
            raise NotReady("no samples to learn from")
        if self.l_type == "empirical" and self.n_samples > 1:
            theta0 = self.get_hyperparameters()
            p0 = gnp.log(theta0)
            fixed = self.kernel_model.fixed
            bounds = [
                (float(p), float(p)) if f else (max(p - 10.0, -30.0), min(p + 10.0, 30.0))
                for p, f in zip(p0, fixed)
            ]
            crit, grad = make_selection_criterion_with_gradient(self.negative_log_likelihood)
            try:
                p_opt, info = autoselect_parameters(p0, crit, grad, bounds=bounds, info=True)
            except Exception:
                self.kernel_model.set_hyperparameters(theta0)
                raise
            if gnp.isfinite(info.fun):
                self.kernel_model.set_hyperparameters(gnp.exp(p_opt))
            else:
                self.kernel_model.set_hyperparameters(theta0)
            _logger.debug(
                "Learned kernel hyperparameters %s (criterion %.6g, %d evaluations)",
                self.get_hyperparameters(),
                info.fun,
                len(info.history_criterion),
            )
        self.fit_surrogate_model()
