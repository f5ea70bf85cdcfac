# gpbo/mean.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Parametric mean functions m(x) = f(x)^T w.

A mean function exposes its feature matrix F (n, p), used by the
surrogates that estimate or marginalize the coefficients w, and its
value m(x) for the current coefficients, used by the surrogates with a
known mean.
"""
from types import MappingProxyType

import gpbo.num as gnp
from gpbo.errors import DimensionMismatch, StructureError, UnsupportedName
from gpbo.parameters import MeanParameters, broadcast_to
from gpbo.parser import parse_expression


class MeanFunction:
    name = "mean"

    def __init__(self, dim):
        self.dim = int(dim)
        self._w = gnp.ones(self.n_parameters)

    @property
    def n_parameters(self):
        raise NotImplementedError

    def features(self, X):
        raise NotImplementedError

    def fixed_coefficients(self):
        """Per-coefficient fixed value, None for free coefficients."""
        return [None] * self.n_parameters

    def get_parameters(self):
        return gnp.copy(self._w)

    def set_parameters(self, w):
        w = gnp.atleast_1d(gnp.asarray(w, dtype=gnp.float64)).ravel()
        if w.shape[0] != self.n_parameters:
            raise DimensionMismatch(
                f"{self.name} expects {self.n_parameters} parameter(s), got {w.shape[0]}"
            )
        self._w = gnp.copy(w)

    def mean(self, X):
        return gnp.matmul(self.features(X), self._w)

    def __str__(self):
        return self.name


class ZeroMean(MeanFunction):
    name = "mZero"

    @property
    def n_parameters(self):
        return 0

    def features(self, X):
        return gnp.zeros((X.shape[0], 0))


class OneMean(MeanFunction):
    """Constant mean equal to one; the coefficient is not used."""

    name = "mOne"

    @property
    def n_parameters(self):
        return 1

    def features(self, X):
        return gnp.ones((X.shape[0], 1))

    def mean(self, X):
        return gnp.ones(X.shape[0])

    def fixed_coefficients(self):
        return [1.0]


class ConstantMean(MeanFunction):
    name = "mConst"

    @property
    def n_parameters(self):
        return 1

    def features(self, X):
        return gnp.ones((X.shape[0], 1))


class LinearMean(MeanFunction):
    name = "mLinear"

    @property
    def n_parameters(self):
        return self.dim

    def features(self, X):
        return gnp.copy(X)


class SumMean(MeanFunction):
    """Sum of two mean functions; features and parameters are concatenated."""

    name = "mSum"

    def __init__(self, left, right):
        self.left = left
        self.right = right
        super().__init__(left.dim)

    @property
    def n_parameters(self):
        return self.left.n_parameters + self.right.n_parameters

    def get_parameters(self):
        return gnp.concatenate([self.left.get_parameters(), self.right.get_parameters()])

    def set_parameters(self, w):
        w = gnp.atleast_1d(gnp.asarray(w, dtype=gnp.float64)).ravel()
        if w.shape[0] != self.n_parameters:
            raise DimensionMismatch(
                f"{self} expects {self.n_parameters} parameter(s), got {w.shape[0]}"
            )
        nl = self.left.n_parameters
        self.left.set_parameters(w[:nl])
        self.right.set_parameters(w[nl:])

    def features(self, X):
        return gnp.hstack([self.left.features(X), self.right.features(X)])

    def fixed_coefficients(self):
        return self.left.fixed_coefficients() + self.right.fixed_coefficients()

    def mean(self, X):
        return self.left.mean(X) + self.right.mean(X)

    def __str__(self):
        return f"mSum({self.left}, {self.right})"


DEFAULT_MEANS = MappingProxyType(
    {
        "mZero": ZeroMean,
        "mOne": OneMean,
        "mConst": ConstantMean,
        "mLinear": LinearMean,
        "mSum": SumMean,
    }
)


def create_mean(expression, dim, registry=DEFAULT_MEANS):
    """Build a mean function from an expression such as ``"mSum(mConst, mLinear)"``."""
    node = parse_expression(expression) if isinstance(expression, str) else expression
    try:
        cls = registry[node.name]
    except KeyError:
        raise UnsupportedName("mean", node.name, registry.keys()) from None
    if issubclass(cls, SumMean):
        if len(node.args) != 2:
            raise StructureError(f"{node.name} takes exactly 2 arguments, got {len(node.args)}")
        return cls(
            create_mean(node.args[0], dim, registry), create_mean(node.args[1], dim, registry)
        )
    if node.args:
        raise StructureError(f"mean function {node.name} takes no arguments")
    return cls(dim)


class MeanModel:
    """Mean function with the normal prior on its coefficients.

    The coefficients start at ``coef_mean``. A zero ``coef_std`` is
    replaced by a tiny value so that the prior precision stays finite.
    Coefficients fixed by the mean function (``mOne``) get their fixed
    value as prior mean and the tiny std, whatever the parameters say.
    """

    MIN_STD = 1e-10

    def __init__(self, dim, params=None, registry=DEFAULT_MEANS):
        params = MeanParameters() if params is None else params
        self.dim = int(dim)
        self.function = create_mean(params.name, self.dim, registry)
        p = self.function.n_parameters
        prior_mean = broadcast_to(params.coef_mean, p, "coef_mean")
        prior_std = broadcast_to(params.coef_std, p, "coef_std")
        for i, value in enumerate(self.function.fixed_coefficients()):
            if value is not None:
                prior_mean[i] = value
                prior_std[i] = 0.0
        self.prior_mean = gnp.asarray(prior_mean)
        std = gnp.asarray(prior_std)
        self.prior_std = gnp.maximum(std, self.MIN_STD) if p > 0 else std
        if p > 0:
            self.function.set_parameters(self.prior_mean)

    @property
    def n_features(self):
        return self.function.n_parameters

    def features(self, X):
        return self.function.features(X)

    def mean(self, X):
        return self.function.mean(X)

    def get_parameters(self):
        return self.function.get_parameters()

    def set_parameters(self, w):
        self.function.set_parameters(w)

    def __repr__(self):
        return f"MeanModel({self.function})"
