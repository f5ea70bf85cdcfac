# gpbo/criteria.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Acquisition criteria.

A criterion scores candidate points from the posterior of the
surrogate; higher scores are more promising. Scores are vectorized
over the query points::

    score(mean, variance, y_min, dof=None)

`variance` is the posterior variance, or the squared scale of a
Student-t posterior, in which case `dof` gives its degrees of freedom.
"""
from types import MappingProxyType

import gpbo.num as gnp
from gpbo.errors import UnsupportedName


class Criterion:
    name = None
    default_params = ()

    def __init__(self, params=()):
        params = list(params)
        if len(params) > len(self.default_params):
            raise ValueError(
                f"{self.name} takes at most {len(self.default_params)} parameter(s), "
                f"got {len(params)}"
            )
        self.params = params + list(self.default_params[len(params):])

    def score(self, mean, variance, y_min, dof=None):
        raise NotImplementedError

    def __call__(self, mean, variance, y_min, dof=None):
        return self.score(mean, variance, y_min, dof)

    def __repr__(self):
        return f"{type(self).__name__}({self.params})"


def _standardize(mean, variance, target):
    mean = gnp.asarray(mean, dtype=gnp.float64)
    s = gnp.sqrt(gnp.maximum(gnp.asarray(variance, dtype=gnp.float64), 0.0))
    safe_s = gnp.where(s > 0.0, s, 1.0)
    z = (target - mean) / safe_s
    return mean, s, z


class ExpectedImprovement(Criterion):
    """Expected improvement below y_min.

    Gaussian posterior:

    .. math::
        EI = (y_{min} - \\mu)\\,\\Phi(z) + s\\,\\varphi(z),
        \\quad z = (y_{min} - \\mu) / s

    Student-t posterior with nu > 1 degrees of freedom:

    .. math::
        EI = (y_{min} - \\mu)\\,T_\\nu(z) + s\\,\\frac{\\nu + z^2}{\\nu - 1}\\,t_\\nu(z)
    """

    name = "cEI"

    def score(self, mean, variance, y_min, dof=None):
        mean, s, z = _standardize(mean, variance, y_min)
        d = y_min - mean
        if dof is not None and dof > 1:
            ei = d * gnp.student_t.cdf(z, dof) + s * (dof + z * z) / (dof - 1.0) * gnp.student_t.pdf(z, dof)
        else:
            ei = d * gnp.normal.cdf(z) + s * gnp.normal.pdf(z)
        return gnp.where(s > 0.0, ei, gnp.maximum(d, 0.0))


class LowerConfidenceBound(Criterion):
    """Negated lower confidence bound, -(mu - beta * s)."""

    name = "cLCB"
    default_params = (1.0,)

    def score(self, mean, variance, y_min, dof=None):
        mean, s, _ = _standardize(mean, variance, y_min)
        return -(mean - self.params[0] * s)


class ProbabilityOfImprovement(Criterion):
    """Probability that the objective falls below y_min - epsilon."""

    name = "cPOI"
    default_params = (0.01,)

    def score(self, mean, variance, y_min, dof=None):
        target = y_min - self.params[0]
        mean, s, z = _standardize(mean, variance, target)
        if dof is not None:
            p = gnp.student_t.cdf(z, dof)
        else:
            p = gnp.normal.cdf(z)
        return gnp.where(s > 0.0, p, (mean < target).astype(gnp.float64))


class ExpectedReturn(Criterion):
    """Negated posterior mean (pure exploitation)."""

    name = "cExpReturn"

    def score(self, mean, variance, y_min, dof=None):
        return -gnp.asarray(mean, dtype=gnp.float64)


DEFAULT_CRITERIA = MappingProxyType(
    {
        cls.name: cls
        for cls in (
            ExpectedImprovement,
            LowerConfidenceBound,
            ProbabilityOfImprovement,
            ExpectedReturn,
        )
    }
)


def create_criterion(name, params=(), registry=DEFAULT_CRITERIA):
    """Instantiate a criterion by name.

    Raises
    ------
    UnsupportedName
        If the name is not in the registry.
    """
    try:
        cls = registry[name]
    except KeyError:
        raise UnsupportedName("criterion", name, registry.keys()) from None
    return cls(params)
