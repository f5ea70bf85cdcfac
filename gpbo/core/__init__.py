# gpbo/core/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------

"""
Core components of the gpbo package.

This subpackage contains the surrogate models (Gaussian and Student-t
processes), the Cholesky engine they are built on, and the likelihoods
used to learn kernel hyperparameters.

Public API
----------
create_surrogate : function
    Build a surrogate from run parameters.
DEFAULT_SURROGATES : mapping
    Surrogate name -> class.
"""

from .linalg import factorize, extend, CholeskyFactor
from .samples import SampleSet
from .process import NonParametricProcess
from .gaussian_process import GaussianProcess, GaussianProcessML, GaussianProcessNormal
from .student_t import StudentTProcessJeffreys, StudentTProcessNIG
from .factory import DEFAULT_SURROGATES, create_surrogate

__all__ = [
    "factorize",
    "extend",
    "CholeskyFactor",
    "SampleSet",
    "NonParametricProcess",
    "GaussianProcess",
    "GaussianProcessML",
    "GaussianProcessNormal",
    "StudentTProcessJeffreys",
    "StudentTProcessNIG",
    "DEFAULT_SURROGATES",
    "create_surrogate",
]
