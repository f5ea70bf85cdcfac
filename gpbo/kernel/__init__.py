# gpbo/kernel/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Covariance functions and related utilities.

This subpackage provides primitive kernels, their sum/product
combinators, a factory building kernel trees from expressions such as
``"kSum(kSEISO, kConst)"``, and hyperparameter selection tools.

Modules
-------
base
    Kernel, isotropic and ARD base classes.
matern
    Matérn kernels (nu = 1/2, 3/2, 5/2), isotropic and ARD.
exponential
    Squared-exponential and rational-quadratic kernels.
polynomial
    Constant, linear and polynomial kernels.
hamming
    Hamming kernel for categorical inputs.
combined
    Sum and product combinators.
factory
    Kernel registry and factory.
model
    Kernel tree with its hyperparameter prior.
priors
    Normal log-prior on hyperparameters.
parameter_selection
    Hyperparameter optimization helpers.
"""

from .base import Kernel, PrimitiveKernel, IsotropicKernel, ARDKernel
from .matern import (
    matern1_kernel,
    matern3_kernel,
    matern5_kernel,
    MaternISO1,
    MaternISO3,
    MaternISO5,
    MaternARD1,
    MaternARD3,
    MaternARD5,
)
from .exponential import squared_exponential_kernel, rational_quadratic_kernel, SEISO, SEARD, RQISO
from .polynomial import ConstKernel, LinearKernel, LinearARDKernel, PolynomialKernel
from .hamming import HammingKernel
from .combined import CombinedKernel, KernelSum, KernelProd
from .factory import DEFAULT_KERNELS, KernelFactory, create_kernel
from .model import KernelModel
from .priors import log_prior_normal, log_prior_normal_gradient
from .parameter_selection import make_selection_criterion_with_gradient, autoselect_parameters

__all__ = [
    # Kernels
    "Kernel",
    "PrimitiveKernel",
    "IsotropicKernel",
    "ARDKernel",
    "matern1_kernel",
    "matern3_kernel",
    "matern5_kernel",
    "MaternISO1",
    "MaternISO3",
    "MaternISO5",
    "MaternARD1",
    "MaternARD3",
    "MaternARD5",
    "squared_exponential_kernel",
    "rational_quadratic_kernel",
    "SEISO",
    "SEARD",
    "RQISO",
    "ConstKernel",
    "LinearKernel",
    "LinearARDKernel",
    "PolynomialKernel",
    "HammingKernel",
    "CombinedKernel",
    "KernelSum",
    "KernelProd",
    # Factory
    "DEFAULT_KERNELS",
    "KernelFactory",
    "create_kernel",
    "KernelModel",
    # Priors and parameter selection
    "log_prior_normal",
    "log_prior_normal_gradient",
    "make_selection_criterion_with_gradient",
    "autoselect_parameters",
]
