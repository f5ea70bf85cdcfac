# gpbo/num/numpy_backend.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""NumPy numerical backend for GPbo.

This module defines the NumPy implementation of the gpbo.num API.
"""

import copy as _copy
import builtins
from typing import Any, Optional, Union
from gpbo.config import init_backend, get_logger

Scalar = Union[int, float]
ArrayLike = Any

_gpbo_backend_: str = init_backend()
_logger = get_logger()
_logger.info("Using backend: %s", _gpbo_backend_)

_LINALG_ERROR_KEYWORDS = (
    "singular",
    "not positive definite",
    "not positive-definite",
    "cholesky",
    "decomposition",
    "factorization",
    "matrix is not invertible",
    "ill-conditioned",
    "linalg",
    "lapack",
    "array must not contain infs or nans",
)


# -----------------------------------------------------
#
#                      NUMPY
#
# -----------------------------------------------------

import numpy
from numpy.typing import NDArray

_np_dtype = numpy.float64

ndarray = NDArray[numpy.floating]
from numpy import (
    copy,
    reshape,
    where,
    any,
    isscalar,
    isnan,
    isinf,
    isfinite,
    allclose,
    hstack,
    vstack,
    stack,
    tile,
    concatenate,
    atleast_1d,
    atleast_2d,
    ascontiguousarray,
    zeros_like,
    ones_like,
    full_like,
    diag,
    arange,
    floor,
    abs,
    sqrt,
    exp,
    log,
    sin,
    cos,
    sum,
    prod,
    mean,
    min,
    max,
    argmin,
    argmax,
    minimum,
    maximum,
    clip,
    einsum,
    matmul,
    inner,
    outer,
    all,
    logical_and,
)
from numpy.linalg import norm, LinAlgError
from numpy import pi, inf
from numpy import finfo, float64
from scipy.linalg import solve_triangular, get_lapack_funcs
from scipy.spatial.distance import cdist
from scipy.stats import norm as normal
from scipy.stats import t as student_t

# ..................................................

eps = finfo(_np_dtype).eps
fmax = numpy.finfo(_np_dtype).max

# ..................................................

def _is_linalg_exception(exc: Exception) -> bool:
    if isinstance(exc, numpy.linalg.LinAlgError):
        return True
    msg = str(exc).lower()
    return builtins.any(keyword in msg for keyword in _LINALG_ERROR_KEYWORDS)

# ..................................................

def array(x, dtype=None):
    if dtype is not None:
        return numpy.array(x, dtype=dtype)
    out = numpy.array(x)
    if numpy.issubdtype(out.dtype, numpy.floating) or numpy.issubdtype(
        out.dtype, numpy.integer
    ):
        return out.astype(_np_dtype, copy=False)
    return out

def asarray(x, dtype=None):
    if dtype is not None:
        return numpy.asarray(x, dtype=dtype)
    if isinstance(x, numpy.ndarray):
        if numpy.issubdtype(x.dtype, numpy.floating):
            return x.astype(_np_dtype, copy=False)
        return x
    elif isinstance(x, (int, float)):
        dt = _np_dtype if isinstance(x, float) else None
        return numpy.array([x], dtype=dt)
    else:
        out = numpy.asarray(x)
        if numpy.issubdtype(out.dtype, numpy.floating):
            return out.astype(_np_dtype, copy=False)
        return out

def empty(shape, dtype=None):
    return numpy.empty(shape, dtype=_np_dtype if dtype is None else dtype)

def zeros(shape, dtype=None):
    return numpy.zeros(shape, dtype=_np_dtype if dtype is None else dtype)

def ones(shape, dtype=None):
    return numpy.ones(shape, dtype=_np_dtype if dtype is None else dtype)

def full(shape, fill_value, dtype=None):
    return numpy.full(
        shape, fill_value, dtype=_np_dtype if dtype is None else dtype
    )

def eye(n, m=None, k=0, dtype=None):
    return numpy.eye(n, M=m, k=k, dtype=_np_dtype if dtype is None else dtype)

def readonly(x):
    """Return a non-writeable view of x."""
    v = x.view()
    v.flags.writeable = False
    return v

# ..................................................

def sqeuclidean_distance(x: ArrayLike, y: ArrayLike) -> ArrayLike:
    return cdist(x, y, "sqeuclidean")

def hamming_count(x: ArrayLike, y: ArrayLike) -> ArrayLike:
    """Number of differing coordinates for every pair of rows."""
    return cdist(x, y, "hamming") * x.shape[1]

def cholesky_lower(A):
    """Lower Cholesky factor through LAPACK potrf.

    Returns (L, info) where info > 0 is the 1-based order of the
    leading minor that is not positive definite.
    """
    (potrf,) = get_lapack_funcs(("potrf",), (A,))
    L, info = potrf(A, lower=True, clean=True, overwrite_a=False)
    if info < 0:
        raise ValueError(f"potrf: illegal value in argument {-info}")
    return L, info

def cholesky_solve_factored(L, b):
    """Solve (L L^T) x = b from a lower factor L."""
    y = solve_triangular(L, b, lower=True)
    return solve_triangular(L.T, y, lower=False)

def logdet_from_chol(L):
    return 2.0 * sum(log(diag(L)))

# ..................................................

def default_rng(seed: Optional[int] = None):
    """Return a new NumPy Generator; a negative seed means fresh entropy."""
    if seed is not None and seed < 0:
        seed = None
    return numpy.random.default_rng(seed=seed)

def get_rng_state(rng) -> dict:
    """Opaque, deep-copied state of a Generator."""
    return _copy.deepcopy(rng.bit_generator.state)

def set_rng_state(rng, state: dict) -> None:
    rng.bit_generator.state = _copy.deepcopy(state)
