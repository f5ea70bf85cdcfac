# gpbo/core/utils.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Small utilities used across `gpbo.core` modules.

This file hosts:
- Shape/type validation & conversion helpers for (X, y, q)
- Clipping of negative posterior variances
"""
import warnings

import gpbo.num as gnp
from gpbo.errors import DimensionMismatch


def ensure_shapes_and_type(*, dim, X=None, y=None, q=None):
    """Validate and adjust shapes/types of input arrays.

    Parameters
    ----------
    dim : int
        Configured input dimension.
    X : array_like, optional
        Observation points (n, d).
    y : array_like, optional
        Observed values (n,) or (n, 1).
    q : array_like, optional
        Query points (m, d) or a single point (d,).

    Returns
    -------
    tuple
        (X, y, q) as float arrays with shapes (n, d), (n,), (m, d).

    Raises
    ------
    DimensionMismatch
        If a point dimension differs from `dim`, or X and y have
        different numbers of rows.
    """
    if X is not None:
        X = gnp.asarray(X, dtype=gnp.float64)
        if X.ndim != 2:
            raise DimensionMismatch("X should be a 2D array")
        if X.shape[1] != dim:
            raise DimensionMismatch(f"X has {X.shape[1]} columns, expected {dim}")

    if y is not None:
        y = gnp.asarray(y, dtype=gnp.float64)
        if y.ndim == 2:
            if y.shape[1] != 1:
                raise DimensionMismatch("y should only have one column if it's a 2D array")
            y = y.reshape(-1)
        elif y.ndim != 1:
            raise DimensionMismatch("y should be 1D or a 2D column array")

    if q is not None:
        q = gnp.asarray(q, dtype=gnp.float64)
        if q.ndim == 1:
            q = q.reshape(1, -1)
        if q.ndim != 2 or q.shape[1] != dim:
            raise DimensionMismatch(
                f"query of shape {tuple(q.shape)} does not match dimension {dim}"
            )

    if X is not None and y is not None and X.shape[0] != y.shape[0]:
        raise DimensionMismatch(
            f"X has {X.shape[0]} rows but y has {y.shape[0]} entries"
        )

    return X, y, q


def clip_negative_variances(var):
    """Clip negative variances to zero, with a warning."""
    if gnp.any(var < 0.0):
        warnings.warn(
            "In predict: negative variances detected; consider using a larger regularizer.",
            RuntimeWarning,
        )
        var = gnp.maximum(var, 0.0)
    return var
