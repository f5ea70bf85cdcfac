# gpbo/core/linalg.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Cholesky factorization and its incremental extension.

This file isolates the triangular-factor operations used by the
surrogates (built on top of `gpbo.num as gnp`):

- `factorize` computes the lower factor of a symmetric positive
  definite matrix from scratch, O(n^3);
- `extend` appends one row/column to an existing factor, O(n^2);
- `CholeskyFactor` is a growable container that stores the factor in
  a preallocated buffer whose capacity doubles when full, so that a
  sequence of extensions costs O(n^2) each, amortized.
"""
import gpbo.num as gnp
from gpbo.errors import NotPositiveDefinite


def factorize(K):
    """Return the lower Cholesky factor L of K, K = L Lᵀ.

    Parameters
    ----------
    K : array_like, shape (n, n)
        Symmetric matrix.

    Returns
    -------
    L : array_like, shape (n, n)
        Lower-triangular factor (upper part set to zero).

    Raises
    ------
    NotPositiveDefinite
        If a pivot is not strictly positive. ``pivot`` is the 0-based
        index of the failing pivot.
    """
    K = gnp.asarray(K, dtype=gnp.float64)
    n = K.shape[0]
    if n == 0:
        return gnp.zeros((0, 0))
    finite = gnp.isfinite(K)
    if not gnp.all(finite):
        bad = int(gnp.argmin(gnp.all(finite, axis=1)))
        raise NotPositiveDefinite(bad, "matrix contains infs or nans")
    L, info = gnp.cholesky_lower(K)
    if info > 0:
        raise NotPositiveDefinite(info - 1)
    return L


def solve_lower(L, B):
    """Solve L X = B by forward substitution; B may have zero columns."""
    if B.ndim == 2 and B.shape[1] == 0:
        return gnp.zeros(B.shape)
    if L.shape[0] == 0:
        return gnp.zeros(B.shape)
    return gnp.solve_triangular(L, B, lower=True, check_finite=False)


def extension_row(L, new_row, self_correlation):
    """Compute the last row of the extended factor without building it.

    Returns
    -------
    v : array_like, shape (n,)
        Solution of L v = new_row.
    d : float
        New diagonal entry sqrt(self_correlation - ||v||^2).

    Raises
    ------
    NotPositiveDefinite
        If the radicand is not strictly positive (``pivot = n``).
    """
    n = L.shape[0]
    new_row = gnp.asarray(new_row, dtype=gnp.float64).reshape(-1)
    if new_row.shape[0] != n:
        raise ValueError(f"new_row has length {new_row.shape[0]}, expected {n}")
    if n > 0:
        v = gnp.solve_triangular(L, new_row, lower=True, check_finite=False)
    else:
        v = gnp.zeros(0)
    radicand = float(self_correlation) - float(gnp.inner(v, v))
    if not radicand > 0.0:
        raise NotPositiveDefinite(n)
    return v, gnp.sqrt(radicand)


def extend(L, new_row, self_correlation):
    """Factor of the matrix augmented by one row/column.

    Given L with L Lᵀ = K, return L' with
    L' L'ᵀ = [[K, k], [kᵀ, self_correlation]], k = new_row.
    """
    v, d = extension_row(L, new_row, self_correlation)
    n = L.shape[0]
    Lx = gnp.zeros((n + 1, n + 1))
    Lx[:n, :n] = L
    Lx[n, :n] = v
    Lx[n, n] = d
    return Lx


class CholeskyFactor:
    """Growable lower-triangular factor.

    The factor is stored in the top-left corner of a square buffer.
    `matrix` returns a read-only view; callers never get a writable
    reference to the stored factor.
    """

    MIN_CAPACITY = 16

    def __init__(self, capacity=MIN_CAPACITY):
        capacity = max(int(capacity), 1)
        self._buf = gnp.zeros((capacity, capacity))
        self._n = 0

    def __len__(self):
        return self._n

    @property
    def capacity(self):
        return self._buf.shape[0]

    @property
    def matrix(self):
        return gnp.readonly(self._buf[: self._n, : self._n])

    def _reserve(self, n):
        if n <= self.capacity:
            return
        capacity = self.capacity
        while capacity < n:
            capacity *= 2
        buf = gnp.zeros((capacity, capacity))
        buf[: self._n, : self._n] = self._buf[: self._n, : self._n]
        self._buf = buf

    def clear(self):
        self._n = 0

    def reset(self, L):
        """Replace the stored factor by L (e.g. after a full factorization)."""
        L = gnp.asarray(L)
        n = L.shape[0]
        if n > self.capacity:
            self._buf = gnp.zeros((max(2 * n, self.MIN_CAPACITY),) * 2)
        self._buf[:n, :n] = L
        self._buf[:n, n:] = 0.0
        self._n = n

    def factorize(self, K):
        self.reset(factorize(K))

    def compute_extension(self, new_row, self_correlation):
        """Return (v, d) for the next row; the stored factor is not modified."""
        L = gnp.ascontiguousarray(self._buf[: self._n, : self._n])
        return extension_row(L, new_row, self_correlation)

    def commit_extension(self, v, d):
        n = self._n
        self._reserve(n + 1)
        self._buf[n, :n] = v
        self._buf[n, n] = d
        self._buf[:n, n] = 0.0
        self._n = n + 1

    def append(self, new_row, self_correlation):
        v, d = self.compute_extension(new_row, self_correlation)
        self.commit_extension(v, d)
