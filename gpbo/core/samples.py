# gpbo/core/samples.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""Append-only sample history of a surrogate."""
import gpbo.num as gnp
from gpbo.errors import DimensionMismatch


class SampleSet:
    """
    Observed points with their outputs and mean-function data.

    Rows are stored in preallocated buffers whose capacity doubles when
    full. Index i is stable once assigned. Besides x_i and y_i, each
    row stores the mean features f(x_i) and the mean value m(x_i) so
    that they are computed once per sample.

    Parameters
    ----------
    dim : int
        Dimension of the points.
    n_features : int
        Number of mean features p.
    """

    def __init__(self, dim, n_features=0, capacity=16):
        self.dim = int(dim)
        self.n_features = int(n_features)
        self._n = 0
        self._alloc(max(int(capacity), 1))
        self.min_index = -1

    def _alloc(self, capacity):
        X = gnp.zeros((capacity, self.dim))
        y = gnp.zeros(capacity)
        F = gnp.zeros((capacity, self.n_features))
        m = gnp.zeros(capacity)
        if self._n > 0:
            X[: self._n] = self._X[: self._n]
            y[: self._n] = self._y[: self._n]
            F[: self._n] = self._F[: self._n]
            m[: self._n] = self._m[: self._n]
        self._X, self._y, self._F, self._m = X, y, F, m

    def __len__(self):
        return self._n

    @property
    def X(self):
        return gnp.readonly(self._X[: self._n])

    @property
    def y(self):
        return gnp.readonly(self._y[: self._n])

    @property
    def F(self):
        return gnp.readonly(self._F[: self._n])

    @property
    def m(self):
        return gnp.readonly(self._m[: self._n])

    def set(self, X, y, F, m):
        """Replace the whole history."""
        n = X.shape[0]
        if not (y.shape[0] == F.shape[0] == m.shape[0] == n):
            raise DimensionMismatch("inconsistent number of rows in sample data")
        self._n = 0
        self._alloc(max(2 * n, 16))
        self._X[:n] = X
        self._y[:n] = y
        self._F[:n] = F
        self._m[:n] = m
        self._n = n
        self.min_index = int(gnp.argmin(self._y[:n])) if n > 0 else -1

    def append(self, x, y, f, m):
        if self._n == self._X.shape[0]:
            self._alloc(2 * self._X.shape[0])
        n = self._n
        self._X[n] = x
        self._y[n] = y
        self._F[n] = f
        self._m[n] = m
        self._n = n + 1
        if self.min_index < 0 or y < self._y[self.min_index]:
            self.min_index = n

    def get_sample(self, index):
        if not 0 <= index < self._n:
            raise IndexError(f"sample index {index} out of range [0, {self._n})")
        return gnp.copy(self._X[index]), float(self._y[index])

    def get_last_sample(self):
        return self.get_sample(self._n - 1)

    def value_at_minimum(self):
        return float(self._y[self.min_index])

    def point_at_minimum(self):
        return gnp.copy(self._X[self.min_index])
