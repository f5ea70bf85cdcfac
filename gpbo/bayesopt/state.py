# gpbo/bayesopt/state.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Checkpoint of an optimization run.
"""
import copy
import json
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from gpbo.errors import DimensionMismatch

STATE_FORMAT_VERSION = 1


@dataclass
class BOptState:
    """Everything needed to resume an optimization run exactly.

    Attributes
    ----------
    current_iter : int
        Number of iterations done after the initial design.
    X : numpy.ndarray, shape (n, d)
        Samples, in the unit hypercube (or candidate space).
    y : numpy.ndarray, shape (n,)
        Observed values.
    rng_state : dict
        State of the bit generator of the loop's numpy Generator.
    best_index : int
        Index of the best sample.
    kernel_hyperparameters : numpy.ndarray
        Kernel hyperparameters at the last full factorization.
    regularizer : float
        Diagonal regularizer in use.
    n_factorized : int
        Number of samples at the last full factorization; the
        remaining samples were added by incremental updates.
    counter_stuck : int
    y_prev : float or None
        Bookkeeping of the random jumps (``force_jump``).
    """

    current_iter: int = 0
    X: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))
    y: np.ndarray = field(default_factory=lambda: np.zeros(0))
    rng_state: dict = field(default_factory=dict)
    best_index: int = -1
    kernel_hyperparameters: np.ndarray = field(default_factory=lambda: np.zeros(0))
    regularizer: float = 0.0
    n_factorized: int = 0
    counter_stuck: int = 0
    y_prev: Optional[float] = None

    def __post_init__(self):
        X = np.array(self.X, dtype=float)
        self.X = X if X.ndim == 2 else (np.zeros((0, 0)) if X.size == 0 else X.reshape(1, -1))
        self.y = np.array(self.y, dtype=float).reshape(-1)
        self.kernel_hyperparameters = np.array(self.kernel_hyperparameters, dtype=float).reshape(-1)
        if self.X.shape[0] != self.y.shape[0]:
            raise DimensionMismatch(
                f"state has {self.X.shape[0]} points but {self.y.shape[0]} values"
            )
        if not 0 <= self.n_factorized <= self.y.shape[0]:
            raise ValueError("n_factorized must lie in [0, number of samples]")

    @property
    def n_samples(self):
        return self.y.shape[0]

    def copy(self):
        return copy.deepcopy(self)

    def to_dict(self):
        return {
            "format_version": STATE_FORMAT_VERSION,
            "current_iter": int(self.current_iter),
            "n_samples": int(self.n_samples),
            "X": self.X.tolist(),
            "y": self.y.tolist(),
            "rng_state": copy.deepcopy(self.rng_state),
            "best_index": int(self.best_index),
            "kernel_hyperparameters": self.kernel_hyperparameters.tolist(),
            "regularizer": float(self.regularizer),
            "n_factorized": int(self.n_factorized),
            "counter_stuck": int(self.counter_stuck),
            "y_prev": None if self.y_prev is None else float(self.y_prev),
        }

    @classmethod
    def from_dict(cls, d):
        d = dict(d)
        version = d.pop("format_version", STATE_FORMAT_VERSION)
        if version != STATE_FORMAT_VERSION:
            raise ValueError(f"unsupported state format version {version}")
        n = d.pop("n_samples", None)
        state = cls(**d)
        if n is not None and n != state.n_samples:
            raise DimensionMismatch(f"state declares {n} samples, found {state.n_samples}")
        return state

    def save(self, filename):
        with open(filename, "w") as f:
            json.dump(self.to_dict(), f)

    @classmethod
    def load(cls, filename):
        with open(filename, "r") as f:
            return cls.from_dict(json.load(f))
