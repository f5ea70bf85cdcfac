# gpbo/parameters.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Run configuration of a Bayesian optimization loop.

`BOptParams` gathers every option of the loop; `KernelParameters` and
`MeanParameters` describe the surrogate's covariance and mean
functions together with the normal priors placed on their parameters.
"""
from dataclasses import dataclass, field, asdict, fields
from typing import List, Optional

_INIT_METHODS = ("lhs", "sobol", "halton", "uniform")
_L_TYPES = ("fixed", "empirical")
_SC_TYPES = ("ml", "map")


def _as_float_list(v, name):
    try:
        out = [float(a) for a in (v if hasattr(v, "__iter__") else [v])]
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a sequence of numbers") from e
    return out


def broadcast_to(values, n, name="values"):
    """Return `values` as a list of length n, broadcasting a single entry."""
    values = list(values)
    if len(values) == n:
        return values
    if len(values) == 1:
        return values * n
    raise ValueError(f"{name} has {len(values)} entries, expected 1 or {n}")


@dataclass
class KernelParameters:
    """Covariance function and normal prior on its hyperparameters.

    `hp_mean` and `hp_std` are given on the raw (positive) scale. A
    single value is broadcast to every hyperparameter of the kernel. A
    zero std fixes the corresponding hyperparameter in MAP learning.
    """

    name: str = "kMaternARD5"
    hp_mean: List[float] = field(default_factory=lambda: [1.0])
    hp_std: List[float] = field(default_factory=lambda: [10.0])

    def __post_init__(self):
        self.hp_mean = _as_float_list(self.hp_mean, "hp_mean")
        self.hp_std = _as_float_list(self.hp_std, "hp_std")
        if len(self.hp_mean) == 0:
            raise ValueError("hp_mean must not be empty")
        if any(m <= 0.0 for m in self.hp_mean):
            raise ValueError("kernel hyperparameters must be positive")
        if any(s < 0.0 for s in self.hp_std):
            raise ValueError("hp_std must be nonnegative")


@dataclass
class MeanParameters:
    """Mean function and normal prior on its coefficients."""

    name: str = "mConst"
    coef_mean: List[float] = field(default_factory=lambda: [1.0])
    coef_std: List[float] = field(default_factory=lambda: [1000.0])

    def __post_init__(self):
        self.coef_mean = _as_float_list(self.coef_mean, "coef_mean")
        self.coef_std = _as_float_list(self.coef_std, "coef_std")
        if any(s < 0.0 for s in self.coef_std):
            raise ValueError("coef_std must be nonnegative")


@dataclass
class BOptParams:
    """
    Configuration of a Bayesian optimization run.
    """

    n_iterations: int = 190
    n_inner_iterations: int = 500
    n_init_samples: int = 10
    n_iter_relearn: int = 50
    init_method: str = "lhs"
    random_seed: int = -1  # negative: fresh entropy
    verbose_level: int = 1
    log_filename: str = "gpbo.log"
    load_save_flag: int = 0  # 1 load, 2 save, 3 both
    load_filename: str = "gpbo_state.json"
    save_filename: str = "gpbo_state.json"
    surr_name: str = "sStudentTProcessJef"
    sigma_s: float = 1.0
    noise: float = 1e-6
    alpha: float = 1.0
    beta: float = 1.0
    l_type: str = "empirical"
    sc_type: str = "map"
    epsilon: float = 0.0
    force_jump: int = 20
    crit_name: str = "cEI"
    crit_params: List[float] = field(default_factory=list)
    regularizer_retries: int = 3
    regularizer_growth: float = 10.0
    kernel: KernelParameters = field(default_factory=KernelParameters)
    mean: MeanParameters = field(default_factory=MeanParameters)

    def __post_init__(self):
        if isinstance(self.kernel, dict):
            self.kernel = KernelParameters(**self.kernel)
        if isinstance(self.mean, dict):
            self.mean = MeanParameters(**self.mean)
        self.crit_params = _as_float_list(self.crit_params, "crit_params")

        if self.n_iterations < 0:
            raise ValueError("n_iterations must be >= 0")
        if self.n_inner_iterations < 1:
            raise ValueError("n_inner_iterations must be >= 1")
        if self.n_init_samples < 1:
            raise ValueError("n_init_samples must be >= 1")
        if self.n_iter_relearn < 0:
            raise ValueError("n_iter_relearn must be >= 0 (0 disables relearning)")
        if self.init_method not in _INIT_METHODS:
            raise ValueError(f"init_method must be one of {_INIT_METHODS}")
        if self.l_type not in _L_TYPES:
            raise ValueError(f"l_type must be one of {_L_TYPES}")
        if self.sc_type not in _SC_TYPES:
            raise ValueError(f"sc_type must be one of {_SC_TYPES}")
        if self.load_save_flag not in (0, 1, 2, 3):
            raise ValueError("load_save_flag must be 0, 1, 2 or 3")
        if self.verbose_level < 0:
            raise ValueError("verbose_level must be >= 0")
        if self.sigma_s <= 0.0:
            raise ValueError("sigma_s must be positive")
        if self.noise < 0.0:
            raise ValueError("noise must be nonnegative")
        if self.alpha <= 0.0 or self.beta <= 0.0:
            raise ValueError("alpha and beta must be positive")
        if not 0.0 <= self.epsilon <= 1.0:
            raise ValueError("epsilon must lie in [0, 1]")
        if self.force_jump < 0:
            raise ValueError("force_jump must be >= 0 (0 disables jumps)")
        if self.regularizer_retries < 0:
            raise ValueError("regularizer_retries must be >= 0")
        if self.regularizer_growth <= 1.0:
            raise ValueError("regularizer_growth must be > 1")

    @property
    def load_state(self) -> bool:
        return bool(self.load_save_flag & 1)

    @property
    def save_state(self) -> bool:
        return bool(self.load_save_flag & 2)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Optional[dict] = None, **overrides) -> "BOptParams":
        """Build parameters from a plain dictionary; unknown keys raise."""
        d = dict(d or {})
        d.update(overrides)
        known = {f.name for f in fields(cls)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(f"unknown parameters: {', '.join(sorted(unknown))}")
        return cls(**d)
