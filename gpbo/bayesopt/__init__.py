# gpbo/bayesopt/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Optimization loops.

Public API
----------
BayesOptContinuous, optimize
    Minimization over a box.
BayesOptDiscrete, optimize_discrete
    Minimization over a finite candidate set.
BOptState
    Checkpoint of a run.
"""

from .state import BOptState
from .base import BayesOptBase, Status
from .continuous import BayesOptContinuous, optimize
from .discrete import BayesOptDiscrete, optimize_discrete

__all__ = [
    "BOptState",
    "BayesOptBase",
    "Status",
    "BayesOptContinuous",
    "optimize",
    "BayesOptDiscrete",
    "optimize_discrete",
]
