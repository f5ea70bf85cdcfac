# gpbo/__init__.py

from . import config
from . import num
from . import errors
from . import parser
from . import parameters
from . import kernel
from . import mean
from . import core
from . import criteria
from . import misc
from . import bayesopt
from .parameters import BOptParams
from .bayesopt import BayesOptContinuous, BayesOptDiscrete, BOptState, optimize, optimize_discrete
import os

__all__ = [
    "num",
    "kernel",
    "core",
    "bayesopt",
    "BOptParams",
    "BOptState",
    "BayesOptContinuous",
    "BayesOptDiscrete",
    "optimize",
    "optimize_discrete",
    "__version__",
]

# Read version from VERSION file at project root
_version_file = os.path.join(os.path.dirname(__file__), "..", "VERSION")
try:
    with open(_version_file, "r") as f:
        __version__ = f.read().strip()
except FileNotFoundError:
    __version__ = "0.0.0"
