# gpbo/misc/__init__.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Miscellaneous tools: initial designs, test functions and plotting.

`plotutils` imports matplotlib and is not loaded here.
"""
from . import designs
from . import testfunctions
