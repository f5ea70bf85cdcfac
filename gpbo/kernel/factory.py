# gpbo/kernel/factory.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Build kernel trees from textual expressions.

The registry maps a kernel name to its class. `DEFAULT_KERNELS` is
built once at import time and is read-only; pass a different mapping
to `KernelFactory` to add kernels.
"""
from types import MappingProxyType

from gpbo.errors import ParseError, StructureError
from gpbo.parser import Expression, parse_expression
from .matern import MaternISO1, MaternISO3, MaternISO5, MaternARD1, MaternARD3, MaternARD5
from .exponential import SEISO, SEARD, RQISO
from .polynomial import (
    ConstKernel,
    LinearKernel,
    LinearARDKernel,
    Polynomial1Kernel,
    Polynomial2Kernel,
    Polynomial3Kernel,
    Polynomial4Kernel,
    Polynomial5Kernel,
    Polynomial6Kernel,
)
from .hamming import HammingKernel
from .combined import CombinedKernel, KernelSum, KernelProd

_PRIMITIVES = (
    ConstKernel,
    LinearKernel,
    LinearARDKernel,
    HammingKernel,
    MaternISO1,
    MaternISO3,
    MaternISO5,
    MaternARD1,
    MaternARD3,
    MaternARD5,
    Polynomial1Kernel,
    Polynomial2Kernel,
    Polynomial3Kernel,
    Polynomial4Kernel,
    Polynomial5Kernel,
    Polynomial6Kernel,
    SEARD,
    SEISO,
    RQISO,
)

DEFAULT_KERNELS = MappingProxyType(
    {**{k.name: k for k in _PRIMITIVES}, "kSum": KernelSum, "kProd": KernelProd}
)


class KernelFactory:
    """Create kernels by name from a registry.

    Parameters
    ----------
    registry : Mapping[str, type], optional
        Name -> kernel class. Defaults to `DEFAULT_KERNELS`.

    Examples
    --------
    >>> k = KernelFactory().create("kSum(kSEISO, kConst)", dim=2)
    >>> k.n_hyperparameters
    2
    """

    def __init__(self, registry=DEFAULT_KERNELS):
        self.registry = MappingProxyType(dict(registry))

    def create(self, expression, dim):
        if isinstance(expression, str):
            expression = parse_expression(expression)
        return self._build(expression, dim)

    def _build(self, node: Expression, dim):
        try:
            cls = self.registry[node.name]
        except KeyError:
            raise ParseError(f"kernel not found: {node.name!r}") from None
        if issubclass(cls, CombinedKernel):
            if len(node.args) != 2:
                raise StructureError(
                    f"{node.name} takes exactly 2 arguments, got {len(node.args)}"
                )
            return cls(self._build(node.args[0], dim), self._build(node.args[1], dim))
        if node.args:
            raise StructureError(f"primitive kernel {node.name} takes no arguments")
        return cls(dim)


def create_kernel(expression, dim, registry=DEFAULT_KERNELS):
    """Shortcut for ``KernelFactory(registry).create(expression, dim)``."""
    return KernelFactory(registry).create(expression, dim)
