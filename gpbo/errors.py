# gpbo/errors.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Exception hierarchy of gpbo.

All errors derive from `GpboError`. Each one also derives from the
closest builtin (or numpy) exception so that callers catching
`ValueError`, `RuntimeError` or `numpy.linalg.LinAlgError` keep
working.
"""
import numpy


class GpboError(Exception):
    """Base class of gpbo errors."""


class ParseError(GpboError, ValueError):
    """Malformed or unknown kernel/mean expression."""


class StructureError(ParseError):
    """Expression with invalid syntax or wrong number of arguments."""


class UnsupportedName(GpboError, ValueError):
    """Unknown surrogate, kernel, mean or criterion identifier.

    Attributes
    ----------
    kind : str
        Family of the identifier ('surrogate', 'mean', 'criterion', ...).
    name : str
        The offending identifier.
    """

    def __init__(self, kind, name, known=()):
        self.kind = kind
        self.name = name
        msg = f"unknown {kind} {name!r}"
        if known:
            msg += f"; known: {', '.join(sorted(known))}"
        super().__init__(msg)


class DimensionMismatch(GpboError, ValueError):
    """Input with a shape inconsistent with the configured dimension."""


class NotPositiveDefinite(GpboError, numpy.linalg.LinAlgError):
    """Covariance matrix is not numerically positive definite.

    Attributes
    ----------
    pivot : int
        0-based index of the first failing pivot.
    """

    def __init__(self, pivot, message=None):
        self.pivot = int(pivot)
        if message is None:
            message = f"matrix is not positive definite (failing pivot {self.pivot})"
        super().__init__(message)


class NotReady(GpboError, RuntimeError):
    """Operation invalid in the current state of the object."""
