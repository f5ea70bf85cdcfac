# coding: utf-8
## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
import math
import numpy as np


def forrester(x):
    """
    Forrester function on [0, 1].

    .. math::
        f(x) = (6x - 2)^2 \\sin(12x - 4)

    The global minimum is f(x*) = -6.02074 at x* = 0.75725.

    Parameters
    ----------
    x : numpy.ndarray
        Input array of shape (n,) or (n, 1)

    Returns
    -------
    numpy.ndarray
        Output array of shape (n,)

    Notes
    -----
    .. [1] Forrester, A., Sobester, A. and Keane, A. (2008), Engineering
        Design via Surrogate Modelling: A Practical Guide, Wiley.
    """
    x = np.asarray(x, dtype=float).reshape(-1)
    return (6.0 * x - 2.0) ** 2 * np.sin(12.0 * x - 4.0)


def braninhoo(x):
    """
    The Branin-Hoo function, usually minimized over [-5; 10] x [0; 15].

    Parameters
    ----------
    x : numpy.array
        2D array of shape (n, 2) where each row represents a point in the 2D space to evaluate the function.

    Returns
    -------
    numpy.array
        A 1D array of shape (n,) containing the Branin-Hoo function values evaluated at the input points.

    Notes
    -----
    The global minimum 0.397887 is reached at (-pi, 12.275), (pi, 2.275)
    and (9.42478, 2.475).

    .. [1] Branin, F. H. and Hoo, S. K. (1972), A Method for Finding Multiple
        Extrema of a Function of n Variables, in Numerical methods of
        Nonlinear Optimization (F. A. Lootsma, editor, Academic Press,
        London), 231-237.
    """
    x = np.asarray(x, dtype=float).reshape(-1, 2)
    a = 5.1 / (4 * math.pi**2)
    b = 5 / math.pi
    c = 10 * (1 - 1 / (8 * math.pi))

    z = (x[:, 1] - a * x[:, 0] ** 2 + b * x[:, 0] - 6) ** 2 + c * np.cos(x[:, 0]) + 10

    return z


def branin_normalized(x):
    """Branin-Hoo function with inputs rescaled from [0, 1]^2.

    Parameters
    ----------
    x : numpy.array
        Array of shape (n, 2) or (2,) with entries in [0, 1].

    Returns
    -------
    numpy.array
        Array of shape (n,).
    """
    x = np.asarray(x, dtype=float).reshape(-1, 2)
    u = np.column_stack([15.0 * x[:, 0] - 5.0, 15.0 * x[:, 1]])
    return braninhoo(u)


BRANIN_MINIMUM = 0.397887
FORRESTER_MINIMUM = -6.020740
FORRESTER_MINIMIZER = 0.757249
