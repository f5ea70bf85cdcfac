## --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
## --------------------------------------------------------------
"""
Initial designs in the unit hypercube.

Random designs draw from the numpy Generator of the optimization loop
so that a checkpointed run reproduces them; the quasi-random designs
are unscrambled, hence deterministic.
"""
import warnings

import numpy as np
from scipy.stats import qmc
from scipy.spatial.distance import pdist


def mindist(sample):
    """
    Calculate the minimum distance (separation) between any pair of points in the sample.

    Parameters
    ----------
    sample : numpy.ndarray
        Array of points in the sample.

    Returns
    -------
    float
        Minimum distance between any pair of points in the sample.
    """
    D = pdist(sample)
    mindist = np.min(D)
    return mindist


def scale(sample_standard, box):
    """
    Map a standard sample in [0, 1]^dim to the given box.

    Parameters
    ----------
    sample_standard : numpy.ndarray
        Array of points in the standard sample.
    box : list of lists
        List of lists containing the lower and upper bounds of the box.

    Returns
    -------
    numpy.ndarray
        Sample points mapped to the given box.
    """
    l_bounds, u_bounds = box[0], box[1]
    sample_box = qmc.scale(sample_standard, l_bounds, u_bounds)
    return sample_box


def regulargrid(dim, n, box):
    """
    Build a regular grid in the dim-dimensional hyperrectangle.

    If n is an integer, a grid of size n^dim is built; if n is a list
    of length dim, a grid of size prod(n) is built, with n_i points on
    coordinate i.

    Parameters
    ----------
    dim : int
        Number of dimensions.
    n : int or list
        Number of points per dimension or a list with the number of points per dimension.
    box : list of lists
        List of lists containing the lower and upper bounds of the box.

    Returns
    -------
    x : numpy.ndarray
        Regular grid in the dim-dimensional hyperrectangle.
    """
    if not isinstance(n, list):
        n = [n for i in range(dim)]
    xmin, xmax = box[0], box[1]
    levels = [np.linspace(xmin[i], xmax[i], n[i]) for i in range(dim)]
    Xv = np.array(np.meshgrid(*levels, indexing="ij"))
    N = int(np.prod(n))
    return Xv.reshape(dim, N).T.copy()


def lhs(dim, n, rng):
    """
    Latin hypercube sample in [0, 1]^dim.

    Each coordinate is an independent random permutation of the n
    strata, jittered uniformly within each stratum.

    Parameters
    ----------
    dim : int
        Number of dimensions.
    n : int
        Number of points.
    rng : numpy.random.Generator
        Source of randomness.

    Returns
    -------
    numpy.ndarray, shape (n, dim)
    """
    x = np.empty((n, dim))
    for j in range(dim):
        x[:, j] = (rng.permutation(n) + rng.random(n)) / n
    return x


def _qmc_sample(engine, n):
    engine.fast_forward(1)  # skip the origin
    with warnings.catch_warnings():
        # Sobol balance warning when n is not a power of 2
        warnings.simplefilter("ignore", UserWarning)
        return engine.random(n)


def sobol(dim, n):
    """Unscrambled Sobol sequence (first point skipped)."""
    return _qmc_sample(qmc.Sobol(d=dim, scramble=False), n)


def halton(dim, n):
    """Unscrambled Halton sequence (first point skipped)."""
    return _qmc_sample(qmc.Halton(d=dim, scramble=False), n)


def randunif(dim, n, rng):
    """
    Generate a random uniform sample in [0, 1]^dim.

    Parameters
    ----------
    dim : int
        Number of dimensions.
    n : int
        Number of points in the sample.
    rng : numpy.random.Generator
        Source of randomness.

    Returns
    -------
    numpy.ndarray
        Random uniform sample.
    """
    return rng.random((n, dim))


def sample(n, dim, method, rng):
    """Initial design of n points in [0, 1]^dim.

    Parameters
    ----------
    n : int
    dim : int
    method : {"lhs", "sobol", "halton", "uniform"}
    rng : numpy.random.Generator
        Used by the random methods only.
    """
    if method == "lhs":
        return lhs(dim, n, rng)
    if method == "sobol":
        return sobol(dim, n)
    if method == "halton":
        return halton(dim, n)
    if method == "uniform":
        return randunif(dim, n, rng)
    raise ValueError(f"unknown design method {method!r}")
