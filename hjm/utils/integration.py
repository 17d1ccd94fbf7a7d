# -*- coding: utf-8 -*-
"""
Wrappers around the quadrature routines used in the package.

Model parameters are piece-wise constant, so integrands are typically only piece-wise smooth.
Integrating over each sub-interval between parameter grid points separately keeps the quadrature accurate.
"""
import numpy as np
import scipy
from typing import Callable, Optional

from hjm.utils.settings import QUAD_EPSABS, QUAD_EPSREL, QUAD_LIMIT


def intersect_interval(s: float,
                       t: float,
                       grid: Optional[np.ndarray]) -> np.ndarray:
    """
    Calculate the effective integration grid for [s,t].

    Returns the sorted, unique points {s, t} ∪ {g in grid : s <= g <= t}.
    If s == t, the single point is duplicated so a zero-length interval remains representable.
    """
    if t < s:
        raise ValueError(f"t ({t}) is less than s ({s}).")

    grid = np.array([] if grid is None else grid, dtype=np.float64).flatten()
    grid = grid[(grid >= s) & (grid <= t)]
    points = np.unique(np.concatenate([[s, t], grid]).astype(np.float64))
    if len(points) == 1:
        points = np.array([points[0], points[0]])
    return points


def scalar_integral(f: Callable[[float], float],
                    s: float,
                    t: float,
                    grid: Optional[np.ndarray]=None) -> float:
    """Integral of the scalar function f over [s,t], split at the grid points inside [s,t]."""
    if grid is None:
        return _quad(f, s, t)
    points = intersect_interval(s, t, grid)
    return sum(_quad(f, a, b) for a, b in zip(points[:-1], points[1:]))


def vector_integral(f: Callable[[float], np.ndarray],
                    s: float,
                    t: float,
                    grid: Optional[np.ndarray]=None) -> np.ndarray:
    """Integral of the vector (or matrix) valued function f over [s,t], split at the grid points inside [s,t]."""
    if grid is None:
        return _quad_vec(f, s, t)
    points = intersect_interval(s, t, grid)
    return sum(_quad_vec(f, a, b) for a, b in zip(points[:-1], points[1:]))


def _quad(f, a, b):
    if a == b:
        return 0.0
    return scipy.integrate.quad(func=f, a=a, b=b, epsabs=QUAD_EPSABS, epsrel=QUAD_EPSREL, limit=QUAD_LIMIT)[0]


def _quad_vec(f, a, b):
    if a == b:
        return np.zeros_like(np.asarray(f(a), dtype=np.float64))
    return scipy.integrate.quad_vec(f=f, a=a, b=b, epsabs=QUAD_EPSABS, epsrel=QUAD_EPSREL, limit=QUAD_LIMIT)[0]
