# -*- coding: utf-8 -*-
"""
Closed-form building blocks of separable Gaussian HJM models with d state factors x = (x_1, ..., x_d) and
mean reversion rates χ = (χ_1, ..., χ_d). Under the risk-neutral measure,

    dx(t) = [y(t)·1 - χ x(t)] dt + σ(t)ᵀ dW(t)
    ds(t) = 1ᵀ x(t) dt                                   (integrated short rate, s(t) = ∫₀ᵗ r(u) du - ∫₀ᵗ f(0,u) du)
    dy(t)/dt = σ(t)ᵀσ(t) - χ y(t) - y(t) χ                (auxiliary variance)

All functions are pure; volatilities are passed as functions of time.

References:
[1] Leif Andersen, Vladimir Piterbarg - Interest Rate Modeling, Volume II (2010), Chapter 13.1 'Separable HJM models'
[2] Sebastian Schlenkrich - Multi-curve short rate models (2014), Section 2
"""
import numpy as np
from typing import Callable, Optional

from hjm.utils.integration import scalar_integral, vector_integral


def func_H(chi: np.ndarray, s: float, t: float) -> np.ndarray:
    """H(s,t) = exp(-χ(t-s)), the (diagonal of the) state decay over [s,t]."""
    return np.exp(-chi * (t - s))


def func_G(chi: np.ndarray, s: float, t: float) -> np.ndarray:
    """G(s,t) = ∫ₛᵗ H(s,u) du = (1 - exp(-χ(t-s))) / χ."""
    return (1.0 - np.exp(-chi * (t - s))) / chi


def benchmark_times_scaling(chi: np.ndarray, delta: np.ndarray) -> np.ndarray:
    """
    Scaling matrix H·Hf⁻¹ that maps benchmark forward rate volatilities to state factor volatilities.

    The benchmark forward rate f(t, t+δ_i) moves with Σ_j exp(-χ_j δ_i) x_j(t), i.e. (Hf·H⁻¹)[i,j] = exp(-χ_j δ_i).
    Inverting this matrix gives the state volatilities implied by the benchmark rate volatilities.

    References:
    [1] Andersen & Piterbarg (2010), Section 13.1.5 'Parameterization via benchmark forward rates'
    """
    Hf_H_inv = np.exp(-np.outer(delta, chi))
    return np.linalg.inv(Hf_H_inv)


def func_y(y0: np.ndarray,
           chi: np.ndarray,
           sigma_T: np.ndarray,
           s: float,
           t: float) -> np.ndarray:
    """
    Roll the auxiliary variance from y(s) = y0 forward to y(t), assuming the volatility is constant on [s,t].

        y(t)_ij = exp(-(χ_i+χ_j)(t-s)) y0_ij + (σᵀσ)_ij (1 - exp(-(χ_i+χ_j)(t-s))) / (χ_i+χ_j)

    Args:
        y0: auxiliary variance at s, shape (d,d)
        chi: mean reversion rates, shape (d,)
        sigma_T: state volatility on [s,t], shape (d, nb_factors); rows are states, columns are factors
        s: start time
        t: end time
    """
    chi_i_p_chi_j = chi[:, np.newaxis] + chi[np.newaxis, :]
    V = sigma_T @ sigma_T.T
    decay = np.exp(-chi_i_p_chi_j * (t - s))
    return decay * y0 + V * (1.0 - decay) / chi_i_p_chi_j


def _theta_integrand(chi: np.ndarray,
                     y: Callable[[float], np.ndarray],
                     sigma_T: Callable[[float], np.ndarray],
                     alpha: np.ndarray) -> Callable[[float], np.ndarray]:
    """Instantaneous state drift y(u)·1 + σᵀ(u)·α (excluding the mean reversion of the state)."""
    ones = np.ones(len(chi))
    def f(u):
        return y(u) @ ones + sigma_T(u) @ alpha
    return f


def func_Theta_x(chi: np.ndarray,
                 y: Callable[[float], np.ndarray],
                 sigma_T: Callable[[float], np.ndarray],
                 alpha: np.ndarray,
                 s: float,
                 t: float,
                 param_grid: Optional[np.ndarray]=None) -> np.ndarray:
    """
    Deterministic drift of the state factors over [s,t],

        Θ_x(s,t) = ∫ₛᵗ H(u,t) [y(u)·1 + σᵀ(u)·α] du

    Args:
        chi: mean reversion rates
        y: auxiliary variance as a function of time
        sigma_T: state volatility as a function of time (without correlation factor)
        alpha: quanto drift adjustment per factor
        s, t: start and end of the simulation period
        param_grid: times where the integrand is discontinuous
    """
    g = _theta_integrand(chi, y, sigma_T, alpha)
    def f(u):
        return func_H(chi, u, t) * g(u)
    return vector_integral(f, s, t, param_grid)


def func_Theta_s(chi: np.ndarray,
                 y: Callable[[float], np.ndarray],
                 sigma_T: Callable[[float], np.ndarray],
                 alpha: np.ndarray,
                 s: float,
                 t: float,
                 param_grid: Optional[np.ndarray]=None) -> float:
    """
    Deterministic drift of the integrated state s(t) over [s,t], i.e. the integral of the summed state drifts,

        Θ_s(s,t) = ∫ₛᵗ 1ᵀ Θ_x(s,v) dv = ∫ₛᵗ G(u,t)ᵀ [y(u)·1 + σᵀ(u)·α] du

    The second form follows from exchanging the order of integration, as ∫ᵤᵗ H(u,v) dv = G(u,t).
    """
    g = _theta_integrand(chi, y, sigma_T, alpha)
    def f(u):
        return func_G(chi, u, t) @ g(u)
    return scalar_integral(f, s, t, param_grid)


def func_H_T(chi: np.ndarray, s: float, t: float) -> np.ndarray:
    """
    Transposed convection matrix for the state (x_1, ..., x_d, s) over [s,t].

        x(t) = H(s,t) x(s) + ...
        s(t) = s(s) + G(s,t)ᵀ x(s) + ...
    """
    d = len(chi)
    H_T = np.zeros((d + 1, d + 1))
    H_T[:d, :d] = np.diag(func_H(chi, s, t))
    H_T[:d, d] = func_G(chi, s, t)
    H_T[d, d] = 1.0
    return H_T


def func_Sigma_T(chi: np.ndarray,
                 sigma_T: Callable[[float], np.ndarray],
                 s: float,
                 t: float) -> Callable[[float], np.ndarray]:
    """
    Volatility of the state (x_1, ..., x_d, s) at u in [s,t], as seen from t. Returns a function of u giving a
    matrix of shape (d+1, nb_factors); the first d rows are H(u,t)·σᵀ(u) and the last row is G(u,t)ᵀσᵀ(u).
    """
    def f(u):
        sigma_T_u = sigma_T(u)
        return np.vstack([
            func_H(chi, u, t)[:, np.newaxis] * sigma_T_u,
            func_G(chi, u, t)[np.newaxis, :] @ sigma_T_u,
        ])
    return f
