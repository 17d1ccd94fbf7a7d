# -*- coding: utf-8 -*-
import os
if __name__ == "__main__":
    os.chdir(os.environ.get('PROJECT_DIR_HJM'))

from dataclasses import dataclass, field
from functools import partial
import logging
import warnings
import numpy as np
import pandas as pd
from prettytable import PrettyTable
from typing import Callable, Optional

from hjm.enums import Capability
from hjm.pricing_engine.model import Model, QuantoModel, StateDependence, StateIndependent, StateDependentOn, \
    check_state, quanto_drift
from hjm.pricing_engine.model_state import ModelState
from hjm.pricing_engine.separable_hjm import benchmark_times_scaling, func_G, func_y, func_Theta_x, \
    func_Theta_s, func_H_T, func_Sigma_T
from hjm.term_structures import BackwardFlatVolatility
from hjm.utils import InvalidParameterError, CorrelationError, AliasMismatchError
from hjm.utils.settings import STATE_ALIAS_SEP, BANK_ACCOUNT_ALIAS_SUFFIX, FACTOR_ALIAS_SEP, CORRELATION_SYMMETRY_TOL

# Gaussian HJM model with piece-wise constant benchmark rate volatility and constant mean reversion.
# The model is parameterised by the volatilities σ_f of d benchmark forward rates f(t, t+δ_i),
# which are mapped onto the volatilities of d state factors x_1, ..., x_d.

# [1] Leif Andersen, Vladimir Piterbarg - Interest Rate Modeling, Volume II (2010), Chapter 13.1
# [2] Sebastian Schlenkrich - Multi-curve short rate models (2014)


@dataclass(frozen=True)
class GaussianHjmModelVolatility:
    """
    Volatility of the state factors, σᵀ(u) = H·Hf⁻¹ · diag(σ_f(u)) · Dfᵀ.

    Rows are states and columns are factors. The correlation factor Dfᵀ is the lower triangular Cholesky factor
    of the factor correlation matrix, so σᵀ(u)·σ(u) is the instantaneous covariance of the state factors.
    """
    HHfInv: np.ndarray # Scaling matrix H·Hf⁻¹, shape (d,d)
    sigma_f: BackwardFlatVolatility # Benchmark rate volatilities, d-vector valued
    DfT: np.ndarray # Correlation factor, shape (d,d)

    def __call__(self, u: float) -> np.ndarray:
        # Row i of DfT is scaled by the volatility of the i-th benchmark rate.
        return self.HHfInv @ (self.DfT * self.sigma_f(u)[:, np.newaxis])


def hybrid_volatility(HHfInv: np.ndarray, sigma_f: Callable[[float], np.ndarray], u: float) -> np.ndarray:
    """
    State volatility without the correlation factor, H·Hf⁻¹ · diag(σ_f(u)).

    Used for drift and diffusion terms where correlations are applied downstream (by the quanto drift or by the
    simulator via the factor correlation matrix), so they are applied exactly once.
    """
    return HHfInv * sigma_f(u)[np.newaxis, :]


@dataclass(frozen=True, eq=False)
class GaussianHjmModel(Model):
    """
    Gaussian HJM model with piece-wise constant benchmark rate volatility and constant mean reversion.

    The model state is (x_1, ..., x_d, s), where s is the integrated short rate (the log bank account,
    net of the initial forward curve).

    Attributes:
        alias: model identifier, also the prefix of the state and factor aliases
        delta: benchmark rate times δ_1 < ... < δ_d (in years), δ_1 >= 0. A callable returning a vector.
        chi: mean reversion rates 0 < χ_1 < ... < χ_d. A callable returning a vector.
        sigma_f: piece-wise constant volatility curve of the d benchmark rates
        correlation_holder: optional; provides the correlation matrix of the model's factors
        quanto_model: optional; provides the quanto drift adjustment if the model is simulated in a foreign measure
    """
    alias: str
    delta: Callable[[], np.ndarray]
    chi: Callable[[], np.ndarray]
    sigma_f: BackwardFlatVolatility
    correlation_holder: Optional[Callable] = None
    quanto_model: Optional[QuantoModel] = None

    # Attributes set in __post_init__
    sigma_T: GaussianHjmModelVolatility = field(init=False)
    y: np.ndarray = field(init=False) # Auxiliary variance at the volatility curve times, shape (n,d,d)
    state_alias: tuple = field(init=False)
    factor_alias: tuple = field(init=False)

    def __post_init__(self):
        delta = np.atleast_1d(np.asarray(self.delta(), dtype=np.float64))
        chi = self._chi()
        self._validate_inputs(delta, chi)
        d = len(delta)

        state_alias = [self.alias + STATE_ALIAS_SEP + str(k) for k in range(1, d + 1)] \
                      + [self.alias + BANK_ACCOUNT_ALIAS_SUFFIX]
        factor_alias = [self.alias + FACTOR_ALIAS_SEP + str(k) for k in range(1, d + 1)]

        DfT = np.eye(d)
        if self.correlation_holder is not None:
            DfT = self._correlation_factor(np.asarray(self.correlation_holder(factor_alias), dtype=np.float64))

        HHfInv = benchmark_times_scaling(chi, delta)
        HHfInv.flags.writeable = False
        DfT.flags.writeable = False
        sigma_T = GaussianHjmModelVolatility(HHfInv=HHfInv, sigma_f=self.sigma_f, DfT=DfT)

        # Pre-calculate the auxiliary variance at each volatility curve time.
        times = self.sigma_f.times
        y = np.zeros((len(times), d, d))
        t0, y0 = 0.0, np.zeros((d, d))
        for k, t1 in enumerate(times):
            y[k] = func_y(y0, chi, sigma_T((t0 + t1) / 2), t0, t1)
            t0, y0 = t1, y[k]
        y.flags.writeable = False

        object.__setattr__(self, 'sigma_T', sigma_T)
        object.__setattr__(self, 'y', y)
        object.__setattr__(self, 'state_alias', tuple(state_alias))
        object.__setattr__(self, 'factor_alias', tuple(factor_alias))
        logging.info(f"Gaussian HJM model '{self.alias}': auxiliary variance calculated for {len(times)} volatility times.")

    def _validate_inputs(self, delta: np.ndarray, chi: np.ndarray):
        def fail(msg):
            logging.error(msg)
            raise InvalidParameterError(msg)

        if delta.ndim != 1 or len(delta) == 0:
            fail(f"'delta' of model '{self.alias}' must be a non-empty vector")
        if not delta[0] >= 0:
            fail(f"'delta' of model '{self.alias}' must be non-negative: {delta}")
        if not np.all(np.diff(delta) > 0):
            fail(f"'delta' of model '{self.alias}' must be strictly increasing: {delta}")
        if chi.shape != delta.shape:
            fail(f"'chi' of model '{self.alias}' must have the same length as 'delta' ({len(delta)}): {chi}")
        if not chi[0] > 0:
            fail(f"'chi' of model '{self.alias}' must be positive: {chi}")
        if not np.all(np.diff(chi) > 0):
            fail(f"'chi' of model '{self.alias}' must be strictly increasing: {chi}")
        sigma_0 = np.asarray(self.sigma_f(0.0))
        if sigma_0.shape != (len(delta),):
            fail(f"Volatility curve of model '{self.alias}' must return {len(delta)} values. "
                 f"Instead returns shape {sigma_0.shape}")

    def _correlation_factor(self, Gamma: np.ndarray) -> np.ndarray:
        """Lower triangular Cholesky factor L of the factor correlation matrix Γ = L·Lᵀ."""
        def fail(msg):
            logging.error(msg)
            raise CorrelationError(msg)

        d = len(self.delta())
        if Gamma.shape != (d, d):
            fail(f"Correlation matrix of model '{self.alias}' must have shape ({d},{d}). Instead has shape {Gamma.shape}")
        if not np.allclose(Gamma, Gamma.T, rtol=0.0, atol=CORRELATION_SYMMETRY_TOL):
            fail(f"Correlation matrix of model '{self.alias}' is not symmetric:\n{Gamma}")
        try:
            return np.linalg.cholesky(Gamma)
        except np.linalg.LinAlgError as e:
            fail(f"Correlation matrix of model '{self.alias}' is not positive definite: {e}\n{Gamma}")

    def _chi(self) -> np.ndarray:
        return np.atleast_1d(np.asarray(self.chi(), dtype=np.float64))

    def parameter_grid(self) -> np.ndarray:
        """
        Times representing the (joint) grid points of the piece-wise constant model parameters.

        To be used with time-integration methods that require smooth integrand functions.
        """
        return self.sigma_f.times

    def state_dependence(self) -> StateDependence:
        """Θ is state-dependent if (and only if) the quanto adjustment is state-dependent. H and Σ never are."""
        if self.quanto_model is not None and self.quanto_model.state_dependent:
            return StateDependentOn(frozenset({Capability.THETA}))
        return StateIndependent()

    def func_y(self, t: float) -> np.ndarray:
        """Auxiliary variance y(t), rolled forward from the pre-calculated value at the previous volatility time."""
        d = len(self.state_alias) - 1
        t_idx = self.sigma_f.time_idx(t)
        if t_idx == 0:
            t0, y0 = 0.0, np.zeros((d, d))
        else:
            t0, y0 = self.sigma_f.times[t_idx - 1], self.y[t_idx - 1]
        return func_y(y0, self._chi(), self.sigma_T((t0 + t) / 2), t0, t)

    def Theta(self, s: float, t: float, X: Optional[ModelState]=None) -> np.ndarray:
        """
        Deterministic drift component for simulation over [s,t].

        Returns a vector of length len(state_alias): the drift of the d state factors followed by the drift of the
        integrated state s. If Θ is state-dependent, a model state X must be supplied.
        """
        check_state(self.state_dependence(), Capability.THETA, X)
        chi = self._chi()
        # The quanto drift contains the correlations already; the hybrid volatility makes sure they are not applied twice.
        sigma_T_hyb = partial(hybrid_volatility, self.sigma_T.HHfInv, self.sigma_f)
        alpha = quanto_drift(self.factor_alias, self.quanto_model, s, t, X)
        return np.concatenate([
            func_Theta_x(chi, self.func_y, sigma_T_hyb, alpha, s, t, self.parameter_grid()),
            [func_Theta_s(chi, self.func_y, sigma_T_hyb, alpha, s, t, self.parameter_grid())],
        ])

    def H_T(self, s: float, t: float, X: Optional[ModelState]=None) -> np.ndarray:
        """Transposed convection matrix H for simulation over [s,t]."""
        check_state(self.state_dependence(), Capability.H_T, X)
        return func_H_T(self._chi(), s, t)

    def Sigma_T(self, s: float, t: float, X: Optional[ModelState]=None) -> Callable[[float], np.ndarray]:
        """
        Matrix-valued function u -> Σᵀ(u) on [s,t], of shape (len(state_alias), len(factor_alias)).

        Correlations are not included; the simulator applies them via the correlation matrix of factor_alias.
        """
        check_state(self.state_dependence(), Capability.SIGMA_T, X)
        sigma_T_hyb = partial(hybrid_volatility, self.sigma_T.HHfInv, self.sigma_f)
        return func_Sigma_T(self._chi(), sigma_T_hyb, s, t)

    def _check_alias(self, model_alias: str):
        if model_alias != self.alias:
            msg = f"Model alias '{model_alias}' does not match model '{self.alias}'"
            logging.error(msg)
            raise AliasMismatchError(msg)

    def log_bank_account(self, model_alias: str, t: float, X: ModelState) -> np.ndarray:
        """Integral over the sum of the state variables, s(t), per path."""
        self._check_alias(model_alias)
        return X(self.state_alias[-1])

    def log_zero_bond(self, model_alias: str, t: float, T: float, X: ModelState) -> np.ndarray:
        """
        Zero bond term G(t,T)ᵀx(t) + 0.5 G(t,T)ᵀy(t)G(t,T) per path.

        The zero bond price is P(t,T) = P(0,T) / P(0,t) · exp(-[G(t,T)ᵀx(t) + 0.5 G(t,T)ᵀy(t)G(t,T)]).
        """
        self._check_alias(model_alias)
        if T < t:
            warnings.warn(f"Zero bond maturity T={T} is before the observation time t={t}")
        d = len(self.state_alias) - 1 # Exclude the integrated state s
        G = func_G(self._chi(), t, T)
        y = self.func_y(t)
        X_ = X.X[[X.idx[alias] for alias in self.state_alias[:d]], :]
        return X_.T @ G + 0.5 * G @ y @ G

    def simulation_parameters(self, correlation_holder, s: float, t: float):
        """
        Pre-calculate parameters that are used in state-dependent Θ and Σ calculations.

        For the Gaussian HJM model there are no valuations that should be cached.
        """
        return None

    def get_auxiliary_variance_df(self) -> pd.DataFrame:
        """Pre-calculated auxiliary variance y at the volatility curve times, one row per (time, i, j)."""
        n, d, _ = self.y.shape
        i, j = np.meshgrid(np.arange(d), np.arange(d), indexing='ij')
        return pd.DataFrame({
            'years': np.repeat(self.sigma_f.times, d * d),
            'i': np.tile(i.flatten(), n),
            'j': np.tile(j.flatten(), n),
            'y': self.y.reshape(-1),
        })

    def print_parameters(self):
        table = PrettyTable()
        print(f"\nGaussian HJM model '{self.alias}'")
        table.add_column('State alias', self.state_alias[:-1])
        table.add_column('Factor alias', self.factor_alias)
        table.add_column('Delta (years)', [f'{v:.4g}' for v in self.delta()])
        table.add_column('Chi', [f'{v:.4g}' for v in self.chi()])
        print(table)
