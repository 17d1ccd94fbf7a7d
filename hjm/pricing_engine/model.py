# -*- coding: utf-8 -*-
import os
if __name__ == "__main__":
    os.chdir(os.environ.get('PROJECT_DIR_HJM'))

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
import numpy as np
from typing import Callable, Optional, Sequence, Union

from hjm.enums import Capability
from hjm.pricing_engine.model_state import ModelState
from hjm.utils import StateRequirementError


@dataclass(frozen=True)
class StateIndependent:
    """None of the model's operators require a state vector."""

    def requires_state(self, capability: Capability) -> bool:
        return False


@dataclass(frozen=True)
class StateDependentOn:
    """The listed operators require a state vector; all others must be called without one."""
    capabilities: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, 'capabilities', frozenset(Capability.from_value(c) for c in self.capabilities))

    def requires_state(self, capability: Capability) -> bool:
        return Capability.from_value(capability) in self.capabilities


StateDependence = Union[StateIndependent, StateDependentOn]


def check_state(state_dependence: StateDependence,
                capability: Capability,
                X: Optional[ModelState]):
    """Raise a StateRequirementError if X is supplied (omitted) for a state-independent (state-dependent) operator."""
    if state_dependence.requires_state(capability) and X is None:
        msg = f"{capability.display_name} is state-dependent; a model state must be supplied."
        logging.error(msg)
        raise StateRequirementError(msg)
    if not state_dependence.requires_state(capability) and X is not None:
        msg = f"{capability.display_name} is state-independent; a model state must not be supplied."
        logging.error(msg)
        raise StateRequirementError(msg)


class QuantoModel(ABC):
    """
    Cross-asset model that contributes a drift adjustment when rates are simulated in a currency (measure)
    different from their own.
    """

    @property
    @abstractmethod
    def state_dependent(self) -> bool:
        """Whether the quanto drift requires a state vector."""
        pass

    @abstractmethod
    def quanto_drift(self,
                     factor_alias: Sequence[str],
                     s: float,
                     t: float,
                     X: Optional[ModelState]=None) -> np.ndarray:
        """Drift adjustment over [s,t] for the given (domestic) factor aliases; a vector of len(factor_alias)."""
        pass


def quanto_drift(factor_alias: Sequence[str],
                 quanto_model: Optional[QuantoModel],
                 s: float,
                 t: float,
                 X: Optional[ModelState]=None) -> np.ndarray:
    """Quanto drift adjustment for the factor aliases, zero if there is no quanto model."""
    if quanto_model is None:
        return np.zeros(len(factor_alias))
    alpha = np.asarray(quanto_model.quanto_drift(factor_alias, s, t, X), dtype=np.float64)
    if alpha.shape != (len(factor_alias),):
        msg = f"Quanto drift must have shape ({len(factor_alias)},). Instead has shape {alpha.shape}"
        logging.error(msg)
        raise ValueError(msg)
    return alpha


class Model(ABC):
    """
    Generic class for models that are simulated as X(t) = Hᵀ(s,t)ᵀ X(s) + Θ(s,t) + ∫ Σᵀ(u)ᵀ dW(u).

    Implementations set the attributes
        alias: str
        state_alias: aliases of the model's state variables
        factor_alias: aliases of the model's Brownian factors
    """
    alias: str
    state_alias: Sequence[str]
    factor_alias: Sequence[str]

    @abstractmethod
    def parameter_grid(self) -> np.ndarray:
        """Times at which model parameters are discontinuous."""
        pass

    @abstractmethod
    def state_dependence(self) -> StateDependence:
        pass

    @abstractmethod
    def Theta(self, s: float, t: float, X: Optional[ModelState]=None) -> np.ndarray:
        pass

    @abstractmethod
    def H_T(self, s: float, t: float, X: Optional[ModelState]=None) -> np.ndarray:
        pass

    @abstractmethod
    def Sigma_T(self, s: float, t: float, X: Optional[ModelState]=None) -> Callable[[float], np.ndarray]:
        pass

    @abstractmethod
    def log_bank_account(self, model_alias: str, t: float, X: ModelState) -> np.ndarray:
        pass

    @abstractmethod
    def log_zero_bond(self, model_alias: str, t: float, T: float, X: ModelState) -> np.ndarray:
        pass

    @abstractmethod
    def simulation_parameters(self, correlation_holder, s: float, t: float):
        pass

    def state_alias_H(self) -> Sequence[str]:
        """State aliases required for the (H · X) calculation."""
        return self.state_alias

    def factor_alias_Sigma(self) -> Sequence[str]:
        """Factor aliases required for the (Σ(u)ᵀ Γ Σ(u)) calculation."""
        return self.factor_alias
