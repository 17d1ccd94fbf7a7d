# -*- coding: utf-8 -*-
import numpy as np
from dataclasses import dataclass


@dataclass
class ModelState:
    """
    Simulated state of a (joint) model at a single time.

    Attributes:
        X: state values of shape (n_states, n_paths). A vector is treated as a single path.
        idx: maps each state alias to its row in X
    """
    X: np.ndarray
    idx: dict

    def __post_init__(self):
        X = np.asarray(self.X, dtype=np.float64)
        if X.ndim == 1:
            X = X[:, np.newaxis]
        if X.ndim != 2:
            raise ValueError(f"'X' must have shape (n_states, n_paths). Instead has shape {X.shape}")
        if len(self.idx) != X.shape[0]:
            raise ValueError(f"Number of state aliases ({len(self.idx)}) does not match number of states ({X.shape[0]})")
        if sorted(self.idx.values()) != list(range(X.shape[0])):
            raise ValueError("State alias indices must be a permutation of the rows of 'X'")
        self.X = X

    @property
    def nb_paths(self) -> int:
        return self.X.shape[1]

    def state(self, alias: str) -> np.ndarray:
        """Values of the state variable 'alias' across the paths."""
        if alias not in self.idx:
            raise KeyError(f"Unknown state alias: {alias}")
        return self.X[self.idx[alias], :]

    def __call__(self, alias: str) -> np.ndarray:
        return self.state(alias)


def model_state(X: np.ndarray, model) -> ModelState:
    """State container for the state variables of a single model, in the order of model.state_alias."""
    return ModelState(X=X, idx={alias: k for k, alias in enumerate(model.state_alias)})
