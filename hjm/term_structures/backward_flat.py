# -*- coding: utf-8 -*-
import os
if __name__ == "__main__":
    os.chdir(os.environ.get('PROJECT_DIR_HJM'))

import numpy as np
import pandas as pd
from dataclasses import dataclass
from typing import Optional


@dataclass
class BackwardFlatTermstructure:
    """
    Piece-wise constant term structure. The value for t in (times[k-1], times[k]] is values[:,k],
    with flat extrapolation before the first and after the last time.

    Attributes:
        alias: identifier of the term structure
        times: non-decreasing, non-negative times (in years) of shape (n,)
        values: values of shape (d,n); one column per time
    """
    alias: str
    times: np.ndarray
    values: np.ndarray

    def __post_init__(self):
        self.times = np.atleast_1d(np.asarray(self.times, dtype=np.float64))
        values = np.asarray(self.values, dtype=np.float64)
        if values.ndim == 0:
            values = values.reshape(1, 1)
        elif values.ndim == 1:
            # A single time means a flat vector-valued term structure, otherwise a scalar term structure.
            values = values.reshape(-1, 1) if len(self.times) == 1 else values.reshape(1, -1)
        self.values = values

        if self.times.ndim != 1 or len(self.times) == 0:
            raise ValueError(f"'times' of '{self.alias}' must be a non-empty vector")
        if np.any(self.times < 0):
            raise ValueError(f"'times' of '{self.alias}' must be non-negative: {self.times}")
        if np.any(np.diff(self.times) < 0):
            raise ValueError(f"'times' of '{self.alias}' must be non-decreasing: {self.times}")
        if self.values.ndim != 2 or self.values.shape[1] != len(self.times):
            raise ValueError(f"'values' of '{self.alias}' must have shape (d, {len(self.times)}). "
                             f"Instead has shape {self.values.shape}")

    def time_idx(self, t: float) -> int:
        """Index of the first time >= t, capped at the last index."""
        idx = int(np.searchsorted(self.times, t, side='left'))
        return min(idx, len(self.times) - 1)

    def __call__(self, t: float) -> np.ndarray:
        return self.values[:, self.time_idx(t)]


@dataclass
class BackwardFlatParameter(BackwardFlatTermstructure):
    """Model parameter term structure; delta and chi of the Gaussian HJM model are time-independent instances."""

    def __call__(self, t: Optional[float]=None) -> np.ndarray:
        if t is None:
            if self.values.shape[1] != 1:
                raise ValueError(f"Parameter '{self.alias}' is time-dependent; a time must be supplied.")
            return self.values[:, 0]
        return super().__call__(t)


@dataclass
class BackwardFlatVolatility(BackwardFlatTermstructure):
    """
    Piece-wise constant, vector-valued volatility curve. For a Gaussian HJM model, row i holds the volatility of
    the i-th benchmark rate and the times are the breakpoints of the volatility curve.
    """

    @classmethod
    def from_pillar_df(cls, alias: str, pillar_df: pd.DataFrame) -> 'BackwardFlatVolatility':
        """
        Create from a DataFrame with a 'years' column and one column of volatilities per benchmark rate.
        The benchmark columns are taken in their DataFrame order.
        """
        if 'years' not in pillar_df.columns:
            raise ValueError("Column 'years' must be specified in 'pillar_df'")
        vol_columns = [col for col in pillar_df.columns if col != 'years']
        if len(vol_columns) == 0:
            raise ValueError("At least one volatility column must be specified in 'pillar_df'")

        pillar_df = pillar_df.sort_values(by='years', ascending=True).reset_index(drop=True)
        return cls(alias=alias,
                   times=pillar_df['years'].to_numpy(dtype=np.float64),
                   values=pillar_df[vol_columns].to_numpy(dtype=np.float64).T)


def flat_parameter(alias: str, value) -> BackwardFlatParameter:
    """Time-independent (scalar or vector) parameter."""
    value = np.atleast_1d(np.asarray(value, dtype=np.float64))
    return BackwardFlatParameter(alias=alias, times=np.array([0.0]), values=value.reshape(-1, 1))


def flat_volatility(alias: str, value) -> BackwardFlatVolatility:
    """Time-independent (scalar or vector) volatility curve with a single breakpoint at t=0."""
    value = np.atleast_1d(np.asarray(value, dtype=np.float64))
    return BackwardFlatVolatility(alias=alias, times=np.array([0.0]), values=value.reshape(-1, 1))
