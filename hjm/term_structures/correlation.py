# -*- coding: utf-8 -*-
import os
if __name__ == "__main__":
    os.chdir(os.environ.get('PROJECT_DIR_HJM'))

import numpy as np
from dataclasses import dataclass, field
from typing import Sequence, Union

from hjm.utils.settings import CORRELATION_ALIAS_SEP


@dataclass
class CorrelationHolder:
    """
    Holds the correlations between the risk factors of a joint simulation, addressed by factor alias.

    'correlations' maps alias pairs to correlation values. A key is either a tuple (alias_1, alias_2) or a string
    'alias_1<>alias_2'. The order of the aliases in a key does not matter. Unspecified pairs are uncorrelated.
    """
    alias: str
    correlations: dict = field(default_factory=dict)

    def __post_init__(self):
        cleaned = {}
        for key, value in self.correlations.items():
            alias_1, alias_2 = self._split_key(key)
            if alias_1 == alias_2:
                raise ValueError(f"Correlation key '{key}' must reference two different aliases")
            if not -1.0 <= value <= 1.0:
                raise ValueError(f"Correlation for '{key}' must be in [-1, 1]. Instead is {value}")
            cleaned[tuple(sorted((alias_1, alias_2)))] = float(value)
        self.correlations = cleaned

    @staticmethod
    def _split_key(key: Union[str, tuple]) -> tuple:
        if isinstance(key, str):
            aliases = key.split(CORRELATION_ALIAS_SEP)
        else:
            aliases = list(key)
        if len(aliases) != 2:
            raise ValueError(f"Invalid correlation key: {key}")
        return aliases[0], aliases[1]

    def correlation(self, alias_1: str, alias_2: str) -> float:
        if alias_1 == alias_2:
            return 1.0
        return self.correlations.get(tuple(sorted((alias_1, alias_2))), 0.0)

    def __call__(self, aliases: Sequence[str]) -> np.ndarray:
        """Correlation matrix for the given factor aliases."""
        n = len(aliases)
        corr = np.eye(n)
        for i in range(n):
            for j in range(i + 1, n):
                corr[i, j] = corr[j, i] = self.correlation(aliases[i], aliases[j])
        return corr
