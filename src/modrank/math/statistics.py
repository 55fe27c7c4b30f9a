"""Descriptive statistics over coupling and centrality distributions."""

from typing import Sequence

import numpy as np


class Statistics:
    """Statistical helpers used by the ranking components."""

    @staticmethod
    def quantile(values: Sequence[float], q: float) -> float:
        """
        Linear-interpolated quantile of ``values``.

        Args:
            values: Sample values
            q: Quantile in [0, 1]

        Returns:
            The q-th quantile, or 0.0 for an empty sample
        """
        if len(values) == 0:
            return 0.0
        return float(np.quantile(np.asarray(values, dtype=float), q))

    @staticmethod
    def percentile_below(value: float, values: Sequence[float]) -> int:
        """
        Share of ``values`` strictly below ``value``, as a rounded percentage.

        Args:
            value: Value to locate
            values: Distribution

        Returns:
            Integer percentile in [0, 100]; 0 for an empty distribution
        """
        if len(values) == 0:
            return 0
        arr = np.asarray(values, dtype=float)
        below = int(np.count_nonzero(arr < value))
        return round(below / len(arr) * 100)
