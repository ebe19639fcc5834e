"""Averages, ratios and distribution summaries shared by rollups and reports."""

import statistics as stdlib_stats
from typing import Sequence

import numpy as np


class Statistics:
    """Statistical helpers.

    Every derived rate in a rollup goes through ``weighted_mean`` or
    ``percentage`` so the zero-denominator rules live in one place.
    """

    @staticmethod
    def mean(values: Sequence[float]) -> float:
        """Compute arithmetic mean."""
        if not values:
            return 0.0
        return float(stdlib_stats.mean(values))

    @staticmethod
    def weighted_mean(a: float, weight_a: float, b: float, weight_b: float) -> float:
        """
        Combine two averages by their weights: (a*wa + b*wb) / (wa + wb).

        A side with zero weight contributes nothing, so combining with an
        empty group returns the other average unchanged. Both weights zero
        gives 0.0.
        """
        if weight_a == 0 and weight_b == 0:
            return 0.0
        if weight_a == 0:
            return float(b)
        if weight_b == 0:
            return float(a)
        return (a * weight_a + b * weight_b) / (weight_a + weight_b)

    @staticmethod
    def percentage(part: float, whole: float, empty: float = 0.0) -> float:
        """100 * part / whole, or ``empty`` when there is nothing to measure."""
        if whole == 0:
            return empty
        return 100.0 * part / whole

    @staticmethod
    def per_hundred(count: float, loc: float) -> float:
        """Occurrences per 100 lines of code."""
        return Statistics.percentage(count, loc)

    @staticmethod
    def distribution(values: Sequence[float]) -> dict[str, float]:
        """
        Summary of a distribution: mean, median, p90 and max.

        Args:
            values: Observations (e.g. per-declaration complexity)

        Returns:
            Dict with ``count``, ``mean``, ``median``, ``p90`` and ``max``;
            all zero for an empty input.
        """
        if not values:
            return {"count": 0, "mean": 0.0, "median": 0.0, "p90": 0.0, "max": 0.0}

        arr = np.asarray(values, dtype=float)
        return {
            "count": int(arr.size),
            "mean": float(np.mean(arr)),
            "median": float(np.median(arr)),
            "p90": float(np.percentile(arr, 90)),
            "max": float(np.max(arr)),
        }
