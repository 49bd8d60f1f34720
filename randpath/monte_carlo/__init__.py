"""Convergence statistics for generated paths.

Counts how often each value lands at each position and measures the distance
of the empirical fractions to the uniform fraction ``1/segment_length``.
"""

from randpath.monte_carlo.functions import (
    calculate_trend,
    count_placements,
    total_distance_to_mean,
)
from randpath.monte_carlo.results import TrendRecord, TrendResult

__all__ = [
    "calculate_trend",
    "count_placements",
    "total_distance_to_mean",
    "TrendRecord",
    "TrendResult",
]
