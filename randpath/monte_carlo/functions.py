"""Placement counting, distance-to-mean metric and iteration sweeps."""

from __future__ import annotations

import time
from typing import Sequence

import numpy as np

from randpath.config import TrendConfig
from randpath.logging import get_logger
from randpath.monte_carlo.results import TrendRecord, TrendResult
from randpath.path import PathGenerator
from randpath.types.base import DistanceMetric

logger = get_logger(__name__)


def count_placements(
    paths: Sequence[Sequence[int]], segment_length: int, segment: int = 0
) -> np.ndarray:
    """Count value placements within one segment over many paths.

    Args:
        paths: Generated paths, all of the same length.
        segment_length: Values per segment.
        segment: Index of the segment to count.

    Returns:
        Integer array ``counts`` of shape ``(segment_length, segment_length)``
        where ``counts[value, position]`` is how often ``value`` appeared at
        ``position`` of the chosen segment.
    """
    counts = np.zeros((segment_length, segment_length), dtype=np.int64)
    if len(paths) == 0:
        return counts

    start = segment * segment_length
    block = np.asarray(paths, dtype=np.int64)[:, start : start + segment_length]
    if block.shape[1] != segment_length:
        raise ValueError(
            f"Paths of length {len(paths[0])} have no segment {segment} "
            f"of length {segment_length}"
        )
    positions = np.broadcast_to(np.arange(segment_length), block.shape)
    np.add.at(counts, (block, positions), 1)
    return counts


def total_distance_to_mean(
    counts: np.ndarray,
    iterations: int,
    metric: DistanceMetric = DistanceMetric.MANHATTAN,
) -> float:
    """Distance between empirical placement fractions and the uniform fraction.

    Manhattan sums ``|count / iterations - 1/L|`` over all cells; Euclidean
    takes the square root of the summed squares.
    """
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")
    length = counts.shape[1]
    deviation = counts / float(iterations) - 1.0 / length
    if metric == DistanceMetric.MANHATTAN:
        return float(np.abs(deviation).sum())
    if metric == DistanceMetric.EUCLIDEAN:
        return float(np.sqrt(np.square(deviation).sum()))
    raise ValueError(f"Unknown distance metric: {metric}")


def calculate_trend(generator: PathGenerator, trend: TrendConfig) -> TrendResult:
    """Measure the distance to mean for increasing iteration counts.

    Each sweep point generates that many fresh paths from ``generator`` and
    counts placements in the first segment.

    Args:
        generator: Path source; its iteration counter advances.
        trend: Sweep parameters.

    Returns:
        TrendResult with one record per iteration count.
    """
    trend.validate()
    segment_length = generator.config.segment_length
    counts_to_run = trend.iteration_counts()
    total = len(counts_to_run)
    step = max(1, total // 10)

    logger.info(
        f"Running trend over {total} iteration counts "
        f"(method={generator.config.method.name.lower()}, max={trend.max_iterations})"
    )
    start_time = time.time()
    records = []
    for done, iterations in enumerate(counts_to_run, start=1):
        paths = [generator.generate() for _ in range(iterations)]
        counts = count_placements(paths, segment_length)
        distance = total_distance_to_mean(counts, iterations, trend.metric)
        records.append(TrendRecord(iterations=iterations, mean_dist=distance))
        if total >= 20 and done % step == 0:
            logger.info(f"Trend progress: {done}/{total} points ({done * 100 // total}%)")

    elapsed = time.time() - start_time
    logger.info(f"Trend completed in {elapsed:.2f} seconds")
    return TrendResult(records=records, generator=generator.config, trend=trend)
