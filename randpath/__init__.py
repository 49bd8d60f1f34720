"""randpath: constrained random permutations split into segments.

A path is ``node_count`` segments, each a permutation of
``0..segment_length-1``. The constrained generator guarantees that the
margins on either side of every segment boundary share no value.

Primary API:
    generate_constrained_path() - Margins allocated first, segments completed around them
    generate_unconstrained_path() - Independent shuffle per segment
    shuffled_sequence() - Single unbiased shuffle
    PathGenerator - Config-driven, seed-reproducible, optionally threaded generation

Example:
    from randpath import PythonRandomSource, generate_constrained_path

    rng = PythonRandomSource(seed=5)
    path = generate_constrained_path(node_count=4, segment_length=20, margin_length=3, rng=rng)
"""

from __future__ import annotations

from randpath import cli, logging
from randpath._version import __version__
from randpath.algorithms.shuffle import shuffled_sequence
from randpath.config import GeneratorConfig, TrendConfig
from randpath.errors import InvalidParameterError, RandPathError, StarvationError
from randpath.monte_carlo import TrendResult, calculate_trend
from randpath.path import (
    PathGenerator,
    generate_constrained_path,
    generate_unconstrained_path,
)
from randpath.random_source import PythonRandomSource, RandomSource
from randpath.seed_manager import SeedManager
from randpath.types.base import AllocationOrder, DistanceMetric, Method

__all__ = [
    # Version
    "__version__",
    # Generation
    "generate_constrained_path",
    "generate_unconstrained_path",
    "shuffled_sequence",
    "PathGenerator",
    # Randomness
    "RandomSource",
    "PythonRandomSource",
    "SeedManager",
    # Configuration and types
    "GeneratorConfig",
    "TrendConfig",
    "Method",
    "AllocationOrder",
    "DistanceMetric",
    # Statistics
    "calculate_trend",
    "TrendResult",
    # Errors
    "RandPathError",
    "InvalidParameterError",
    "StarvationError",
    # Utilities
    "cli",
    "logging",
]
