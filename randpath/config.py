"""Configuration classes for path generation and trend runs."""

from __future__ import annotations

from dataclasses import dataclass

from randpath.algorithms.common import DEFAULT_MAX_DRAW_ATTEMPTS, check_path_parameters
from randpath.errors import InvalidParameterError
from randpath.types.base import AllocationOrder, DistanceMetric, Method


@dataclass
class GeneratorConfig:
    """Parameters for generating one path."""

    # Number of segments (nodes) in a path
    node_count: int = 10

    # Values per segment; each segment permutes 0..segment_length-1
    segment_length: int = 100

    # Slots per margin. Keep well under segment_length / 2.
    margin_length: int = 10

    method: Method = Method.UNCONSTRAINED
    order: AllocationOrder = AllocationOrder.SEQUENTIAL

    # Normalize margin parity (unconstrained method only)
    parity: bool = False

    # Threads used for per-segment work; 1 runs inline
    workers: int = 1

    # Rejection-sampling budget per drawn slot
    max_draw_attempts: int = DEFAULT_MAX_DRAW_ATTEMPTS

    def validate(self) -> None:
        """Raise ``InvalidParameterError`` if the parameters cannot be used."""
        if self.method in (Method.CONSTRAINED, Method.UNCONSTRAINED):
            check_path_parameters(
                self.node_count, self.segment_length, self.margin_length
            )
        elif self.segment_length < 1:
            raise InvalidParameterError(
                f"segment_length must be >= 1, got {self.segment_length}"
            )
        if self.method == Method.PARITY and self.segment_length % 2 == 1:
            raise InvalidParameterError(
                f"Parity method needs an even segment_length, got {self.segment_length}"
            )
        if self.workers < 1:
            raise InvalidParameterError(f"workers must be >= 1, got {self.workers}")
        if self.max_draw_attempts < 1:
            raise InvalidParameterError(
                f"max_draw_attempts must be >= 1, got {self.max_draw_attempts}"
            )

    @property
    def path_length(self) -> int:
        """Length of a generated path."""
        if self.method in (Method.SINGLE, Method.PARITY):
            return self.segment_length
        return self.node_count * self.segment_length


@dataclass
class TrendConfig:
    """Parameters for a convergence sweep over iteration counts."""

    # Sweep runs iteration counts 1, 1 + delta, ... below max_iterations
    max_iterations: int = 1000
    delta: int = 1

    metric: DistanceMetric = DistanceMetric.MANHATTAN

    # Free text appended to the output file name
    notes: str = ""

    def validate(self) -> None:
        if self.max_iterations < 2:
            raise InvalidParameterError(
                f"max_iterations must be >= 2, got {self.max_iterations}"
            )
        if self.delta < 1:
            raise InvalidParameterError(f"delta must be >= 1, got {self.delta}")

    def iteration_counts(self) -> range:
        """Iteration counts visited by the sweep."""
        return range(1, self.max_iterations, self.delta)


# Global default configuration instance
DEFAULT_CONFIG = GeneratorConfig()
