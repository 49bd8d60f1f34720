"""Enums selecting generation methods, allocators and distance metrics."""

from __future__ import annotations

from enum import IntEnum
from typing import Type, TypeVar

E = TypeVar("E", bound=IntEnum)


def _parse_enum(cls: Type[E], value: str, label: str) -> E:
    """Parse a case-insensitive member name (dashes allowed) into ``cls``."""
    try:
        return cls[value.strip().upper().replace("-", "_")]
    except KeyError:
        valid = ", ".join(e.name.lower() for e in cls)
        raise ValueError(f"Invalid {label} '{value}'. Valid values are: {valid}") from None


class Method(IntEnum):
    """Path generation method.

    Numeric values match the method codes used in trend CSV file names.
    """

    #: Margins allocated first, then every segment completed around them.
    CONSTRAINED = 0
    #: A single shuffled segment, no nodes or margins.
    SINGLE = 1
    #: Independent shuffle per segment; no boundary guarantee.
    UNCONSTRAINED = 2
    #: Single segment with evens and odds interleaved on alternating indices.
    PARITY = 3

    @classmethod
    def from_string(cls, value: str) -> "Method":
        return _parse_enum(cls, value, "method")


class AllocationOrder(IntEnum):
    """Order in which margin slots are filled."""

    SEQUENTIAL = 1  # Left to right, excluding the preceding margin only
    RANDOM_ORDER = 2  # Random margin each step, excluding both neighbours

    @classmethod
    def from_string(cls, value: str) -> "AllocationOrder":
        return _parse_enum(cls, value, "allocation order")


class DistanceMetric(IntEnum):
    """Distance between empirical and theoretical placement fractions."""

    MANHATTAN = 1
    EUCLIDEAN = 2

    @classmethod
    def from_string(cls, value: str) -> "DistanceMetric":
        return _parse_enum(cls, value, "distance metric")
