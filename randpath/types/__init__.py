"""Shared enums for path generation and statistics."""

from randpath.types.base import AllocationOrder, DistanceMetric, Method

__all__ = ["AllocationOrder", "DistanceMetric", "Method"]
