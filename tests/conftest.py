"""Global pytest configuration and shared helpers for path tests."""

from __future__ import annotations

from typing import List, Sequence

import pytest

from randpath.random_source import PythonRandomSource


class ConstantSource:
    """Source that always returns the same value (clamped into range)."""

    def __init__(self, value: int) -> None:
        self.value = value
        self.calls = 0

    def next(self, low: int, high: int) -> int:
        self.calls += 1
        return min(max(self.value, low), high - 1)


@pytest.fixture
def rng() -> PythonRandomSource:
    """Deterministically seeded source."""
    return PythonRandomSource(seed=5)


def split_segments(path: Sequence[int], segment_length: int) -> List[List[int]]:
    return [
        list(path[i : i + segment_length])
        for i in range(0, len(path), segment_length)
    ]


def boundary_pairs(path: Sequence[int], segment_length: int, margin_length: int):
    """Yield (back margin of segment k, front margin of segment k+1) pairs."""
    node_count = len(path) // segment_length
    for k in range(node_count - 1):
        end = (k + 1) * segment_length
        yield (
            list(path[end - margin_length : end]),
            list(path[end : end + margin_length]),
        )
