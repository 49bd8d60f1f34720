"""Unbiased Durstenfeld shuffle over a whole sequence or a sub-range."""

from __future__ import annotations

from typing import MutableSequence, Optional

from randpath.errors import InvalidParameterError
from randpath.random_source import RandomSource


def shuffle_in_place(
    values: MutableSequence[int],
    rng: RandomSource,
    start: int = 0,
    stop: Optional[int] = None,
) -> None:
    """Uniformly permute ``values[start:stop]`` in place.

    Positions outside ``[start, stop)`` are left untouched. Every ordering of
    the range is equally likely; no extra memory is used.

    Args:
        values: Sequence to permute.
        rng: Uniform integer source.
        start: First index of the shuffled range.
        stop: End of the shuffled range (exclusive); defaults to ``len(values)``.
    """
    if stop is None:
        stop = len(values)
    if start < 0 or stop > len(values) or start > stop:
        raise InvalidParameterError(
            f"Shuffle range [{start}, {stop}) outside sequence of length {len(values)}"
        )
    for i in range(stop - 1, start, -1):
        j = rng.next(start, i + 1)
        values[i], values[j] = values[j], values[i]


def shuffled_sequence(length: int, rng: RandomSource) -> list[int]:
    """Return a uniformly random permutation of ``0..length-1``."""
    if length < 0:
        raise InvalidParameterError(f"length must be non-negative, got {length}")
    values = list(range(length))
    shuffle_in_place(values, rng)
    return values
