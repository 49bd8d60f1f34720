"""Complete a segment around fixed front and back margins."""

from __future__ import annotations

from typing import List, Sequence

from randpath.algorithms.shuffle import shuffle_in_place
from randpath.errors import InvalidParameterError
from randpath.random_source import RandomSource


def complete_segment(
    segment_length: int,
    front_margin: Sequence[int],
    back_margin: Sequence[int],
    rng: RandomSource,
) -> List[int]:
    """Build a permutation of ``0..segment_length-1`` with fixed margins.

    ``front_margin`` occupies the leading slots in order. ``back_margin`` is
    written from the last slot backwards, so ``back_margin[0]`` ends up at the
    very end of the segment. The values used by neither margin fill the
    interior in ascending order, and the interior is then shuffled.

    Args:
        segment_length: Size of the value domain and of the segment.
        front_margin: Values for the leading slots (may be empty).
        back_margin: Values for the trailing slots, outermost first (may be empty).
        rng: Uniform integer source.

    Returns:
        New list of length ``segment_length``.

    Raises:
        InvalidParameterError: If the margins do not fit, contain values
            outside the domain, or share a value.
    """
    front_len = len(front_margin)
    back_len = len(back_margin)
    if front_len + back_len > segment_length:
        raise InvalidParameterError(
            f"Margins of length {front_len} and {back_len} do not fit "
            f"in a segment of length {segment_length}"
        )

    margin_values = set(front_margin)
    margin_values.update(back_margin)
    if len(margin_values) != front_len + back_len:
        raise InvalidParameterError(
            f"Front margin {list(front_margin)} and back margin "
            f"{list(back_margin)} share or repeat values"
        )
    if any(not 0 <= v < segment_length for v in margin_values):
        raise InvalidParameterError(
            f"Margin values must lie in [0, {segment_length})"
        )

    segment = list(front_margin)
    segment.extend(v for v in range(segment_length) if v not in margin_values)
    segment.extend(reversed(back_margin))

    shuffle_in_place(segment, rng, front_len, segment_length - back_len)
    return segment
