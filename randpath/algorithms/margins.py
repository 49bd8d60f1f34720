"""Margin allocation: boundary values shared in constraint by adjacent segments.

All margins of a path live in one flat buffer of
``(2 * node_count - 2) * margin_length`` values ordered
segment0-back, segment1-front, segment1-back, ..., segment(last)-front.
Neighbouring margins in that order never share a value, which covers both
the boundary between two segments and the front/back pair of one segment.

Both allocators have the same signature and are interchangeable:

    allocate(node_count, segment_length, margin_length, rng) -> list[int]

Neither allocator backtracks. They rely on ``margin_length`` leaving enough
slack in ``segment_length``; rejection sampling is bounded and raises
``StarvationError`` instead of spinning.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import List, Protocol, Tuple

from randpath.algorithms.common import (
    DEFAULT_MAX_DRAW_ATTEMPTS,
    IndexedSet,
    check_path_parameters,
    margin_count,
)
from randpath.errors import StarvationError
from randpath.logging import get_logger
from randpath.random_source import RandomSource
from randpath.types.base import AllocationOrder

logger = get_logger(__name__)


class MarginAllocator(Protocol):
    """Callable filling the margin buffer for a whole path."""

    def __call__(
        self,
        node_count: int,
        segment_length: int,
        margin_length: int,
        rng: RandomSource,
    ) -> List[int]: ...


def allocate_sequential(
    node_count: int,
    segment_length: int,
    margin_length: int,
    rng: RandomSource,
    max_draw_attempts: int = DEFAULT_MAX_DRAW_ATTEMPTS,
) -> List[int]:
    """Fill margins left to right.

    A slot is drawn uniformly from the domain and redrawn while it collides
    with the previous margin or with earlier slots of the current margin.
    Only the immediately preceding margin is excluded; non-adjacent margins
    are unconstrained.

    Args:
        node_count: Number of segments in the path.
        segment_length: Size of the value domain.
        margin_length: Slots per margin.
        rng: Uniform integer source.
        max_draw_attempts: Draw budget per slot before giving up.

    Returns:
        Flat margin buffer.

    Raises:
        InvalidParameterError: On unusable parameters.
        StarvationError: If a slot exhausts its draw budget.
    """
    check_path_parameters(node_count, segment_length, margin_length)
    count = margin_count(node_count)
    buffer: List[int] = []

    for margin in range(count):
        forbidden = set(buffer[(margin - 1) * margin_length :]) if margin else set()
        for slot in range(margin_length):
            value = _draw_excluding(
                rng, segment_length, forbidden, max_draw_attempts, margin, slot
            )
            buffer.append(value)
            forbidden.add(value)

    logger.debug(
        f"Sequential allocation filled {count} margins of length {margin_length}"
    )
    return buffer


def _draw_excluding(
    rng: RandomSource,
    segment_length: int,
    forbidden: set[int],
    max_draw_attempts: int,
    margin: int,
    slot: int,
) -> int:
    for _ in range(max_draw_attempts):
        value = rng.next(0, segment_length)
        if value not in forbidden:
            return value
    raise StarvationError(
        f"No admissible value for margin {margin} slot {slot} after "
        f"{max_draw_attempts} draws ({len(forbidden)} of {segment_length} values excluded)",
        attempts=max_draw_attempts,
    )


def allocate_random_order(
    node_count: int,
    segment_length: int,
    margin_length: int,
    rng: RandomSource,
) -> List[int]:
    """Fill margin slots in random margin order.

    Each step picks an unfinished margin uniformly, then a value uniformly
    from that margin's availability set. The value is withdrawn from the
    margin itself and from both neighbours, so exclusion is symmetric and the
    fill is not biased towards the left end of the path.

    Raises:
        InvalidParameterError: On unusable parameters.
        StarvationError: If a margin runs out of candidates before it is full.
    """
    check_path_parameters(node_count, segment_length, margin_length)
    count = margin_count(node_count)
    buffer = [0] * (count * margin_length)
    if margin_length == 0:
        return buffer

    filled = [0] * count
    unfinished: IndexedSet[int] = IndexedSet(range(count))
    available = [IndexedSet(range(segment_length)) for _ in range(count)]

    while len(unfinished) > 0:
        margin = unfinished[rng.next(0, len(unfinished))]
        candidates = available[margin]
        if len(candidates) == 0:
            raise StarvationError(
                f"Margin {margin} has no available values with "
                f"{margin_length - filled[margin]} slots left"
            )
        value = candidates[rng.next(0, len(candidates))]
        buffer[margin * margin_length + filled[margin]] = value
        filled[margin] += 1
        if filled[margin] == margin_length:
            unfinished.discard(margin)

        candidates.discard(value)
        if margin > 0:
            available[margin - 1].discard(value)
        if margin < count - 1:
            available[margin + 1].discard(value)

    logger.debug(
        f"Random-order allocation filled {count} margins of length {margin_length}"
    )
    return buffer


def get_allocator(
    order: AllocationOrder, max_draw_attempts: int = DEFAULT_MAX_DRAW_ATTEMPTS
) -> MarginAllocator:
    """Return the allocator implementing ``order``.

    ``max_draw_attempts`` bounds rejection sampling in the sequential
    allocator; the random-order allocator never rejects.
    """
    if order == AllocationOrder.SEQUENTIAL:
        return partial(allocate_sequential, max_draw_attempts=max_draw_attempts)
    if order == AllocationOrder.RANDOM_ORDER:
        return allocate_random_order
    raise ValueError(f"Unknown allocation order: {order}")


@dataclass(frozen=True)
class MarginLayout:
    """Read-only per-segment view of a margin buffer.

    The buffer is copied into a tuple on construction, so views handed to
    concurrent segment completions stay valid for the layout's lifetime.

    Attributes:
        buffer: Flat margin values in boundary order.
        node_count: Number of segments in the path.
        margin_length: Slots per margin.
    """

    buffer: Tuple[int, ...]
    node_count: int
    margin_length: int

    @classmethod
    def from_buffer(
        cls, buffer: List[int], node_count: int, margin_length: int
    ) -> "MarginLayout":
        expected = margin_count(node_count) * margin_length
        if len(buffer) != expected:
            raise ValueError(
                f"Margin buffer has {len(buffer)} values, expected {expected}"
            )
        return cls(tuple(buffer), node_count, margin_length)

    def _check_segment(self, segment: int) -> None:
        if not 0 <= segment < self.node_count:
            raise IndexError(
                f"Segment {segment} out of range for {self.node_count} nodes"
            )

    def front(self, segment: int) -> Tuple[int, ...]:
        """Front margin of ``segment``; empty for the first segment."""
        self._check_segment(segment)
        if segment == 0:
            return ()
        m = self.margin_length
        return self.buffer[(2 * segment - 1) * m : 2 * segment * m]

    def back(self, segment: int) -> Tuple[int, ...]:
        """Back margin of ``segment``; empty for the last segment."""
        self._check_segment(segment)
        if segment == self.node_count - 1:
            return ()
        m = self.margin_length
        return self.buffer[2 * segment * m : (2 * segment + 1) * m]
