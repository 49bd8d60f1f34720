"""Path assembly: the public "generate one path" operations.

``generate_constrained_path`` and ``generate_unconstrained_path`` draw every
value from one caller-supplied source. ``PathGenerator`` wraps both behind a
``GeneratorConfig`` and derives an independent source per segment from a
master seed, which lets segment work run on a thread pool while staying
reproducible for any worker count.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional

from randpath.algorithms.common import DEFAULT_MAX_DRAW_ATTEMPTS, check_path_parameters
from randpath.algorithms.completion import complete_segment
from randpath.algorithms.margins import MarginLayout, get_allocator
from randpath.algorithms.parity import (
    make_margins_parity_consistent,
    parity_permutation,
)
from randpath.algorithms.shuffle import shuffled_sequence
from randpath.config import GeneratorConfig
from randpath.logging import get_logger
from randpath.random_source import RandomSource
from randpath.seed_manager import SeedManager
from randpath.types.base import AllocationOrder, Method

logger = get_logger(__name__)


def allocate_layout(
    node_count: int,
    segment_length: int,
    margin_length: int,
    rng: RandomSource,
    order: AllocationOrder = AllocationOrder.SEQUENTIAL,
    max_draw_attempts: int = DEFAULT_MAX_DRAW_ATTEMPTS,
) -> MarginLayout:
    """Allocate all margins of a path and wrap them in a read-only layout."""
    allocator = get_allocator(order, max_draw_attempts)
    buffer = allocator(node_count, segment_length, margin_length, rng)
    return MarginLayout.from_buffer(buffer, node_count, margin_length)


def generate_constrained_path(
    node_count: int,
    segment_length: int,
    margin_length: int,
    rng: RandomSource,
    order: AllocationOrder = AllocationOrder.SEQUENTIAL,
    max_draw_attempts: int = DEFAULT_MAX_DRAW_ATTEMPTS,
) -> List[int]:
    """Generate a path whose adjacent margins never share a value.

    Margins are allocated first; each segment is then completed around its
    front and back margin and the segments are concatenated.

    Args:
        node_count: Number of segments.
        segment_length: Values per segment.
        margin_length: Slots per margin; keep well below ``segment_length / 2``.
        rng: Uniform integer source.
        order: Margin allocation strategy.
        max_draw_attempts: Rejection-sampling budget per slot.

    Returns:
        Path of length ``node_count * segment_length``.

    Raises:
        InvalidParameterError: On unusable parameters, before any draw.
        StarvationError: If margin allocation runs out of candidates.
    """
    check_path_parameters(node_count, segment_length, margin_length)
    layout = allocate_layout(
        node_count, segment_length, margin_length, rng, order, max_draw_attempts
    )
    path: List[int] = []
    for segment in range(node_count):
        path.extend(
            complete_segment(
                segment_length, layout.front(segment), layout.back(segment), rng
            )
        )
    return path


def generate_unconstrained_path(
    node_count: int,
    segment_length: int,
    rng: RandomSource,
    margin_length: int = 0,
    parity: bool = False,
    max_draw_attempts: int = DEFAULT_MAX_DRAW_ATTEMPTS,
) -> List[int]:
    """Generate a path of independently shuffled segments.

    Segments share no constraint, so values may repeat across a boundary.
    With ``parity`` set, each segment's margins are normalized so front
    margins hold even values and back margins odd values, which rules such
    collisions out; ``margin_length`` is only used in that case.

    Returns:
        Path of length ``node_count * segment_length``.
    """
    check_path_parameters(node_count, segment_length, margin_length)
    path: List[int] = []
    for segment in range(node_count):
        path.extend(
            _unconstrained_segment(
                segment,
                node_count,
                segment_length,
                margin_length,
                parity,
                rng,
                max_draw_attempts,
            )
        )
    return path


def _unconstrained_segment(
    segment: int,
    node_count: int,
    segment_length: int,
    margin_length: int,
    parity: bool,
    rng: RandomSource,
    max_draw_attempts: int,
) -> List[int]:
    values = shuffled_sequence(segment_length, rng)
    if parity:
        make_margins_parity_consistent(
            values,
            margin_length,
            first_node=segment == 0,
            last_node=segment == node_count - 1,
            rng=rng,
            max_draw_attempts=max_draw_attempts,
        )
    return values


class PathGenerator:
    """Generates successive paths for one configuration.

    Every call to ``generate`` advances an iteration counter. Random sources
    are derived from ``(seed, "iteration", n, ...)`` so the n-th path is the
    same for a given seed no matter how many worker threads are used.

    Margin allocation for the constrained method is a single sequential step;
    only segment completion (constrained) and segment shuffling
    (unconstrained) are spread over workers, each with its own source.

    Args:
        config: Generation parameters; validated on construction.
        seed: Master seed. ``None`` gives non-reproducible output.
    """

    def __init__(self, config: GeneratorConfig, seed: Optional[int] = None) -> None:
        config.validate()
        self.config = config
        self.seed_manager = SeedManager(seed)
        self._iteration = 0

    @property
    def iteration(self) -> int:
        """Number of paths generated so far."""
        return self._iteration

    def generate(self) -> List[int]:
        """Generate the next path."""
        iteration = self._iteration
        self._iteration += 1
        cfg = self.config
        rng = self.seed_manager.create_random_source("iteration", iteration)

        if cfg.method == Method.SINGLE:
            return shuffled_sequence(cfg.segment_length, rng)
        if cfg.method == Method.PARITY:
            return parity_permutation(cfg.segment_length, rng)
        if cfg.method == Method.CONSTRAINED:
            return self._generate_constrained(iteration, rng)
        if cfg.method == Method.UNCONSTRAINED:
            return self._generate_unconstrained(iteration)
        raise ValueError(f"Unknown method: {cfg.method}")

    def _segment_source(self, iteration: int, segment: int) -> RandomSource:
        return self.seed_manager.create_random_source(
            "iteration", iteration, "segment", segment
        )

    def _generate_constrained(self, iteration: int, rng: RandomSource) -> List[int]:
        cfg = self.config
        layout = allocate_layout(
            cfg.node_count,
            cfg.segment_length,
            cfg.margin_length,
            rng,
            cfg.order,
            cfg.max_draw_attempts,
        )

        def complete(segment: int) -> List[int]:
            return complete_segment(
                cfg.segment_length,
                layout.front(segment),
                layout.back(segment),
                self._segment_source(iteration, segment),
            )

        return self._assemble(complete)

    def _generate_unconstrained(self, iteration: int) -> List[int]:
        cfg = self.config

        def shuffle(segment: int) -> List[int]:
            return _unconstrained_segment(
                segment,
                cfg.node_count,
                cfg.segment_length,
                cfg.margin_length,
                cfg.parity,
                self._segment_source(iteration, segment),
                cfg.max_draw_attempts,
            )

        return self._assemble(shuffle)

    def _assemble(self, build_segment: Callable[[int], List[int]]) -> List[int]:
        segments = range(self.config.node_count)
        workers = min(self.config.workers, self.config.node_count)
        path: List[int] = []
        if workers <= 1:
            for segment in segments:
                path.extend(build_segment(segment))
            return path

        logger.debug(f"Building {len(segments)} segments on {workers} threads")
        with ThreadPoolExecutor(max_workers=workers) as pool:
            for values in pool.map(build_segment, segments):
                path.extend(values)
        return path
