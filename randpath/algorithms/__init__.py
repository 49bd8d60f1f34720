"""Core permutation algorithms: shuffle, margin allocation, completion, parity."""

from randpath.algorithms.completion import complete_segment
from randpath.algorithms.margins import (
    MarginAllocator,
    MarginLayout,
    allocate_random_order,
    allocate_sequential,
    get_allocator,
)
from randpath.algorithms.parity import (
    make_margins_parity_consistent,
    parity_permutation,
)
from randpath.algorithms.shuffle import shuffle_in_place, shuffled_sequence

__all__ = [
    "complete_segment",
    "MarginAllocator",
    "MarginLayout",
    "allocate_random_order",
    "allocate_sequential",
    "get_allocator",
    "make_margins_parity_consistent",
    "parity_permutation",
    "shuffle_in_place",
    "shuffled_sequence",
]
