"""Parity constraints on segment margins.

A parity-consistent path keeps only even values in front margins and only
odd values in back margins. Adjacent segments then can never collide at a
boundary, without allocating margins up front, so every segment may be
generated independently.
"""

from __future__ import annotations

from typing import List, MutableSequence

from randpath.algorithms.common import DEFAULT_MAX_DRAW_ATTEMPTS
from randpath.algorithms.shuffle import shuffled_sequence
from randpath.errors import InvalidParameterError, StarvationError
from randpath.random_source import RandomSource


def make_margins_parity_consistent(
    segment: MutableSequence[int],
    margin_length: int,
    first_node: bool,
    last_node: bool,
    rng: RandomSource,
    max_draw_attempts: int = DEFAULT_MAX_DRAW_ATTEMPTS,
) -> MutableSequence[int]:
    """Swap values until front margin is even and back margin is odd.

    The first node's front margin and the last node's back margin face no
    neighbour and are left unconstrained.

    For a node with both margins constrained, odd front values are first
    swapped with even back values (front scanned left to right, back scanned
    from its start). Whichever margin is left with wrong-parity values is
    then repaired by swapping each with a randomly chosen correct-parity
    value from between the margins. For a first or last node only the
    constrained margin is repaired, drawing from anywhere outside it.

    Args:
        segment: Permutation to fix in place.
        margin_length: Length of each margin.
        first_node: Whether this is the first segment of the path.
        last_node: Whether this is the last segment of the path.
        rng: Uniform integer source for the replacement picks.
        max_draw_attempts: Draw budget per replacement pick.

    Returns:
        The same ``segment`` object.

    Raises:
        InvalidParameterError: If the margins do not fit in the segment.
        StarvationError: If the pick region holds no value of the needed parity.
    """
    length = len(segment)
    if margin_length < 0 or 2 * margin_length > length:
        raise InvalidParameterError(
            f"Two margins of length {margin_length} do not fit in a segment "
            f"of length {length}"
        )
    if margin_length == 0 or (first_node and last_node):
        return segment

    front = 0
    back = length - margin_length
    back_finished = False

    if not first_node and not last_node:
        while front < margin_length:
            if segment[front] % 2 == 1:
                while back < length:
                    if segment[back] % 2 == 0:
                        segment[front], segment[back] = segment[back], segment[front]
                        back += 1
                        break
                    back += 1
            if back >= length:
                # front may still point at an odd value if no even was found
                back_finished = True
                break
            front += 1

    if last_node:
        back_finished = True

    if back_finished:
        high = length if last_node else length - margin_length
        for i in range(front, margin_length):
            if segment[i] % 2 == 1:
                j = _pick_index_with_parity(
                    segment, margin_length, high, 0, rng, max_draw_attempts
                )
                segment[i], segment[j] = segment[j], segment[i]
    else:
        low = 0 if first_node else margin_length
        for i in range(back, length):
            if segment[i] % 2 == 0:
                j = _pick_index_with_parity(
                    segment, low, length - margin_length, 1, rng, max_draw_attempts
                )
                segment[i], segment[j] = segment[j], segment[i]

    return segment


def _pick_index_with_parity(
    segment: MutableSequence[int],
    low: int,
    high: int,
    parity: int,
    rng: RandomSource,
    max_draw_attempts: int,
) -> int:
    """Draw a random index in ``[low, high)`` whose value has ``parity``."""
    if not any(segment[k] % 2 == parity for k in range(low, high)):
        kind = "even" if parity == 0 else "odd"
        raise StarvationError(f"No {kind} value in segment positions [{low}, {high})")
    for _ in range(max_draw_attempts):
        j = rng.next(low, high)
        if segment[j] % 2 == parity:
            return j
    raise StarvationError(
        f"No value of parity {parity} drawn from [{low}, {high}) after "
        f"{max_draw_attempts} draws",
        attempts=max_draw_attempts,
    )


def parity_permutation(length: int, rng: RandomSource) -> List[int]:
    """Permutation of ``0..length-1`` with evens and odds on alternating indices.

    Evens and odds are shuffled independently as two half-length
    permutations. A coin flip decides whether evens take the even or the odd
    indices, so each value has probability zero at half of the positions in
    any single draw but uniform frequency over many draws.

    Raises:
        InvalidParameterError: If ``length`` is negative or odd.
    """
    if length < 0 or length % 2 == 1:
        raise InvalidParameterError(
            f"Parity permutation needs an even non-negative length, got {length}"
        )
    half = length // 2
    evens = shuffled_sequence(half, rng)
    odds = shuffled_sequence(half, rng)
    evens_first = rng.next(0, 2) == 0

    path = [0] * length
    for i in range(half):
        even_slot, odd_slot = (2 * i, 2 * i + 1) if evens_first else (2 * i + 1, 2 * i)
        path[even_slot] = evens[i] * 2
        path[odd_slot] = odds[i] * 2 + 1
    return path
