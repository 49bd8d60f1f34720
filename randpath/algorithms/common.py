"""Parameter checks and small containers shared by the path algorithms."""

from __future__ import annotations

from typing import Dict, Generic, Hashable, Iterable, Iterator, List, TypeVar

from randpath.errors import InvalidParameterError

T = TypeVar("T", bound=Hashable)

#: Default bound on rejection-sampling draws for a single slot.
DEFAULT_MAX_DRAW_ATTEMPTS = 100_000


def check_path_parameters(
    node_count: int, segment_length: int, margin_length: int = 0
) -> None:
    """Fail fast on parameters that can never produce a valid path.

    Two adjacent margins must be disjoint subsets of the value domain, so with
    at least two nodes ``2 * margin_length`` may not exceed ``segment_length``.

    Raises:
        InvalidParameterError: On any unusable combination.
    """
    if node_count < 1:
        raise InvalidParameterError(f"node_count must be >= 1, got {node_count}")
    if segment_length < 1:
        raise InvalidParameterError(
            f"segment_length must be >= 1, got {segment_length}"
        )
    if margin_length < 0:
        raise InvalidParameterError(
            f"margin_length must be >= 0, got {margin_length}"
        )
    if margin_length > segment_length:
        raise InvalidParameterError(
            f"margin_length ({margin_length}) exceeds segment_length ({segment_length})"
        )
    if node_count >= 2 and 2 * margin_length > segment_length:
        raise InvalidParameterError(
            f"Adjacent margins of length {margin_length} cannot be disjoint "
            f"within a domain of {segment_length} values"
        )


def margin_count(node_count: int) -> int:
    """Number of margins in a path: every boundary contributes a back and a front."""
    return max(0, 2 * node_count - 2)


class IndexedSet(Generic[T]):
    """Set with O(1) add, discard and random-index access.

    Discarding swaps the last element into the vacated slot. The element
    order therefore depends only on the sequence of operations, which keeps
    random picks by index reproducible under a seeded source.
    """

    __slots__ = ("_items", "_positions")

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: List[T] = []
        self._positions: Dict[T, int] = {}
        for item in items:
            self.add(item)

    def add(self, item: T) -> None:
        if item in self._positions:
            return
        self._positions[item] = len(self._items)
        self._items.append(item)

    def discard(self, item: T) -> None:
        pos = self._positions.pop(item, None)
        if pos is None:
            return
        last = self._items.pop()
        if pos < len(self._items):
            self._items[pos] = last
            self._positions[last] = pos

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __contains__(self, item: object) -> bool:
        return item in self._positions

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"IndexedSet({self._items!r})"
