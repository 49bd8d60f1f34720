"""Tests for margin allocation and margin layouts."""

import pytest

from randpath.algorithms.common import IndexedSet, check_path_parameters, margin_count
from randpath.algorithms.margins import (
    MarginLayout,
    allocate_random_order,
    allocate_sequential,
    get_allocator,
)
from randpath.errors import InvalidParameterError, StarvationError
from randpath.random_source import PythonRandomSource, ScriptedRandomSource
from randpath.types.base import AllocationOrder

from tests.conftest import ConstantSource

ALLOCATORS = [allocate_sequential, allocate_random_order]


def _margins(buffer, margin_length):
    return [
        buffer[i : i + margin_length] for i in range(0, len(buffer), margin_length)
    ]


@pytest.mark.parametrize("allocate", ALLOCATORS)
class TestAllocatorInvariants:
    @pytest.mark.parametrize(
        "node_count,segment_length,margin_length",
        [(2, 4, 1), (3, 10, 2), (5, 20, 5), (10, 100, 10), (4, 9, 3), (6, 12, 4)],
    )
    def test_adjacent_margins_disjoint(
        self, allocate, node_count, segment_length, margin_length
    ):
        for seed in range(25):
            buffer = allocate(
                node_count, segment_length, margin_length, PythonRandomSource(seed)
            )
            assert len(buffer) == (2 * node_count - 2) * margin_length
            margins = _margins(buffer, margin_length)
            for margin in margins:
                assert len(set(margin)) == margin_length
                assert all(0 <= v < segment_length for v in margin)
            for left, right in zip(margins, margins[1:]):
                assert not set(left) & set(right)

    def test_single_node_has_no_margins(self, allocate, rng):
        assert allocate(1, 10, 3, rng) == []
        assert allocate(1, 4, 4, rng) == []

    def test_zero_margin_length(self, allocate, rng):
        assert allocate(5, 10, 0, rng) == []

    @pytest.mark.parametrize(
        "node_count,segment_length,margin_length",
        [(0, 4, 1), (2, 0, 0), (2, 4, -1), (1, 4, 5), (2, 4, 3), (3, 5, 3)],
    )
    def test_invalid_parameters_rejected_before_drawing(
        self, allocate, node_count, segment_length, margin_length
    ):
        source = ScriptedRandomSource([])
        with pytest.raises(InvalidParameterError):
            allocate(node_count, segment_length, margin_length, source)

    def test_reproducible(self, allocate):
        a = allocate(6, 30, 4, PythonRandomSource(99))
        b = allocate(6, 30, 4, PythonRandomSource(99))
        assert a == b


class TestSequentialAllocator:
    def test_rejects_values_in_previous_margin(self):
        # margin 0 takes 2; margin 1 rejects 2 twice before accepting 1
        source = ScriptedRandomSource([2, 2, 2, 1])
        assert allocate_sequential(2, 4, 1, source) == [2, 1]
        assert source.remaining == 0

    def test_rejects_duplicates_within_first_margin(self):
        source = ScriptedRandomSource([3, 3, 0, 3, 0, 1, 2])
        assert allocate_sequential(2, 8, 2, source) == [3, 0, 1, 2]

    def test_only_previous_margin_is_excluded(self):
        # margins 0 and 2 may share values; margin 1 sits between them
        source = ScriptedRandomSource([0, 1, 0, 1])
        buffer = allocate_sequential(3, 2, 1, source)
        assert buffer == [0, 1, 0, 1]

    def test_starvation_raises_after_budget(self):
        source = ConstantSource(0)
        with pytest.raises(StarvationError) as excinfo:
            allocate_sequential(2, 4, 1, source, max_draw_attempts=5)
        assert excinfo.value.attempts == 5
        # one accepted draw for margin 0, then five rejected draws
        assert source.calls == 6


class TestRandomOrderAllocator:
    def test_scripted_fill_order(self):
        # pick margin 1, value 0; then margin 0 (only one left), value index 1
        source = ScriptedRandomSource([1, 0, 0, 1])
        assert allocate_random_order(2, 3, 1, source) == [1, 0]
        assert source.remaining == 0

    def test_neighbour_exclusion_is_symmetric(self):
        # filling margin 2 first must restrict both margin 1 and margin 3
        for seed in range(50):
            buffer = allocate_random_order(3, 8, 2, PythonRandomSource(seed))
            margins = _margins(buffer, 2)
            assert not set(margins[1]) & set(margins[2])
            assert not set(margins[2]) & set(margins[3])

    def test_starvation_when_availability_empties(self):
        # margins 0 and 2 take {0, 1} and {2, 3}; margin 1 is left with nothing
        source = ScriptedRandomSource([0, 0, 0, 1, 2, 2, 2, 2, 1])
        with pytest.raises(StarvationError):
            allocate_random_order(3, 4, 2, source)


class TestGetAllocator:
    def test_known_orders(self, rng):
        for order in AllocationOrder:
            allocate = get_allocator(order)
            assert len(allocate(3, 10, 2, rng)) == 8

    def test_unknown_order(self):
        with pytest.raises(ValueError):
            get_allocator(99)  # type: ignore[arg-type]

    def test_sequential_budget_forwarded(self):
        allocate = get_allocator(AllocationOrder.SEQUENTIAL, max_draw_attempts=3)
        with pytest.raises(StarvationError) as excinfo:
            allocate(2, 4, 1, ConstantSource(1))
        assert excinfo.value.attempts == 3


class TestMarginLayout:
    def test_slices(self):
        layout = MarginLayout.from_buffer([0, 1, 2, 3, 4, 5, 6, 7], 3, 2)
        assert layout.front(0) == ()
        assert layout.back(0) == (0, 1)
        assert layout.front(1) == (2, 3)
        assert layout.back(1) == (4, 5)
        assert layout.front(2) == (6, 7)
        assert layout.back(2) == ()

    def test_single_node(self):
        layout = MarginLayout.from_buffer([], 1, 3)
        assert layout.front(0) == ()
        assert layout.back(0) == ()

    def test_buffer_is_copied(self):
        buffer = [0, 1]
        layout = MarginLayout.from_buffer(buffer, 2, 1)
        buffer[0] = 9
        assert layout.back(0) == (0,)

    def test_wrong_buffer_length(self):
        with pytest.raises(ValueError):
            MarginLayout.from_buffer([0, 1, 2], 2, 1)

    def test_segment_out_of_range(self):
        layout = MarginLayout.from_buffer([0, 1], 2, 1)
        with pytest.raises(IndexError):
            layout.front(2)
        with pytest.raises(IndexError):
            layout.back(-1)


class TestCommon:
    def test_margin_count(self):
        assert margin_count(1) == 0
        assert margin_count(2) == 2
        assert margin_count(10) == 18

    def test_check_path_parameters_accepts_tight_slack(self):
        check_path_parameters(3, 4, 2)
        check_path_parameters(1, 4, 4)
        check_path_parameters(1, 1, 0)

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            check_path_parameters(2, 4, 5)


class TestIndexedSet:
    def test_add_is_idempotent(self):
        s = IndexedSet([1, 2, 2, 3])
        assert len(s) == 3
        assert list(s) == [1, 2, 3]

    def test_discard_swaps_last_into_hole(self):
        s = IndexedSet([0, 1, 2, 3])
        s.discard(0)
        assert list(s) == [3, 1, 2]
        s.discard(2)
        assert list(s) == [3, 1]
        assert 2 not in s
        assert s[1] == 1

    def test_discard_missing_is_noop(self):
        s = IndexedSet([5])
        s.discard(7)
        assert list(s) == [5]

    def test_discard_last_element(self):
        s = IndexedSet([4, 5])
        s.discard(5)
        s.discard(4)
        assert len(s) == 0
