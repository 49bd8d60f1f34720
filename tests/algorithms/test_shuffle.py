"""Tests for the Durstenfeld shuffle."""

import pytest

from randpath.algorithms.shuffle import shuffle_in_place, shuffled_sequence
from randpath.errors import InvalidParameterError
from randpath.random_source import PythonRandomSource, ScriptedRandomSource


class TestShuffledSequence:
    def test_empty_and_single(self, rng):
        assert shuffled_sequence(0, rng) == []
        assert shuffled_sequence(1, rng) == [0]

    def test_is_permutation(self, rng):
        for length in (2, 5, 17, 100):
            assert sorted(shuffled_sequence(length, rng)) == list(range(length))

    def test_negative_length_rejected(self, rng):
        with pytest.raises(InvalidParameterError):
            shuffled_sequence(-1, rng)

    def test_scripted_draws(self):
        """Draws j for i = N-1 .. 1 and swaps positions i and j."""
        # i=3 j=0 -> [3,1,2,0]; i=2 j=0 -> [2,1,3,0]; i=1 j=0 -> [1,2,3,0]
        assert shuffled_sequence(4, ScriptedRandomSource([0, 0, 0])) == [1, 2, 3, 0]
        # j == i at every step leaves the identity
        assert shuffled_sequence(4, ScriptedRandomSource([3, 2, 1])) == [0, 1, 2, 3]

    def test_uses_exactly_n_minus_one_draws(self):
        source = ScriptedRandomSource([0] * 9 + [0])
        shuffled_sequence(10, source)
        assert source.remaining == 1

    def test_reproducible_with_same_seed(self):
        a = shuffled_sequence(50, PythonRandomSource(11))
        b = shuffled_sequence(50, PythonRandomSource(11))
        assert a == b

    def test_positions_uniform(self):
        """Every value lands at every position with frequency close to 1/N."""
        n, trials = 10, 100_000
        source = PythonRandomSource(2024)
        counts = [[0] * n for _ in range(n)]
        for _ in range(trials):
            for position, value in enumerate(shuffled_sequence(n, source)):
                counts[value][position] += 1

        max_dev = max(
            abs(counts[v][p] / trials - 1.0 / n) for v in range(n) for p in range(n)
        )
        assert max_dev < 0.01


class TestShuffleInPlace:
    def test_restricted_range_leaves_outside_untouched(self, rng):
        for _ in range(50):
            values = list(range(10))
            shuffle_in_place(values, rng, 3, 7)
            assert values[:3] == [0, 1, 2]
            assert values[7:] == [7, 8, 9]
            assert sorted(values[3:7]) == [3, 4, 5, 6]

    def test_draws_stay_in_range(self):
        # i=4 draws from [2,5), i=3 from [2,4); script picks the low end
        values = [0, 1, 2, 3, 4, 5]
        shuffle_in_place(values, ScriptedRandomSource([2, 2]), 2, 5)
        # i=4 swap(4,2) -> [0,1,4,3,2,5]; i=3 swap(3,2) -> [0,1,3,4,2,5]
        assert values == [0, 1, 3, 4, 2, 5]

    def test_empty_range_no_draws(self):
        values = [0, 1, 2]
        shuffle_in_place(values, ScriptedRandomSource([]), 1, 1)
        shuffle_in_place(values, ScriptedRandomSource([]), 1, 2)
        assert values == [0, 1, 2]

    @pytest.mark.parametrize("start,stop", [(-1, 2), (0, 4), (2, 1)])
    def test_invalid_range(self, rng, start, stop):
        with pytest.raises(InvalidParameterError):
            shuffle_in_place([0, 1, 2], rng, start, stop)
