"""
Unit tests for the shared count aggregation
"""

import itertools

import pytest

from distwordcount.common.errors import AggregationFailure
from distwordcount.worker.aggregation import aggregate_counts, combine, reduce_partials


class TestCombine:
    """Tests for partition-local aggregation"""

    def test_sums_same_word_events(self):
        events = [("cat", 1), ("dog", 1), ("cat", 1)]
        assert combine(events) == {"cat": 2, "dog": 1}

    def test_order_does_not_matter(self):
        events = [("cat", 1), ("dog", 1), ("cat", 1), ("bird", 1)]
        expected = combine(events)
        for perm in itertools.permutations(events):
            assert combine(perm) == expected

    def test_empty_input(self):
        assert combine([]) == {}


class TestReducePartials:
    """Tests for cross-partition aggregation"""

    def test_multi_partition_merge(self):
        partition_a = {"cat": 2}
        partition_b = {"cat": 3, "dog": 1}
        assert reduce_partials([partition_a, partition_b]) == {"cat": 5, "dog": 1}

    def test_any_partition_order_gives_same_totals(self):
        partials = [{"cat": 2}, {"cat": 3, "dog": 1}, {"bird": 4}, {}]
        expected = {"cat": 5, "dog": 1, "bird": 4}
        for perm in itertools.permutations(partials):
            assert reduce_partials(perm) == expected

    def test_is_idempotent(self):
        partials = [{"cat": 2}, {"cat": 3, "dog": 1}]
        first = reduce_partials(partials)
        assert reduce_partials(partials) == first
        assert reduce_partials(partials) == first

    def test_does_not_mutate_inputs(self):
        partials = [{"cat": 2}, {"cat": 3}]
        reduce_partials(partials)
        assert partials == [{"cat": 2}, {"cat": 3}]

    def test_accepts_uncombined_pairs(self):
        partials = [[("cat", 1), ("cat", 1)], {"cat": 3, "dog": 1}]
        assert reduce_partials(partials) == {"cat": 5, "dog": 1}

    def test_no_partitions(self):
        assert reduce_partials([]) == {}

    def test_combine_then_reduce_equals_single_pass(self):
        events = [("a", 1), ("b", 1), ("a", 1), ("c", 1), ("a", 1), ("b", 1)]
        split = [combine(events[:2]), combine(events[2:5]), combine(events[5:])]
        assert reduce_partials(split) == aggregate_counts(events)


class TestAggregateCountsValidation:
    """Tests for malformed counts"""

    @pytest.mark.parametrize("bad", ["3", 1.5, None, True])
    def test_rejects_non_integer_counts(self, bad):
        with pytest.raises(AggregationFailure):
            aggregate_counts([("cat", bad)])
