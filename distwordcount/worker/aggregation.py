"""
Count aggregation shared by the combine and reduce stages.

Summing counts is associative and commutative, so the same routine folds
(word, 1) events inside one partition and partial sums across partitions.
"""

from collections import defaultdict
from typing import Dict, Iterable, Mapping, Tuple, Union

from distwordcount.common.errors import AggregationFailure

CountPairs = Iterable[Tuple[str, int]]


def aggregate_counts(pairs: CountPairs) -> Dict[str, int]:
    """
    Sum counts by word

    Args:
        pairs: (word, count) tuples in any order

    Returns:
        Dictionary mapping word to the sum of its counts

    Raises:
        AggregationFailure: If a count is not an integer
    """
    totals = defaultdict(int)
    for word, count in pairs:
        if isinstance(count, bool) or not isinstance(count, int):
            raise AggregationFailure(f"Count for {word!r} is not an integer: {count!r}")
        totals[word] += count
    return dict(totals)


def combine(events: CountPairs) -> Dict[str, int]:
    """Fold one partition's (word, 1) events into per-word subtotals"""
    return aggregate_counts(events)


def reduce_partials(partials: Iterable[Union[Mapping[str, int], CountPairs]]) -> Dict[str, int]:
    """
    Merge partial sums from all partitions into final totals

    A word absent from a partition contributes nothing for that partition.
    Each partial is either a word -> subtotal mapping (combined output) or an
    iterable of (word, count) pairs (uncombined output).
    """
    def pairs():
        for partial in partials:
            if isinstance(partial, Mapping):
                yield from partial.items()
            else:
                yield from partial
    return aggregate_counts(pairs())
