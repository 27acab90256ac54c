#!/usr/bin/env python3
"""
Reduce Task Executor
Collects the partial sums of every partition and merges them into the
final per-word totals
"""

import time
import logging
import threading
from typing import Dict, Iterable, List

from distwordcount.common.errors import AggregationFailure
from distwordcount.worker.aggregation import reduce_partials
from distwordcount.worker.map_executor import PartitionResult

logger = logging.getLogger(__name__)


class ReduceExecutor:
    """Executes the single global reduce task"""

    def __init__(self, expected_partitions: Iterable[int]):
        """
        Initialize the reduce executor

        Args:
            expected_partitions: Ids of every partition that must contribute
                before totals can be produced
        """
        self.expected_partitions = frozenset(expected_partitions)
        self._results: Dict[int, PartitionResult] = {}
        self._lock = threading.Lock()
        self.execution_time_ms = 0

    def add_result(self, result: PartitionResult):
        """
        Accept one partition's output

        A second result for the same partition replaces the first, so a
        retried partition is never counted twice.

        Raises:
            AggregationFailure: If the partition was not expected
        """
        if result.partition_id not in self.expected_partitions:
            raise AggregationFailure(f"Unexpected partition {result.partition_id}")
        with self._lock:
            if result.partition_id in self._results:
                logger.warning(f"Reduce task: replacing result of partition {result.partition_id}")
            self._results[result.partition_id] = result

    @property
    def missing_partitions(self) -> List[int]:
        with self._lock:
            return sorted(self.expected_partitions - self._results.keys())

    @property
    def pairs_in(self) -> int:
        """Number of (word, count) pairs received from all partitions"""
        with self._lock:
            return sum(r.pairs_out for r in self._results.values())

    def execute(self) -> Dict[str, int]:
        """
        Execute the reduce task

        Returns:
            Dictionary mapping each matched word to its total count

        Raises:
            AggregationFailure: If a partition's result never arrived or a
                partial sum is malformed
        """
        start_time = time.time()

        missing = self.missing_partitions
        if missing:
            raise AggregationFailure(
                f"Missing results for partitions: {', '.join(map(str, missing))}"
            )

        with self._lock:
            partials = [self._results[p].partial_counts for p in sorted(self._results)]

        logger.info(f"Reduce task: Merging {len(partials)} partition results")
        totals = reduce_partials(partials)

        self.execution_time_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Reduce task: Produced {len(totals)} words in {self.execution_time_ms}ms")
        return totals
