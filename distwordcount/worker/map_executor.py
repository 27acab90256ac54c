#!/usr/bin/env python3
"""
Map Task Executor
Filters the records of one partition against the dictionary, emitting
(word, 1) for every dictionary word, and combines the events locally
"""

import time
import logging
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterable, List, Optional, Tuple, Union

from distwordcount.common.config import JobConfig
from distwordcount.common.errors import PartitionFailure, RecordDecodeError
from distwordcount.worker.aggregation import combine
from distwordcount.worker.diagnostics import (
    Counter, Counters, StatusCallback, log_status, status_message,
)
from distwordcount.worker.tokenizer import tokenize

logger = logging.getLogger(__name__)

Record = Union[str, bytes]


def filter_record(record: str, dictionary: AbstractSet[str],
                  case_sensitive: bool = True) -> List[Tuple[str, int]]:
    """
    Emit (word, 1) for each token of the record found in the dictionary

    Args:
        record: One line of text
        dictionary: Words to count
        case_sensitive: When False the record is lowercased before
            tokenizing. The dictionary is used as loaded.

    Returns:
        List of (word, 1) tuples in token order
    """
    line = record if case_sensitive else record.lower()
    return [(token, 1) for token in tokenize(line) if token in dictionary]


@dataclass
class PartitionResult:
    """Output of one map task, handed to the reduce stage"""
    partition_id: int
    partial_counts: Union[Dict[str, int], List[Tuple[str, int]]]
    combined: bool
    events_emitted: int
    counters: Dict[str, int] = field(default_factory=dict)
    execution_time_ms: int = 0

    @property
    def pairs_out(self) -> int:
        """Number of (word, count) pairs leaving the partition"""
        return len(self.partial_counts)


class MapExecutor:
    """Executes a single map task"""

    def __init__(self, partition_id: int, records: Iterable[Record],
                 dictionary: AbstractSet[str], config: JobConfig,
                 status_callback: Optional[StatusCallback] = None):
        """
        Initialize the map executor

        Args:
            partition_id: Partition this task processes
            records: Record source for the partition (lines as str or bytes)
            dictionary: Read-only set of words to count
            config: Job options (case sensitivity, combiner, status interval)
            status_callback: Receives progress messages; defaults to the log
        """
        self.partition_id = partition_id
        self.records = records
        self.dictionary = dictionary
        self.config = config
        self.status_callback = status_callback or log_status
        self.counters = Counters()

    @property
    def source_name(self) -> str:
        return str(getattr(self.records, 'path', f"partition-{self.partition_id}"))

    def execute(self) -> PartitionResult:
        """
        Execute the map task

        Returns:
            PartitionResult with the combined subtotals (or the raw events
            when the combiner is off) and the partition's counters

        Raises:
            PartitionFailure: If the record source fails
        """
        start_time = time.time()
        logger.info(f"Map task {self.partition_id}: Processing records from {self.source_name}")

        try:
            if self.config.use_combiner:
                partial = combine(self._map_records())
            else:
                partial = list(self._map_records())
        except PartitionFailure:
            raise
        except Exception as e:
            logger.error(f"Map task {self.partition_id} failed: {e}")
            raise PartitionFailure(self.partition_id, str(e)) from e

        events_emitted = self.counters.get(Counter.INPUT_WORDS)
        logger.info(f"Map task {self.partition_id}: Generated {events_emitted} intermediate pairs")
        if self.config.use_combiner:
            logger.info(f"Map task {self.partition_id}: After combiner: {len(partial)} pairs")

        execution_time = int((time.time() - start_time) * 1000)
        logger.info(f"Map task {self.partition_id}: Completed in {execution_time}ms")

        return PartitionResult(
            partition_id=self.partition_id,
            partial_counts=partial,
            combined=self.config.use_combiner,
            events_emitted=events_emitted,
            counters=self.counters.snapshot(),
            execution_time_ms=execution_time,
        )

    def _map_records(self):
        for num_records, record in enumerate(self.records, start=1):
            try:
                text = self._decode(record, num_records)
            except RecordDecodeError as e:
                logger.warning(f"Skipping record: {e}")
                self.counters.incr(Counter.RECORDS_SKIPPED)
            else:
                matches = filter_record(text, self.dictionary, self.config.case_sensitive)
                if matches:
                    self.counters.incr(Counter.INPUT_WORDS, len(matches))
                yield from matches

            self.counters.incr(Counter.RECORDS_PROCESSED)
            if num_records % self.config.status_interval == 0:
                self._report_status(num_records)

    def _decode(self, record: Record, record_number: int) -> str:
        if isinstance(record, str):
            return record
        if isinstance(record, (bytes, bytearray)):
            try:
                return bytes(record).decode('utf-8')
            except UnicodeDecodeError as e:
                raise RecordDecodeError(self.partition_id, record_number, str(e)) from e
        raise RecordDecodeError(self.partition_id, record_number,
                                f"unsupported record type {type(record).__name__}")

    def _report_status(self, num_records: int):
        try:
            self.status_callback(self.partition_id, status_message(num_records, self.source_name))
        except Exception as e:
            logger.warning(f"Map task {self.partition_id}: status callback failed: {e}")
