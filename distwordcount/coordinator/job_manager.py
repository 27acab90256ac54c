#!/usr/bin/env python3
"""
Job Manager for the word count pipeline
Loads the dictionary, runs map+combine over every partition in parallel,
then merges the partial sums in one reduce pass and writes the totals
"""

import logging
import os
import threading
from collections import defaultdict
from concurrent.futures import (
    ProcessPoolExecutor, ThreadPoolExecutor, as_completed,
)
from dataclasses import dataclass, field
from enum import Enum
from typing import AbstractSet, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from distwordcount.common.config import JobConfig
from distwordcount.common.errors import LoadError, PartitionFailure
from distwordcount.common.input_split import InputSplit
from distwordcount.coordinator.metrics import JobMetrics, MetricsCollector
from distwordcount.worker.diagnostics import Counter, Counters, StatusCallback
from distwordcount.worker.dictionary import load_dictionary, unmatchable_words
from distwordcount.worker.map_executor import MapExecutor, PartitionResult
from distwordcount.worker.reduce_executor import ReduceExecutor

logger = logging.getLogger(__name__)


class JobStatus(Enum):
    """Status of a word count job"""
    PENDING = "pending"
    LOADING = "loading"
    MAPPING = "mapping"
    REDUCING = "reducing"
    COMPLETED = "completed"
    FAILED = "failed"


class TaskStatus(Enum):
    """Status of individual map tasks"""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class MapTask:
    """Represents a single map task"""
    partition_id: int
    records: Iterable = field(repr=False)
    status: TaskStatus = TaskStatus.PENDING
    error_message: str = ""


@dataclass
class JobResult:
    """Outcome of a completed job"""
    job_id: str
    counts: Dict[str, int]
    counters: Dict[str, int]
    metrics: JobMetrics
    output_path: Optional[str] = None


def group_by_partition(pairs: Iterable[Tuple[int, object]]) -> Dict[int, List]:
    """
    Group a (partition_id, record) stream into per-partition record lists

    Records keep their order within each partition.
    """
    partitions = defaultdict(list)
    for partition_id, record in pairs:
        partitions[partition_id].append(record)
    return dict(partitions)


def run_map_task(partition_id: int, records, dictionary: AbstractSet[str],
                 config: JobConfig, status_callback: Optional[StatusCallback] = None) -> PartitionResult:
    """Run map+combine for one partition; module level so worker processes can import it"""
    return MapExecutor(partition_id, records, dictionary, config, status_callback).execute()


def _as_tasks(partitions) -> List[MapTask]:
    if isinstance(partitions, Mapping):
        items = partitions.items()
    else:
        items = []
        for index, records in enumerate(partitions):
            partition_id = records.partition_id if isinstance(records, InputSplit) else index
            items.append((partition_id, records))

    tasks = [MapTask(partition_id=pid, records=records) for pid, records in items]
    ids = [t.partition_id for t in tasks]
    if len(ids) != len(set(ids)):
        raise ValueError("Partition ids must be unique")
    return tasks


class WordCountJob:
    """Runs one word count job through loading, mapping and reducing"""

    def __init__(self, config: Optional[JobConfig] = None,
                 status_callback: Optional[StatusCallback] = None):
        """
        Args:
            config: Job options; defaults to JobConfig()
            status_callback: Receives (partition_id, message) progress
                notifications. Only used with the thread executor; worker
                processes write their status to the log.
        """
        self.config = config or JobConfig()
        self.job_id = self.config.job_id
        self.status_callback = status_callback
        self.status = JobStatus.PENDING
        self.error_message = ""
        self.tasks: Dict[int, MapTask] = {}
        self.counters = Counters()
        self.metrics_collector = MetricsCollector()
        self.lock = threading.Lock()
        if status_callback is not None and self.config.executor == "process":
            logger.warning(f"Job {self.job_id}: status callback ignored with the process executor; "
                           f"worker processes log their status instead")

    def run(self, dictionary_sources: Sequence, partitions, sink=None) -> JobResult:
        """
        Run the job to completion

        Args:
            dictionary_sources: Pattern files or blobs, see load_dictionary.
                A single path or blob is accepted as well.
            partitions: Mapping of partition id to records, a sequence of
                record iterables, or a list of InputSplit
            sink: Object with a write(pairs) method receiving the final
                (word, total) pairs; skipped when None

        Returns:
            JobResult with the final counts

        Raises:
            LoadError: If the dictionary cannot be loaded
            PartitionFailure: If any partition fails
            AggregationFailure: If the partial sums cannot be merged
        """
        self.metrics_collector.start_job(self.job_id, 0, self.config.use_combiner,
                                         self.config.case_sensitive)
        try:
            dictionary = self._load_dictionary(dictionary_sources)
            self.tasks = {t.partition_id: t for t in _as_tasks(partitions)}
            self.metrics_collector.metrics.num_partitions = len(self.tasks)

            reducer = self._map_phase(dictionary)
            counts = self._reduce_phase(reducer)

            output_path = sink.write(counts.items()) if sink is not None else None

            self.metrics_collector.end_job(len(counts))
            self._set_status(JobStatus.COMPLETED)
            logger.info(f"Job {self.job_id} completed: {len(counts)} distinct words")
            return JobResult(
                job_id=self.job_id,
                counts=counts,
                counters=self.counters.snapshot(),
                metrics=self.metrics_collector.metrics,
                output_path=output_path,
            )
        except Exception as e:
            self._fail(str(e))
            raise

    def _load_dictionary(self, sources) -> AbstractSet[str]:
        self._set_status(JobStatus.LOADING)
        if isinstance(sources, (str, bytes, os.PathLike)):
            sources = (sources,)
        if not sources:
            raise LoadError(None, "no dictionary source given")
        dictionary = load_dictionary(*sources)
        logger.info(f"Job {self.job_id}: dictionary holds {len(dictionary)} words")

        unmatchable = unmatchable_words(dictionary, self.config.case_sensitive)
        if unmatchable:
            logger.warning(
                f"Job {self.job_id}: {len(unmatchable)} dictionary words contain uppercase "
                f"letters and cannot match case-insensitive input: {', '.join(unmatchable[:10])}"
            )
        return dictionary

    def _map_phase(self, dictionary: AbstractSet[str]) -> ReduceExecutor:
        self._set_status(JobStatus.MAPPING)
        self.metrics_collector.start_map_phase(len(dictionary))
        reducer = ReduceExecutor(self.tasks.keys())
        logger.info(f"Job {self.job_id} started MAP phase with {len(self.tasks)} partitions")

        map_output_pairs = 0
        if self.tasks:
            with self._create_executor() as executor:
                futures = {self._submit(executor, task, dictionary): task
                           for task in self.tasks.values()}

                # Barrier: every partition finishes before reduce starts
                for future in as_completed(futures):
                    task = futures[future]
                    error = future.exception()
                    if error is not None:
                        for pending in futures:
                            pending.cancel()
                        self._abort_map_phase(task, error)

                    result = future.result()
                    with self.lock:
                        task.status = TaskStatus.COMPLETED
                    self.counters.merge(result.counters)
                    map_output_pairs += result.events_emitted
                    reducer.add_result(result)
                    self.metrics_collector.sample_memory()

        self.metrics_collector.end_map_phase(self.counters.snapshot(), map_output_pairs)
        return reducer

    def _submit(self, executor, task: MapTask, dictionary):
        task.status = TaskStatus.RUNNING
        callback = self.status_callback if self.config.executor == "thread" else None
        return executor.submit(run_map_task, task.partition_id, task.records,
                               dictionary, self.config, callback)

    def _abort_map_phase(self, task: MapTask, error: BaseException):
        with self.lock:
            task.status = TaskStatus.FAILED
            task.error_message = str(error)
        if isinstance(error, PartitionFailure):
            raise error
        # Submission problems such as unpicklable records surface here
        raise PartitionFailure(task.partition_id, str(error)) from error

    def _reduce_phase(self, reducer: ReduceExecutor) -> Dict[str, int]:
        self._set_status(JobStatus.REDUCING)
        logger.info(f"Job {self.job_id} started REDUCE phase")
        self.metrics_collector.start_reduce_phase(reducer.pairs_in)
        return reducer.execute()

    def _create_executor(self):
        workers = min(self.config.max_workers, max(len(self.tasks), 1))
        if self.config.executor == "process":
            return ProcessPoolExecutor(max_workers=workers)
        return ThreadPoolExecutor(max_workers=workers, thread_name_prefix=f"map-{self.job_id[:8]}")

    def _set_status(self, status: JobStatus):
        with self.lock:
            self.status = status

    def _fail(self, error_msg: str):
        with self.lock:
            self.status = JobStatus.FAILED
            self.error_message = error_msg
        self.metrics_collector.fail_job()
        logger.error(f"Job {self.job_id} failed: {error_msg}")

    def get_status(self) -> Dict:
        """Get current job status with progress"""
        with self.lock:
            total = len(self.tasks)
            completed = sum(1 for t in self.tasks.values() if t.status == TaskStatus.COMPLETED)
            return {
                'job_id': self.job_id,
                'status': self.status.value,
                'map_completed': completed,
                'map_total': total,
                'matched_words': self.counters.get(Counter.INPUT_WORDS),
                'error_message': self.error_message,
            }
