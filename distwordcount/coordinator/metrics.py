"""
Performance metrics collection for word count jobs.
"""

import time
import json
import psutil
from dataclasses import dataclass, asdict
from typing import Dict, Optional


@dataclass
class JobMetrics:
    """Metrics for a single word count job execution."""

    job_id: str
    start_time: float
    end_time: float
    map_phase_start: float
    map_phase_end: float
    reduce_phase_start: float
    reduce_phase_end: float
    num_partitions: int
    use_combiner: bool
    case_sensitive: bool
    dictionary_size: int = 0
    records_processed: int = 0
    records_skipped: int = 0
    matched_words: int = 0
    map_output_pairs: int = 0
    reduce_input_pairs: int = 0
    distinct_words: int = 0
    peak_memory_bytes: int = 0
    combiner_reduction_ratio: float = 0.0

    @property
    def total_time_seconds(self) -> float:
        """Total job execution time in seconds."""
        return self.end_time - self.start_time

    @property
    def map_phase_time_seconds(self) -> float:
        """Map phase execution time in seconds."""
        return self.map_phase_end - self.map_phase_start

    @property
    def reduce_phase_time_seconds(self) -> float:
        """Reduce phase execution time in seconds."""
        return self.reduce_phase_end - self.reduce_phase_start

    def to_dict(self) -> dict:
        """Convert metrics to dictionary."""
        data = asdict(self)
        data['total_time_seconds'] = self.total_time_seconds
        data['map_phase_time_seconds'] = self.map_phase_time_seconds
        data['reduce_phase_time_seconds'] = self.reduce_phase_time_seconds
        return data

    def save_to_file(self, filepath: str):
        """Save metrics to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)


def get_memory_usage() -> int:
    """Resident memory in bytes of this process and its worker processes."""
    process = psutil.Process()
    total = process.memory_info().rss
    for child in process.children(recursive=True):
        try:
            total += child.memory_info().rss
        except psutil.Error:
            # Worker exited between listing and sampling
            continue
    return total


class MetricsCollector:
    """Collects metrics for one word count job."""

    def __init__(self):
        self.metrics: Optional[JobMetrics] = None

    def start_job(self, job_id: str, num_partitions: int, use_combiner: bool,
                  case_sensitive: bool):
        """Initialize metrics tracking for a new job."""
        now = time.time()
        self.metrics = JobMetrics(
            job_id=job_id,
            start_time=now,
            end_time=0,
            map_phase_start=0,
            map_phase_end=0,
            reduce_phase_start=0,
            reduce_phase_end=0,
            num_partitions=num_partitions,
            use_combiner=use_combiner,
            case_sensitive=case_sensitive,
        )
        self.sample_memory()

    def start_map_phase(self, dictionary_size: int):
        self.metrics.dictionary_size = dictionary_size
        self.metrics.map_phase_start = time.time()

    def end_map_phase(self, counters: Dict[str, int], map_output_pairs: int):
        """Mark the end of the map phase and record the map counters."""
        self.metrics.map_phase_end = time.time()
        self.metrics.records_processed = counters.get('records_processed', 0)
        self.metrics.records_skipped = counters.get('records_skipped', 0)
        self.metrics.matched_words = counters.get('input_words', 0)
        self.metrics.map_output_pairs = map_output_pairs
        self.sample_memory()

    def start_reduce_phase(self, reduce_input_pairs: int):
        """Mark the start of the reduce phase and compute the combiner effect."""
        self.metrics.reduce_phase_start = time.time()
        self.metrics.reduce_input_pairs = reduce_input_pairs
        if self.metrics.map_output_pairs > 0:
            self.metrics.combiner_reduction_ratio = \
                1.0 - (reduce_input_pairs / self.metrics.map_output_pairs)

    def end_job(self, distinct_words: int):
        """Mark job completion."""
        now = time.time()
        self.metrics.reduce_phase_end = now
        self.metrics.end_time = now
        self.metrics.distinct_words = distinct_words
        self.sample_memory()

    def fail_job(self):
        self.metrics.end_time = time.time()

    def sample_memory(self):
        if self.metrics is not None:
            self.metrics.peak_memory_bytes = max(self.metrics.peak_memory_bytes,
                                                 get_memory_usage())
