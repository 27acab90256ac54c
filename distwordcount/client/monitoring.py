"""Console helpers for following job progress and printing results."""

import sys
import threading
from typing import Dict, Optional, TextIO


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human readable string."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds / 60)
    seconds = seconds % 60
    if minutes < 60:
        return f"{minutes}m {seconds:.1f}s"
    hours = int(minutes / 60)
    minutes = minutes % 60
    return f"{hours}h {minutes}m {seconds:.1f}s"


def format_progress_bar(completed: int, total: int, width: int = 40) -> str:
    """Create a progress bar string."""
    percentage = (completed / total) if total > 0 else 0
    filled = int(width * percentage)
    bar = "█" * filled + "░" * (width - filled)
    return f"[{bar}] {percentage:.1%}"


def format_bytes(num_bytes: int) -> str:
    return f"{num_bytes / (1024 * 1024):.1f} MB"


class ConsoleStatusReporter:
    """Status callback printing map task progress messages to a stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stderr
        self.messages = 0
        self._lock = threading.Lock()

    def __call__(self, partition_id: int, message: str):
        with self._lock:
            self.messages += 1
            print(f"  [partition {partition_id}] {message}", file=self.stream)


def print_job_status(status: Dict, stream: Optional[TextIO] = None):
    """Print the snapshot returned by WordCountJob.get_status()."""
    stream = stream or sys.stdout
    print(f"Job ID: {status['job_id']}", file=stream)
    print(f"Status: {status['status'].upper()}", file=stream)
    print(format_progress_bar(status['map_completed'], status['map_total']), file=stream)
    print(f"Map tasks: {status['map_completed']}/{status['map_total']}", file=stream)
    print(f"Matched words: {status['matched_words']}", file=stream)
    if status.get('error_message'):
        print("\nErrors:", file=stream)
        print(f"  {status['error_message']}", file=stream)


def print_job_summary(result, stream: Optional[TextIO] = None):
    """Print counters and metrics of a completed job."""
    stream = stream or sys.stdout
    metrics = result.metrics
    print(f"✓ Job {result.job_id} completed in {format_duration(metrics.total_time_seconds)}", file=stream)
    print(f"  Partitions: {metrics.num_partitions}", file=stream)
    print(f"  Records processed: {metrics.records_processed} "
          f"({metrics.records_skipped} skipped)", file=stream)
    print(f"  Matched words: {metrics.matched_words}", file=stream)
    print(f"  Distinct words: {metrics.distinct_words}", file=stream)
    if metrics.use_combiner:
        print(f"  Combiner: {metrics.map_output_pairs} -> {metrics.reduce_input_pairs} pairs "
              f"({metrics.combiner_reduction_ratio:.1%} reduction)", file=stream)
    print(f"  Peak memory: {format_bytes(metrics.peak_memory_bytes)}", file=stream)
    if result.output_path:
        print(f"  Output: {result.output_path}", file=stream)
