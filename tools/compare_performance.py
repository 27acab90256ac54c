#!/usr/bin/env python3
"""
Run the same job with and without combiner to measure effectiveness.
"""

import sys
from pathlib import Path

from distwordcount.client.monitoring import format_duration
from distwordcount.common.config import JobConfig
from distwordcount.common.input_split import split_input_file
from distwordcount.common.log import configure_logging
from distwordcount.coordinator.job_manager import WordCountJob


def run_job(patterns_file, input_path, num_partitions, use_combiner):
    """Run a word count job and return its result."""
    config = JobConfig(num_partitions=num_partitions, max_workers=num_partitions,
                       use_combiner=use_combiner)
    job = WordCountJob(config)
    result = job.run([patterns_file], split_input_file(input_path, num_partitions))
    print(f"Job {result.job_id} completed in {format_duration(result.metrics.total_time_seconds)}")
    return result


def print_metrics(result):
    metrics = result.metrics
    print(f"  Job ID: {result.job_id}")
    print(f"  Runtime: {format_duration(metrics.total_time_seconds)}")
    print(f"  Pairs emitted by map: {metrics.map_output_pairs}")
    print(f"  Pairs sent to reduce: {metrics.reduce_input_pairs}")


def main():
    if len(sys.argv) < 3:
        print("Usage: python3 compare_performance.py <patterns_file> <input_path> [num_partitions]")
        sys.exit(1)

    patterns_file = sys.argv[1]
    input_path = sys.argv[2]
    num_partitions = int(sys.argv[3]) if len(sys.argv) > 3 else 8

    configure_logging()

    print("=" * 60)
    print("WORD COUNT PERFORMANCE COMPARISON")
    print("=" * 60)
    print(f"Patterns: {patterns_file}")
    print(f"Input: {input_path}")
    print(f"Partitions: {num_partitions}")
    print("=" * 60)

    print("\n[1/2] Running job WITHOUT combiner...")
    print("-" * 60)
    without = run_job(patterns_file, input_path, num_partitions, use_combiner=False)

    print("\n[2/2] Running job WITH combiner...")
    print("-" * 60)
    with_combiner = run_job(patterns_file, input_path, num_partitions, use_combiner=True)

    if without.counts != with_combiner.counts:
        print("❌ Totals differ between the two runs!")
        sys.exit(1)

    print("\n" + "=" * 60)
    print("RESULTS")
    print("=" * 60)
    print("\nWithout Combiner:")
    print_metrics(without)
    print("\nWith Combiner:")
    print_metrics(with_combiner)
    print(f"\nCombiner reduction: {with_combiner.metrics.combiner_reduction_ratio:.1%}")

    metrics_dir = Path("benchmark_results")
    metrics_dir.mkdir(exist_ok=True)
    for result in (without, with_combiner):
        result.metrics.save_to_file(str(metrics_dir / f"{result.job_id}.json"))

    print("\n" + "=" * 60)
    print("Metrics files saved at:")
    print(f"  {metrics_dir / (without.job_id + '.json')}")
    print(f"  {metrics_dir / (with_combiner.job_id + '.json')}")
    print("=" * 60)


if __name__ == '__main__':
    main()
