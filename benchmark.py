#!/usr/bin/env python3
"""
Automated benchmarking script for the word count pipeline.
Runs multiple job configurations in-process and collects performance metrics.
"""

import csv
import json
import sys
import time
from datetime import datetime
from pathlib import Path

from distwordcount.common.config import JobConfig
from distwordcount.common.input_split import split_input_file
from distwordcount.common.log import configure_logging
from distwordcount.coordinator.job_manager import WordCountJob

# Configuration
RESULTS_DIR = Path("benchmark_results")
SHARED_DIR = Path("shared")
INPUT_DIR = SHARED_DIR / "input"
PATTERNS_FILE = SHARED_DIR / "samples" / "patterns.txt"


def _config(name, input_file, partitions, combiner=True, executor="thread", description=""):
    return {
        "name": name,
        "input": str(INPUT_DIR / input_file),
        "partitions": partitions,
        "combiner": combiner,
        "executor": executor,
        "description": description,
    }


# Benchmark configurations
BENCHMARKS = [
    # Experiment 1: Input Size Scaling (fixed parallelism)
    _config("input_size_small", "story_small.txt", 4, description="Small input (~64KB)"),
    _config("input_size_medium", "story_medium.txt", 4, description="Medium input (~1MB)"),
    _config("input_size_large", "story_large.txt", 4, description="Large input (~10MB)"),
    _config("input_size_xlarge", "story_xlarge.txt", 4, description="Extra large input (~50MB)"),

    # Experiment 2: Partition Scaling (fixed input, worker processes)
    _config("partition_scaling_1", "story_large.txt", 1, executor="process", description="1 partition"),
    _config("partition_scaling_2", "story_large.txt", 2, executor="process", description="2 partitions"),
    _config("partition_scaling_4", "story_large.txt", 4, executor="process", description="4 partitions"),
    _config("partition_scaling_8", "story_large.txt", 8, executor="process", description="8 partitions"),

    # Experiment 3: Combiner effect
    _config("combiner_on", "story_large.txt", 4, combiner=True, description="Combiner enabled"),
    _config("combiner_off", "story_large.txt", 4, combiner=False, description="Combiner disabled"),
]


def setup_directories():
    """Create necessary directories."""
    RESULTS_DIR.mkdir(exist_ok=True)
    INPUT_DIR.mkdir(parents=True, exist_ok=True)
    print(f"✓ Created directories: {RESULTS_DIR}, {INPUT_DIR}")


def check_prerequisites():
    """Verify required files exist."""
    if not PATTERNS_FILE.exists():
        print(f"❌ Missing required file: {PATTERNS_FILE}")
        sys.exit(1)
    if not any(INPUT_DIR.glob("story_*.txt")):
        print(f"❌ No inputs in {INPUT_DIR}; run scripts/generate_benchmark_inputs.py first")
        sys.exit(1)
    print("✓ All prerequisite files found")


def run_benchmark(config, run_number=1):
    """Run a single benchmark configuration."""
    print(f"\n{'='*70}")
    print(f"Benchmark: {config['name']} (Run {run_number})")
    print(f"Description: {config['description']}")
    print(f"Config: {config['partitions']} partitions, combiner={config['combiner']}, "
          f"executor={config['executor']}")
    print(f"{'='*70}")

    input_path = Path(config["input"])
    if not input_path.exists():
        print(f"❌ Input file not found: {input_path}")
        print(f"   Skipping this benchmark...")
        return None

    input_size = input_path.stat().st_size
    print(f"Input size: {input_size / 1024 / 1024:.2f} MB")

    job_config = JobConfig(
        num_partitions=config["partitions"],
        max_workers=config["partitions"],
        use_combiner=config["combiner"],
        executor=config["executor"],
        job_id=f"bench-{config['name']}-{run_number}",
    )
    job = WordCountJob(job_config)

    start_time = time.time()
    try:
        splits = split_input_file(str(input_path), config["partitions"])
        result = job.run([str(PATTERNS_FILE)], splits)
        success = True
    except Exception as e:
        print(f"  ❌ Job failed: {e}")
        result = None
        success = False
    duration = time.time() - start_time

    if success:
        print(f"  ✓ Job completed in {duration:.2f}s")

    metrics = result.metrics if result else None
    return {
        "benchmark_name": config["name"],
        "description": config["description"],
        "run_number": run_number,
        "timestamp": datetime.now().isoformat(),
        "job_id": job_config.job_id,
        "input_file": config["input"],
        "input_size_bytes": input_size,
        "input_size_mb": round(input_size / 1024 / 1024, 2),
        "num_partitions": config["partitions"],
        "use_combiner": config["combiner"],
        "executor": config["executor"],
        "success": success,
        "total_runtime_seconds": round(duration, 3),
        "throughput_mbps": round((input_size / 1024 / 1024) / duration, 3) if duration > 0 else 0,
        "map_phase_seconds": round(metrics.map_phase_time_seconds, 3) if metrics else 0,
        "reduce_phase_seconds": round(metrics.reduce_phase_time_seconds, 3) if metrics else 0,
        "map_output_pairs": metrics.map_output_pairs if metrics else 0,
        "reduce_input_pairs": metrics.reduce_input_pairs if metrics else 0,
        "matched_words": metrics.matched_words if metrics else 0,
        "peak_memory_mb": round(metrics.peak_memory_bytes / 1024 / 1024, 1) if metrics else 0,
    }


def save_results(results, timestamp):
    """Save results to JSON and CSV files."""
    json_file = RESULTS_DIR / f"benchmark_results_{timestamp}.json"
    with open(json_file, 'w') as f:
        json.dump(results, f, indent=2)
    print(f"\n✓ Results saved to: {json_file}")

    csv_file = RESULTS_DIR / f"benchmark_results_{timestamp}.csv"
    if results:
        fieldnames = list(results[0].keys())
        with open(csv_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(results)
        print(f"✓ Results saved to: {csv_file}")

    return json_file, csv_file


def print_summary(results):
    """Print a summary table of results."""
    print(f"\n{'='*70}")
    print("BENCHMARK SUMMARY")
    print(f"{'='*70}")
    print(f"{'Benchmark':<25} {'Parts':>5} {'Comb':>5} {'Runtime':>10} {'Status':>10}")
    print(f"{'-'*70}")

    for r in results:
        print(f"{r['benchmark_name']:<25} {r['num_partitions']:>5} "
              f"{'yes' if r['use_combiner'] else 'no':>5} {r['total_runtime_seconds']:>9.2f}s "
              f"{'✓' if r['success'] else '✗':>10}")

    print(f"{'='*70}")

    successful = sum(1 for r in results if r['success'])
    print(f"Total: {len(results)} benchmarks, {successful} successful, "
          f"{len(results) - successful} failed")


def main():
    """Main benchmarking workflow."""
    print("="*70)
    print("Word Count Performance Benchmark Suite")
    print("="*70)

    configure_logging()
    setup_directories()
    check_prerequisites()

    runs_per_benchmark = 1
    for arg in sys.argv[1:]:
        if arg.startswith("--runs="):
            runs_per_benchmark = max(1, min(5, int(arg.split("=", 1)[1])))

    print(f"\nRunning {len(BENCHMARKS)} benchmarks × {runs_per_benchmark} runs = "
          f"{len(BENCHMARKS) * runs_per_benchmark} total jobs")

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    all_results = []

    for config in BENCHMARKS:
        for run in range(1, runs_per_benchmark + 1):
            result = run_benchmark(config, run_number=run)
            if result:
                all_results.append(result)

    if all_results:
        json_file, csv_file = save_results(all_results, timestamp)
        print_summary(all_results)

        print(f"\n{'='*70}")
        print("Next steps:")
        print(f"  1. Review results: cat {json_file}")
        print(f"  2. Generate plots: python plot_results.py {json_file}")
        print(f"{'='*70}")
    else:
        print("\n❌ No results collected")


if __name__ == "__main__":
    main()
