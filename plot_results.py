#!/usr/bin/env python3
"""
Generate plots from benchmark results.
"""

import json
import sys
from pathlib import Path
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np
from collections import defaultdict

# Configuration
PLOTS_DIR = Path("benchmark_results/plots")


def load_results(json_file):
    """Load benchmark results from JSON file."""
    with open(json_file, 'r') as f:
        return json.load(f)


def aggregate_runs(results):
    """
    Aggregate multiple runs of the same benchmark.
    Returns dict: benchmark_name -> {avg_runtime, std_runtime, config, ...}
    """
    by_benchmark = defaultdict(list)

    for r in results:
        if r['success']:  # Only include successful runs
            by_benchmark[r['benchmark_name']].append(r)

    aggregated = {}
    for name, runs in by_benchmark.items():
        runtimes = [r['total_runtime_seconds'] for r in runs]
        throughputs = [r['throughput_mbps'] for r in runs]

        # Use first run for configuration data
        first = runs[0]

        aggregated[name] = {
            'benchmark_name': name,
            'description': first['description'],
            'num_partitions': first['num_partitions'],
            'use_combiner': first['use_combiner'],
            'input_size_mb': first['input_size_mb'],
            'map_output_pairs': first['map_output_pairs'],
            'reduce_input_pairs': first['reduce_input_pairs'],
            'matched_words': first['matched_words'],
            'avg_map_phase': float(np.mean([r['map_phase_seconds'] for r in runs])),
            'avg_reduce_phase': float(np.mean([r['reduce_phase_seconds'] for r in runs])),
            'avg_runtime': float(np.mean(runtimes)),
            'std_runtime': float(np.std(runtimes)),
            'min_runtime': float(np.min(runtimes)),
            'max_runtime': float(np.max(runtimes)),
            'avg_throughput': float(np.mean(throughputs)),
            'num_runs': len(runs)
        }

    return aggregated


def plot_input_size_scaling(aggregated, output_file):
    """Plot runtime vs input size."""
    data = [(v['input_size_mb'], v['avg_runtime'], v['std_runtime'])
            for k, v in aggregated.items()
            if k.startswith('input_size_')]

    if not data:
        print("⚠️  No input size scaling data found")
        return

    data.sort()
    sizes, runtimes, stds = zip(*data)

    plt.figure(figsize=(10, 6))
    plt.errorbar(sizes, runtimes, yerr=stds, marker='o', capsize=5,
                 linewidth=2, markersize=8)
    plt.xlabel('Input Size (MB)', fontsize=12)
    plt.ylabel('Runtime (seconds)', fontsize=12)
    plt.title('Word Count Performance: Input Size Scaling\n(4 partitions)',
              fontsize=14, fontweight='bold')
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(output_file, dpi=300, bbox_inches='tight')
    print(f"✓ Saved: {output_file}")
    plt.close()


def plot_partition_throughput(aggregated, output_file):
    """Plot matched words per second and the map/reduce split per partition count."""
    data = [(v['num_partitions'], v['matched_words'], v['avg_runtime'],
             v['avg_map_phase'], v['avg_reduce_phase'])
            for k, v in aggregated.items()
            if k.startswith('partition_scaling_')]

    if not data:
        print("⚠️  No partition scaling data found")
        return

    data.sort()
    partitions, matched, runtimes, map_times, reduce_times = (np.array(col) for col in zip(*data))
    words_per_second = np.divide(matched, runtimes, out=np.zeros(len(runtimes)),
                                 where=runtimes > 0)
    x = np.arange(len(partitions))

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(13, 5))
    ax1.bar(x, words_per_second / 1000, color='steelblue')
    ax1.set_ylabel('Matched words per second (thousands)', fontsize=12)
    ax1.set_title('Counting Throughput', fontsize=13, fontweight='bold')

    ax2.bar(x, map_times, label='Map + combine', color='#FFE66D')
    ax2.bar(x, reduce_times, bottom=map_times, label='Reduce', color='#95E1D3')
    ax2.set_ylabel('Time (seconds)', fontsize=12)
    ax2.set_title('Phase Breakdown', fontsize=13, fontweight='bold')
    ax2.legend(fontsize=11)

    for ax in (ax1, ax2):
        ax.set_xticks(x)
        ax.set_xticklabels([str(p) for p in partitions])
        ax.set_xlabel('Number of Partitions', fontsize=12)
        ax.grid(True, axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_file, dpi=300, bbox_inches='tight')
    print(f"✓ Saved: {output_file}")
    plt.close(fig)


def plot_combiner_effect(aggregated, output_file):
    """Plot pairs handed to reduce and runtime with and without the combiner."""
    on = aggregated.get('combiner_on')
    off = aggregated.get('combiner_off')

    if not on or not off:
        print("⚠️  No combiner comparison data found")
        return

    labels = ['Combiner off', 'Combiner on']
    pairs = np.array([off['reduce_input_pairs'], on['reduce_input_pairs']])
    runtimes = np.array([off['avg_runtime'], on['avg_runtime']])

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
    ax1.bar(labels, pairs, color=['gray', 'green'])
    ax1.set_yscale('log')
    ax1.set_ylabel('Pairs sent to reduce (log scale)', fontsize=12)
    ax1.set_title('Intermediate Data Volume', fontsize=13, fontweight='bold')

    ax2.bar(labels, runtimes, color=['gray', 'green'])
    ax2.set_ylabel('Runtime (seconds)', fontsize=12)
    ax2.set_title('Runtime', fontsize=13, fontweight='bold')

    for ax in (ax1, ax2):
        ax.grid(True, axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_file, dpi=300, bbox_inches='tight')
    print(f"✓ Saved: {output_file}")
    plt.close(fig)


def generate_summary_table(aggregated, output_file):
    """Generate a markdown table summarizing all results."""
    lines = [
        "# Benchmark Results Summary\n",
        "| Benchmark | Partitions | Combiner | Input (MB) | Avg Runtime (s) | Std Dev | Throughput (MB/s) |",
        "|-----------|------------|----------|------------|-----------------|---------|-------------------|"
    ]

    for name in sorted(aggregated.keys()):
        v = aggregated[name]
        lines.append(
            f"| {v['benchmark_name']:<21} | {v['num_partitions']:>10} | "
            f"{'yes' if v['use_combiner'] else 'no':>8} | {v['input_size_mb']:>10.2f} | "
            f"{v['avg_runtime']:>15.2f} | {v['std_runtime']:>7.3f} | "
            f"{v['avg_throughput']:>17.3f} |"
        )

    with open(output_file, 'w') as f:
        f.write('\n'.join(lines))

    print(f"✓ Saved: {output_file}")


def main():
    """Generate all plots from benchmark results."""
    if len(sys.argv) < 2:
        print("Usage: python plot_results.py <results.json>")
        print("\nExample:")
        print("  python plot_results.py benchmark_results/benchmark_results_20250113_120000.json")
        sys.exit(1)

    json_file = sys.argv[1]

    if not Path(json_file).exists():
        print(f"❌ File not found: {json_file}")
        sys.exit(1)

    print(f"Loading results from: {json_file}")
    results = load_results(json_file)
    print(f"✓ Loaded {len(results)} benchmark results")

    aggregated = aggregate_runs(results)
    print(f"✓ Aggregated into {len(aggregated)} unique benchmarks")

    PLOTS_DIR.mkdir(parents=True, exist_ok=True)

    print("\nGenerating plots...")
    plot_input_size_scaling(aggregated, PLOTS_DIR / "1_input_size_scaling.png")
    plot_partition_throughput(aggregated, PLOTS_DIR / "2_partition_throughput.png")
    plot_combiner_effect(aggregated, PLOTS_DIR / "3_combiner_effect.png")

    generate_summary_table(aggregated, PLOTS_DIR / "results_table.md")

    print(f"\n{'='*70}")
    print(f"All plots saved to: {PLOTS_DIR}/")
    print(f"{'='*70}")


if __name__ == "__main__":
    main()
