#!/usr/bin/env python3
"""
Word Count Client CLI
Provides commands for running a word count job and reading its results
"""

import argparse
import logging
import os
import sys

from distwordcount.client.monitoring import (
    ConsoleStatusReporter, print_job_status, print_job_summary,
)
from distwordcount.common.config import JobConfig, parse_properties
from distwordcount.common.errors import ConfigError, WordCountError
from distwordcount.common.input_split import split_input_files
from distwordcount.common.log import configure_logging
from distwordcount.common.output_sink import TextOutputSink, read_output
from distwordcount.coordinator.job_manager import WordCountJob


def build_config(args) -> JobConfig:
    """Resolve job options from environment, -D properties and flags"""
    config = JobConfig.from_env(job_id=args.job_id)
    config = config.with_properties(parse_properties(args.property))
    return config.replace(
        num_partitions=args.num_partitions,
        max_workers=args.max_workers,
        executor=args.executor,
        case_sensitive=False if args.ignore_case else None,
        use_combiner=False if args.no_combiner else None,
    )


def run_job(args):
    """Run a word count job over the input files"""
    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for path in args.input:
        if not os.path.exists(path):
            print(f"Error: Input file {path} not found", file=sys.stderr)
            return 1

    reporter = ConsoleStatusReporter() if args.verbose else None
    job = WordCountJob(config, status_callback=reporter)

    try:
        splits = split_input_files(args.input, config.num_partitions)
        result = job.run(args.patterns, splits, sink=TextOutputSink(args.output))
    except WordCountError as e:
        print(f"Error: {e}", file=sys.stderr)
        print_job_status(job.get_status(), stream=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    print_job_summary(result)
    if args.metrics_file:
        result.metrics.save_to_file(args.metrics_file)
        print(f"  Metrics: {args.metrics_file}")
    return 0


def get_results(args):
    """Print the totals of a finished job"""
    try:
        totals = read_output(args.output)
    except FileNotFoundError:
        print(f"Error: No results found in {args.output}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: Malformed output in {args.output}: {e}", file=sys.stderr)
        return 1

    ranked = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0]))
    if args.top:
        ranked = ranked[:args.top]
    for word, total in ranked:
        print(f"{word}\t{total}")
    return 0


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        prog='distwordcount',
        description='Count dictionary words across a text corpus in parallel',
        epilog='Example: %(prog)s run --input corpus.txt --patterns patterns.txt --output out/'
    )
    parser.add_argument('--log-level', default='INFO', help='Logging level (default: INFO)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # run command
    run_parser = subparsers.add_parser(
        'run',
        help='Run a word count job',
        description='Count occurrences of the dictionary words in the input files'
    )
    run_parser.add_argument('--input', required=True, nargs='+', help='Input text file(s)')
    run_parser.add_argument('--output', required=True, help='Output directory')
    run_parser.add_argument('--patterns', required=True, action='append',
                            help='Dictionary file of whitespace-separated words (repeatable)')
    run_parser.add_argument('--num-partitions', type=int, help='Partitions per input file (default: 4)')
    run_parser.add_argument('--max-workers', type=int, help='Parallel map workers (default: 4)')
    run_parser.add_argument('--executor', choices=['thread', 'process'],
                            help='Run map tasks in threads or processes (default: thread)')
    run_parser.add_argument('--ignore-case', action='store_true',
                            help='Lowercase input text before matching')
    run_parser.add_argument('--no-combiner', action='store_true',
                            help='Disable partition-local aggregation')
    run_parser.add_argument('-D', dest='property', action='append', metavar='KEY=VALUE',
                            help='Job property, e.g. -D wordcount.case.sensitive=false')
    run_parser.add_argument('--job-id', help='Custom job ID (auto-generated if not provided)')
    run_parser.add_argument('--metrics-file', help='Write job metrics as JSON to this file')
    run_parser.add_argument('-v', '--verbose', action='store_true',
                            help='Print map task status messages')
    run_parser.set_defaults(func=run_job)

    # get-results command
    results_parser = subparsers.add_parser(
        'get-results',
        help='Get job results',
        description='Print the word totals written by a finished job'
    )
    results_parser.add_argument('output', help='Output directory of the job')
    results_parser.add_argument('--top', type=int, help='Only show the K most frequent words')
    results_parser.set_defaults(func=get_results)

    args = parser.parse_args(argv)

    # If no command specified, print help
    if not hasattr(args, 'func'):
        parser.print_help()
        return 1

    configure_logging(getattr(logging, args.log_level.upper(), logging.INFO))
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
