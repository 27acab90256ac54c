"""
End-to-end tests for the command line client
Runs jobs over files on disk and reads the results back
"""

import json
import os

import pytest

from distwordcount.client.client import main
from distwordcount.common.output_sink import OUTPUT_FILE, read_output


@pytest.fixture
def corpus(temp_dir):
    path = os.path.join(temp_dir, 'corpus.txt')
    with open(path, 'w') as f:
        for _ in range(30):
            f.write("The cat chased the dog\n")
            f.write("the DOG ignored the cat\n")
    return path


@pytest.fixture
def patterns(temp_dir):
    path = os.path.join(temp_dir, 'patterns.txt')
    with open(path, 'w') as f:
        f.write("the cat\ndog\n")
    return path


@pytest.mark.integration
class TestRunCommand:

    def test_run_writes_totals(self, temp_dir, corpus, patterns, capsys):
        output_dir = os.path.join(temp_dir, 'out')
        exit_code = main(['run', '--input', corpus, '--patterns', patterns,
                          '--output', output_dir, '--num-partitions', '3'])

        assert exit_code == 0
        assert read_output(output_dir) == {"the": 90, "cat": 60, "dog": 30}
        assert "completed" in capsys.readouterr().out

    def test_output_file_sorted_by_word(self, temp_dir, corpus, patterns):
        output_dir = os.path.join(temp_dir, 'out')
        main(['run', '--input', corpus, '--patterns', patterns, '--output', output_dir])

        with open(os.path.join(output_dir, OUTPUT_FILE)) as f:
            lines = f.read().splitlines()
        assert lines == ["cat\t60", "dog\t30", "the\t90"]

    def test_ignore_case(self, temp_dir, corpus, patterns):
        output_dir = os.path.join(temp_dir, 'out')
        exit_code = main(['run', '--input', corpus, '--patterns', patterns,
                          '--output', output_dir, '--ignore-case'])

        assert exit_code == 0
        assert read_output(output_dir) == {"the": 120, "cat": 60, "dog": 60}

    def test_case_property(self, temp_dir, corpus, patterns):
        output_dir = os.path.join(temp_dir, 'out')
        exit_code = main(['run', '--input', corpus, '--patterns', patterns,
                          '--output', output_dir, '-D', 'wordcount.case.sensitive=false'])

        assert exit_code == 0
        assert read_output(output_dir)["the"] == 120

    def test_process_executor_without_combiner(self, temp_dir, corpus, patterns):
        output_dir = os.path.join(temp_dir, 'out')
        exit_code = main(['run', '--input', corpus, '--patterns', patterns,
                          '--output', output_dir, '--executor', 'process',
                          '--no-combiner', '--num-partitions', '2'])

        assert exit_code == 0
        assert read_output(output_dir) == {"the": 90, "cat": 60, "dog": 30}

    def test_several_inputs_and_pattern_files(self, temp_dir, corpus, patterns):
        second = os.path.join(temp_dir, 'second.txt')
        with open(second, 'w') as f:
            f.write("bird cat\n")
        extra = os.path.join(temp_dir, 'extra.txt')
        with open(extra, 'w') as f:
            f.write("bird")

        output_dir = os.path.join(temp_dir, 'out')
        exit_code = main(['run', '--input', corpus, second, '--patterns', patterns,
                          '--patterns', extra, '--output', output_dir])

        assert exit_code == 0
        assert read_output(output_dir) == {"the": 90, "cat": 61, "dog": 30, "bird": 1}

    def test_metrics_file(self, temp_dir, corpus, patterns):
        output_dir = os.path.join(temp_dir, 'out')
        metrics_file = os.path.join(temp_dir, 'metrics.json')
        main(['run', '--input', corpus, '--patterns', patterns, '--output', output_dir,
              '--job-id', 'e2e-job', '--metrics-file', metrics_file])

        with open(metrics_file) as f:
            data = json.load(f)
        assert data['job_id'] == 'e2e-job'
        assert data['records_processed'] == 60
        assert data['distinct_words'] == 3

    def test_verbose_prints_status(self, temp_dir, corpus, patterns, capsys):
        output_dir = os.path.join(temp_dir, 'out')
        main(['run', '--input', corpus, '--patterns', patterns, '--output', output_dir,
              '--num-partitions', '1', '-D', 'wordcount.status.interval=10', '-v'])

        assert "Finished processing 10 records" in capsys.readouterr().err

    def test_missing_input(self, temp_dir, patterns, capsys):
        exit_code = main(['run', '--input', os.path.join(temp_dir, 'nope.txt'),
                          '--patterns', patterns, '--output', temp_dir])
        assert exit_code == 1
        assert "not found" in capsys.readouterr().err

    def test_missing_patterns_fails_job(self, temp_dir, corpus, capsys):
        output_dir = os.path.join(temp_dir, 'out')
        exit_code = main(['run', '--input', corpus, '--patterns',
                          os.path.join(temp_dir, 'nope.txt'), '--output', output_dir])

        assert exit_code == 1
        assert "Status: FAILED" in capsys.readouterr().err
        assert not os.path.exists(os.path.join(output_dir, OUTPUT_FILE))

    def test_bad_property(self, temp_dir, corpus, patterns, capsys):
        exit_code = main(['run', '--input', corpus, '--patterns', patterns,
                          '--output', temp_dir, '-D', 'wordcount.num.partitions=zero'])
        assert exit_code == 1
        assert "Error" in capsys.readouterr().err


@pytest.mark.integration
class TestGetResultsCommand:

    def test_prints_most_frequent_first(self, temp_dir, corpus, patterns, capsys):
        output_dir = os.path.join(temp_dir, 'out')
        main(['run', '--input', corpus, '--patterns', patterns, '--output', output_dir])
        capsys.readouterr()

        exit_code = main(['get-results', output_dir, '--top', '2'])

        assert exit_code == 0
        assert capsys.readouterr().out.splitlines() == ["the\t90", "cat\t60"]

    def test_missing_results(self, temp_dir, capsys):
        exit_code = main(['get-results', os.path.join(temp_dir, 'missing')])
        assert exit_code == 1
        assert "No results found" in capsys.readouterr().err

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out
