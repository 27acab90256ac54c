"""
Pytest configuration and shared fixtures
"""

import pytest
import os
import tempfile
import shutil

from distwordcount.common.config import JobConfig


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files"""
    dirpath = tempfile.mkdtemp()
    yield dirpath
    shutil.rmtree(dirpath)


@pytest.fixture
def sample_text():
    """Sample text for testing"""
    return """The quick brown fox jumps over the lazy dog.
The dog was really lazy.
The fox was very quick and brown.
Quick brown foxes are amazing animals.
Lazy dogs sleep all day."""


@pytest.fixture
def sample_input_file(temp_dir, sample_text):
    """Create a sample input file for testing"""
    filepath = os.path.join(temp_dir, 'input.txt')
    with open(filepath, 'w') as f:
        f.write(sample_text)
    return filepath


@pytest.fixture
def patterns_file(temp_dir):
    """Dictionary file spread over several lines"""
    filepath = os.path.join(temp_dir, 'patterns.txt')
    with open(filepath, 'w') as f:
        f.write("the fox\n  dog\tlazy\n\nquick\n")
    return filepath


@pytest.fixture
def dictionary():
    return frozenset({"the", "fox", "dog", "lazy", "quick"})


@pytest.fixture
def job_config():
    """Thread-based config with a fixed job id"""
    return JobConfig(num_partitions=2, max_workers=2, job_id='test-job')
