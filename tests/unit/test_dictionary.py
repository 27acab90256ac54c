"""
Unit tests for the dictionary loader
"""

import io
import os

import pytest

from distwordcount.common.errors import LoadError
from distwordcount.worker.dictionary import (
    load_dictionary, parse_dictionary, unmatchable_words,
)


class TestParseDictionary:
    """Tests for splitting pattern text"""

    def test_splits_on_any_whitespace(self):
        words = parse_dictionary("cat  dog\tbird\n\nfish\r\n")
        assert words == {"cat", "dog", "bird", "fish"}

    def test_keeps_case(self):
        words = parse_dictionary("The the THE")
        assert words == {"The", "the", "THE"}

    def test_empty_blob_gives_empty_set(self):
        assert parse_dictionary("") == frozenset()
        assert parse_dictionary(" \n\t ") == frozenset()

    def test_carriage_return_and_form_feed_separate_words(self):
        assert parse_dictionary("cat\rdog\fbird") == {"cat", "dog", "bird"}

    def test_other_whitespace_stays_inside_words(self):
        assert parse_dictionary("cat\u00a0dog") == {"cat\u00a0dog"}
        assert parse_dictionary("cat\x0bdog bird") == {"cat\x0bdog", "bird"}

    def test_result_is_immutable(self):
        words = parse_dictionary("cat")
        assert isinstance(words, frozenset)


class TestLoadDictionary:
    """Tests for loading from files, blobs and streams"""

    def test_loads_from_path(self, patterns_file):
        assert load_dictionary(patterns_file) == {"the", "fox", "dog", "lazy", "quick"}

    def test_loads_from_bytes(self):
        assert load_dictionary(b"alpha beta\ngamma") == {"alpha", "beta", "gamma"}

    def test_loads_from_file_object(self):
        assert load_dictionary(io.StringIO("one two")) == {"one", "two"}
        assert load_dictionary(io.BytesIO(b"three")) == {"three"}

    def test_unions_several_sources(self, patterns_file):
        words = load_dictionary(patterns_file, b"cat dog")
        assert "cat" in words
        assert "fox" in words

    def test_missing_file_raises_load_error(self, temp_dir):
        missing = os.path.join(temp_dir, 'missing.txt')
        with pytest.raises(LoadError) as excinfo:
            load_dictionary(missing)
        assert excinfo.value.source == missing
        assert isinstance(excinfo.value.__cause__, OSError)

    def test_undecodable_blob_raises_load_error(self):
        with pytest.raises(LoadError):
            load_dictionary(b"\xff\xfe\xfa")

    def test_unsupported_source_raises_load_error(self):
        with pytest.raises(LoadError):
            load_dictionary(42)


class TestUnmatchableWords:
    """Tests for reporting entries that case-insensitive matching can never find"""

    def test_none_when_case_sensitive(self):
        assert unmatchable_words({"The", "cat"}, case_sensitive=True) == []

    def test_lists_uppercase_entries_when_case_insensitive(self):
        words = unmatchable_words({"The", "cat", "NASA"}, case_sensitive=False)
        assert words == ["NASA", "The"]
