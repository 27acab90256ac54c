"""
Unit tests for the word tokenizer
"""

from distwordcount.worker.tokenizer import tokenize


class TestTokenize:

    def test_splits_on_separator_runs(self):
        assert tokenize("  the\t\tcat \r\n dog\f") == ["the", "cat", "dog"]

    def test_empty_and_blank_text(self):
        assert tokenize("") == []
        assert tokenize(" \n\t\r\f ") == []

    def test_unicode_whitespace_is_not_a_separator(self):
        assert tokenize("cat\u00a0cat\u3000cat") == ["cat\u00a0cat\u3000cat"]
        assert tokenize("a\x0bb\u2028c d") == ["a\x0bb\u2028c", "d"]
