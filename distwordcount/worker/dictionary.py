#!/usr/bin/env python3
"""
Dictionary Loader
Parses whitespace-separated pattern files into the set of words to count
"""

import os
import logging
from typing import FrozenSet, Iterable, List

from distwordcount.common.errors import LoadError
from distwordcount.worker.tokenizer import tokenize

logger = logging.getLogger(__name__)


def parse_dictionary(text: str) -> FrozenSet[str]:
    """
    Split a pattern blob into words

    Runs of space, tab, newline, carriage return or form feed separate
    words and empty tokens are dropped.
    Case is kept as written.
    """
    return frozenset(tokenize(text))


def _read_source(source) -> str:
    if isinstance(source, bytes):
        return source.decode('utf-8')
    if isinstance(source, (str, os.PathLike)):
        with open(source, 'r', encoding='utf-8') as f:
            return f.read()
    if hasattr(source, 'read'):
        data = source.read()
        return data.decode('utf-8') if isinstance(data, bytes) else data
    raise TypeError(f"Unsupported dictionary source type: {type(source).__name__}")


def load_dictionary(*sources) -> FrozenSet[str]:
    """
    Load the words to count from one or more pattern sources

    Args:
        sources: File paths, byte blobs or open file objects. Words from
            all sources are merged into one set.

    Returns:
        Immutable set of dictionary words

    Raises:
        LoadError: If any source cannot be read or decoded
    """
    words = set()
    for source in sources:
        try:
            text = _read_source(source)
        except (OSError, UnicodeDecodeError, TypeError) as e:
            raise LoadError(source, str(e)) from e
        parsed = parse_dictionary(text)
        logger.info(f"Loaded {len(parsed)} words from {_describe(source)}")
        words.update(parsed)
    return frozenset(words)


def unmatchable_words(dictionary: Iterable[str], case_sensitive: bool) -> List[str]:
    """
    List dictionary words that can never match under the given case rule

    With case-insensitive matching only the record text is lowercased, so a
    dictionary word containing uppercase letters is never found.
    """
    if case_sensitive:
        return []
    return sorted(word for word in dictionary if word != word.lower())


def _describe(source) -> str:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    if isinstance(source, bytes):
        return f"<{len(source)} byte blob>"
    return getattr(source, 'name', repr(source))
