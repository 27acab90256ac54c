"""
Word tokenizer shared by the dictionary loader and the map stage.

Only space, tab, newline, carriage return and form feed separate words.
Other whitespace such as NBSP or vertical tab stays inside the token.
"""

import re
from typing import List

SEPARATORS = re.compile(r'[ \t\n\r\f]+')


def tokenize(text: str) -> List[str]:
    """Split text on separator runs, dropping empty tokens"""
    return [token for token in SEPARATORS.split(text) if token]
