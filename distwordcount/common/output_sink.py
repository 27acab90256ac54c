"""
Output sinks for final (word, total) pairs.
"""

import os
import logging
from typing import Dict, Iterable, List, Tuple

logger = logging.getLogger(__name__)

OUTPUT_FILE = "part-00000"


class TextOutputSink:
    """Writes ``word<TAB>total`` lines to a part file in the output directory"""

    def __init__(self, output_dir: str):
        self.output_dir = output_dir
        self.output_file = os.path.join(output_dir, OUTPUT_FILE)

    def write(self, pairs: Iterable[Tuple[str, int]]) -> str:
        """
        Write final output

        Args:
            pairs: (word, total) tuples; written sorted by word

        Returns:
            Path of the written file
        """
        os.makedirs(self.output_dir, exist_ok=True)
        tmp_file = self.output_file + ".tmp"
        with open(tmp_file, 'w', encoding='utf-8') as f:
            for word, total in sorted(pairs):
                f.write(f"{word}\t{total}\n")
        # Readers never see a half-written file
        os.replace(tmp_file, self.output_file)
        logger.info(f"Wrote output to {self.output_file}")
        return self.output_file


class MemorySink:
    """Keeps the final pairs in memory"""

    def __init__(self):
        self.pairs: List[Tuple[str, int]] = []

    def write(self, pairs: Iterable[Tuple[str, int]]):
        self.pairs = list(pairs)

    def as_dict(self) -> Dict[str, int]:
        return dict(self.pairs)


def read_output(output_dir: str) -> Dict[str, int]:
    """
    Read the totals written by TextOutputSink

    Raises:
        FileNotFoundError: If the directory holds no output file
    """
    totals = {}
    with open(os.path.join(output_dir, OUTPUT_FILE), 'r', encoding='utf-8') as f:
        for line in f:
            line = line.rstrip('\n')
            if not line:
                continue
            word, total = line.rsplit('\t', 1)
            totals[word] = int(total)
    return totals
