"""
Line-aligned input splits.

A split is a byte range of an input file. Splits are cut on newline
boundaries so no record straddles two partitions, and they are plain data
so they can be shipped to a worker process.
"""

import os
import logging
from dataclasses import dataclass
from typing import Iterator, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InputSplit:
    """Represents one partition of an input file"""
    partition_id: int
    path: str
    start_offset: int
    end_offset: int

    @property
    def length(self) -> int:
        return self.end_offset - self.start_offset

    def __str__(self):
        return self.path

    def __iter__(self) -> Iterator[bytes]:
        """Yield the raw lines of this split without their line terminators"""
        with open(self.path, 'rb') as f:
            f.seek(self.start_offset)
            while f.tell() < self.end_offset:
                line = f.readline()
                if not line:
                    break
                yield line.rstrip(b'\r\n')


def split_input_file(file_path: str, num_splits: int, first_partition_id: int = 0) -> List[InputSplit]:
    """
    Split an input file into line-aligned chunks

    Args:
        file_path: Path to input file
        num_splits: Number of splits wanted
        first_partition_id: Partition id given to the first split

    Returns:
        List of InputSplit covering the whole file in order. Trailing splits
        may be empty when the file has fewer lines than splits.

    Raises:
        OSError: If the file cannot be opened
    """
    if num_splits < 1:
        raise ValueError("num_splits must be >= 1")

    file_size = os.path.getsize(file_path)
    split_size = (file_size + num_splits - 1) // num_splits

    splits = []
    current_pos = 0
    with open(file_path, 'rb') as f:
        for i in range(num_splits):
            start_pos = current_pos
            if i == num_splits - 1:
                end_pos = file_size
            else:
                # Move the cut forward to the next newline
                target_pos = min(start_pos + split_size, file_size)
                if target_pos > 0 and target_pos < file_size:
                    f.seek(target_pos - 1)
                    f.readline()
                    end_pos = f.tell()
                else:
                    end_pos = target_pos
            splits.append(InputSplit(first_partition_id + i, file_path, start_pos, end_pos))
            current_pos = end_pos

    logger.debug(f"Split {file_path} ({file_size} bytes) into {len(splits)} splits")
    return splits


def split_input_files(paths: List[str], num_splits: int) -> List[InputSplit]:
    """
    Split several input files, numbering partitions across all of them

    Each file is cut into ``num_splits`` pieces.
    """
    splits: List[InputSplit] = []
    for path in paths:
        splits.extend(split_input_file(path, num_splits, first_partition_id=len(splits)))
    return splits
