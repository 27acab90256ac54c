"""
Exception types raised by the word count pipeline.

Exceptions keep their constructor arguments in ``args`` so they survive the
trip back from a worker process.
"""

from typing import Optional


class WordCountError(Exception):
    """Base class for all pipeline errors"""


class ConfigError(WordCountError):
    """Invalid job configuration value"""


class LoadError(WordCountError):
    """Dictionary blob could not be read; fatal before mapping starts"""

    def __init__(self, source, reason: str):
        super().__init__(source, reason)
        self.source = source
        self.reason = reason

    def __str__(self):
        return f"Failed to load dictionary from {self.source!r}: {self.reason}"


class RecordDecodeError(WordCountError):
    """A single record could not be decoded as text; the record is skipped"""

    def __init__(self, partition_id: int, record_number: int, reason: str):
        super().__init__(partition_id, record_number, reason)
        self.partition_id = partition_id
        self.record_number = record_number
        self.reason = reason

    def __str__(self):
        return (f"Partition {self.partition_id}: record {self.record_number} "
                f"is not valid text: {self.reason}")


class PartitionFailure(WordCountError):
    """Map+combine of one partition failed; the whole job is aborted"""

    def __init__(self, partition_id: Optional[int], reason: str):
        super().__init__(partition_id, reason)
        self.partition_id = partition_id
        self.reason = reason

    def __str__(self):
        return f"Partition {self.partition_id} failed: {self.reason}"


class AggregationFailure(WordCountError):
    """Global aggregation could not merge the partial sums"""
