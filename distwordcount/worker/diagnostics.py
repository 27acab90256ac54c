"""
Diagnostic counters and status reporting for map tasks.

Nothing here feeds back into the counts; it is a side channel for progress.
"""

import logging
import threading
from enum import Enum
from typing import Callable, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

# Receives (partition_id, message)
StatusCallback = Callable[[int, str], None]


class Counter(Enum):
    """Diagnostic counters kept per partition and per job"""
    INPUT_WORDS = "input_words"
    RECORDS_PROCESSED = "records_processed"
    RECORDS_SKIPPED = "records_skipped"


class Counters:
    """Thread-safe monotonic counters"""

    def __init__(self):
        self._values: Dict[Counter, int] = {c: 0 for c in Counter}
        self._lock = threading.Lock()

    def incr(self, counter: Counter, amount: int = 1):
        if amount < 0:
            raise ValueError("Counters only increase")
        with self._lock:
            self._values[counter] += amount

    def get(self, counter: Counter) -> int:
        with self._lock:
            return self._values[counter]

    def merge(self, values: Mapping[str, int]):
        """Add a snapshot taken from another Counters instance"""
        with self._lock:
            for counter in Counter:
                self._values[counter] += values.get(counter.value, 0)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {c.value: v for c, v in self._values.items()}


def log_status(partition_id: int, message: str):
    """Default status sink: write the message to the log"""
    logger.info(f"Partition {partition_id}: {message}")


def status_message(num_records: int, source: Optional[str]) -> str:
    return f"Finished processing {num_records} records from the input file: {source}"
