"""Batch processing module for reservation exports.

Components:
- BatchProcessor: Splits refs into groups and paces them
- BatchResult: Outcomes of one run
- BatchStrategy: Strategy interface for one group
- AsyncBatchStrategy: Concurrent group execution
- SequentialBatchStrategy: One-at-a-time fallback
"""

from reszip.core.batch.models import (
    BatchResult,
    FetchFailure,
    FetchOutcome,
    FetchSuccess,
    ReservationRef,
)
from reszip.core.batch.processor import BatchProcessor, partition
from reszip.core.batch.strategies import (
    AsyncBatchStrategy,
    BatchStrategy,
    SequentialBatchStrategy,
)

__all__ = [
    "BatchProcessor",
    "BatchResult",
    "FetchFailure",
    "FetchOutcome",
    "FetchSuccess",
    "ReservationRef",
    "partition",
    "BatchStrategy",
    "AsyncBatchStrategy",
    "SequentialBatchStrategy",
]
