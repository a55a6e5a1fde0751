"""Batch processing strategies for reservation exports.

Strategy pattern implementation for different group execution approaches.
"""

from reszip.core.batch.strategies.async_strategy import AsyncBatchStrategy
from reszip.core.batch.strategies.base import BatchStrategy, FetchFn
from reszip.core.batch.strategies.sequential_strategy import SequentialBatchStrategy

__all__ = [
    "BatchStrategy",
    "FetchFn",
    "AsyncBatchStrategy",
    "SequentialBatchStrategy",
]
