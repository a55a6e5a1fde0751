"""Batch processor for reservation exports.

Main orchestrator: splits reservations into bounded groups, runs each group
through the selected strategy, and paces groups to spare the booking system.
"""

import asyncio
import secrets
import time
from typing import Awaitable, Callable, List, Optional, Sequence

from reszip.core.batch.models import BatchResult, FetchOutcome, ReservationRef
from reszip.core.batch.strategies import (
    AsyncBatchStrategy,
    BatchStrategy,
    FetchFn,
    SequentialBatchStrategy,
)
from reszip.core.logging import logger

Sleep = Callable[[float], Awaitable[None]]


def partition(refs: Sequence[ReservationRef], size: int) -> List[List[ReservationRef]]:
    """Split refs into consecutive groups of at most ``size``."""
    if size < 1:
        raise ValueError("batch size must be at least 1")
    return [list(refs[i:i + size]) for i in range(0, len(refs), size)]


class BatchProcessor:
    """Orchestrates batch document retrieval.

    Uses Strategy pattern to run each group; groups run strictly one after
    another with ``inter_batch_delay`` seconds between them.
    """

    def __init__(
        self,
        fetch: FetchFn,
        batch_size: int = 20,
        inter_batch_delay: float = 0.2,
        mode: str = "async",
        sleep: Optional[Sleep] = None,
    ):
        """Initialize batch processor.

        Args:
            fetch: Coroutine function returning PDF bytes for a ref
                (usually ``DocumentFetcher.fetch_document``)
            batch_size: Max concurrent fetches per group
            inter_batch_delay: Seconds to wait between groups
            mode: Strategy name ('async' or 'sequential')
            sleep: Awaitable sleep, injectable for tests
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")

        self.fetch = fetch
        self.batch_size = batch_size
        self.inter_batch_delay = inter_batch_delay
        self.sleep = sleep or asyncio.sleep

        # Register available strategies
        self.strategies = {
            "async": AsyncBatchStrategy(),
            "sequential": SequentialBatchStrategy(),
        }
        if mode not in self.strategies:
            raise ValueError(f"Unknown batch mode '{mode}'")
        self.mode = mode

    @property
    def strategy(self) -> BatchStrategy:
        return self.strategies[self.mode]

    async def run(
        self,
        refs: Sequence[ReservationRef],
        batch_id: Optional[str] = None,
    ) -> BatchResult:
        """Fetch every reservation and collect one outcome per ref.

        Never raises for individual failures; they come back as FetchFailure.

        Args:
            refs: Reservations in request order
            batch_id: Optional batch ID (generated if not provided)

        Returns:
            BatchResult with all outcomes in input order
        """
        if batch_id is None:
            batch_id = f"batch_{int(time.time() * 1000)}_{secrets.token_urlsafe(8)}"

        start_time = time.time()
        groups = partition(refs, self.batch_size)

        logger.info(
            "batch_started",
            batch_id=batch_id,
            total=len(refs),
            groups=len(groups),
            batch_size=self.batch_size,
            strategy=type(self.strategy).__name__,
        )

        outcomes: List[FetchOutcome] = []
        for index, group in enumerate(groups, start=1):
            logger.info(
                "batch_group_started",
                batch_id=batch_id,
                group=index,
                size=len(group),
                processed=len(outcomes),
                total=len(refs),
            )

            outcomes.extend(await self.strategy.execute(batch_id, index, group, self.fetch))

            if index < len(groups):
                await self.sleep(self.inter_batch_delay)

        result = BatchResult.create(
            batch_id=batch_id,
            outcomes=outcomes,
            groups=len(groups),
            started_at=start_time,
        )

        logger.info(
            "batch_completed",
            batch_id=batch_id,
            status=result.status,
            successful=result.successful,
            failed=result.failed,
            total=result.total,
            processing_time=result.processing_time_seconds,
        )
        return result
