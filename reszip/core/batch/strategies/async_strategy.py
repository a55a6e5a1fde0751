"""Async batch processing strategy for reservation exports.

Uses asyncio.gather() for concurrent execution of one group.
"""

import asyncio
from typing import List

from reszip.core.batch.models import FetchOutcome, ReservationRef
from reszip.core.batch.strategies.base import BatchStrategy, FetchFn
from reszip.core.logging import logger


class AsyncBatchStrategy(BatchStrategy):
    """Async concurrent batch processing strategy.

    Every ref in the group is fetched at once; the processor's group size
    is the concurrency ceiling.
    """

    mode = "async"

    async def execute(
        self,
        batch_id: str,
        group_index: int,
        refs: List[ReservationRef],
        fetch: FetchFn,
    ) -> List[FetchOutcome]:
        async def process_single_ref(ref: ReservationRef) -> FetchOutcome:
            try:
                content = await fetch(ref)
                return self.success(ref, content)
            except Exception as e:
                logger.warning(
                    "reservation_failed",
                    batch_id=batch_id,
                    group=group_index,
                    hotel_code=ref.hotel_code,
                    reservation_id=ref.reservation_id,
                    error=str(e),
                )
                return self.failure(ref, e)

        # gather keeps input order, so each outcome stays with its ref
        return list(await asyncio.gather(*[process_single_ref(ref) for ref in refs]))
