"""Sequential batch processing strategy for reservation exports.

Fetches one reservation at a time. Useful when the booking system is struggling.
"""

from typing import List

from reszip.core.batch.models import FetchOutcome, ReservationRef
from reszip.core.batch.strategies.base import BatchStrategy, FetchFn
from reszip.core.logging import logger


class SequentialBatchStrategy(BatchStrategy):
    """Sequential batch processing strategy."""

    mode = "sequential"

    async def execute(
        self,
        batch_id: str,
        group_index: int,
        refs: List[ReservationRef],
        fetch: FetchFn,
    ) -> List[FetchOutcome]:
        outcomes: List[FetchOutcome] = []

        for ref in refs:
            try:
                content = await fetch(ref)
                outcomes.append(self.success(ref, content))
            except Exception as e:
                logger.warning(
                    "reservation_failed",
                    batch_id=batch_id,
                    group=group_index,
                    hotel_code=ref.hotel_code,
                    reservation_id=ref.reservation_id,
                    error=str(e),
                )
                outcomes.append(self.failure(ref, e))

        return outcomes
