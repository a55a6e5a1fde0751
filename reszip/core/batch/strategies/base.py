"""Base batch processing strategy for reservation exports.

Defines the strategy interface for running one group of fetches.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, List

from reszip.core.batch.models import FetchFailure, FetchOutcome, FetchSuccess, ReservationRef

FetchFn = Callable[[ReservationRef], Awaitable[bytes]]


class BatchStrategy(ABC):
    """Abstract base class for batch processing strategies.

    Different strategies implement different execution approaches:
    - AsyncBatchStrategy: Uses asyncio.gather() for concurrent execution
    - SequentialBatchStrategy: Processes refs one by one (fallback)
    """

    mode: str = "abstract"

    @abstractmethod
    async def execute(
        self,
        batch_id: str,
        group_index: int,
        refs: List[ReservationRef],
        fetch: FetchFn,
    ) -> List[FetchOutcome]:
        """Fetch every ref of one group.

        Args:
            batch_id: Unique batch identifier
            group_index: 1-based index of the group within the batch
            refs: Reservations in this group
            fetch: Coroutine function returning PDF bytes for a ref

        Returns:
            One outcome per ref, in the order of ``refs``
        """
        pass

    @staticmethod
    def success(ref: ReservationRef, content: bytes) -> FetchSuccess:
        return FetchSuccess.for_ref(ref, content)

    @staticmethod
    def failure(ref: ReservationRef, error: Exception) -> FetchFailure:
        return FetchFailure(ref=ref, reason=str(error) or type(error).__name__)
