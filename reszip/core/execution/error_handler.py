"""Error handler for document fetching.

Retry loop with exponential backoff, written as an explicit state machine
over AttemptResult values.
"""

import asyncio
from typing import Awaitable, Callable, Dict, Optional

from reszip.core.execution.attempt import AttemptResult, AttemptStatus
from reszip.core.execution.error_classifier import ErrorClassifier
from reszip.core.logging import logger
from reszip.core.retry_config import RetryConfig

Sleep = Callable[[float], Awaitable[None]]
AttemptFn = Callable[[int], Awaitable[AttemptResult]]


class ErrorHandler:
    """Drives an attempt function until it succeeds, fails fatally, or runs out of attempts.

    States: attempting -> success | retryable | exhausted. A retryable result
    moves back to attempting once the backoff sleep completes.
    """

    def __init__(self, config: RetryConfig, sleep: Optional[Sleep] = None):
        """Initialize ErrorHandler with retry configuration.

        Args:
            config: RetryConfig with retry behavior settings
            sleep: Awaitable sleep, injectable for tests (defaults to asyncio.sleep)
        """
        self.config = config
        self.sleep = sleep or asyncio.sleep

    def result_for_exception(self, attempt: int, error: Exception) -> AttemptResult:
        """Turn an exception raised inside an attempt into an AttemptResult."""
        category = ErrorClassifier.categorize(error)
        return AttemptResult.failure(
            attempt=attempt,
            error=str(error) or type(error).__name__,
            category=category,
            retryable=category in self.config.retry_on,
            http_status=getattr(error, "status_code", None),
        )

    async def execute_with_retry(
        self, attempt_fn: AttemptFn, context: Optional[Dict[str, str]] = None
    ) -> AttemptResult:
        """Run ``attempt_fn`` with automatic retry on retryable failures.

        Args:
            attempt_fn: Coroutine function taking the 1-based attempt number
            context: Extra fields for log events (e.g. hotel_code, reservation_id)

        Returns:
            The last AttemptResult (SUCCESS, FATAL, or the final RETRYABLE one)
        """
        context = context or {}
        result: Optional[AttemptResult] = None

        for attempt in range(1, self.config.max_attempts + 1):
            if attempt > 1:
                delay = self.config.backoff_for(attempt)
                logger.info(
                    "fetch_retry_scheduled",
                    attempt=attempt,
                    max_attempts=self.config.max_attempts,
                    delay_seconds=delay,
                    **context,
                )
                await self.sleep(delay)

            try:
                result = await attempt_fn(attempt)
            except Exception as e:
                result = self.result_for_exception(attempt, e)

            if result.status is AttemptStatus.SUCCESS:
                return result

            logger.warning(
                "fetch_attempt_failed",
                attempt=attempt,
                max_attempts=self.config.max_attempts,
                error=result.error,
                category=result.category.value if result.category else None,
                http_status=result.http_status,
                **context,
            )

            if result.status is AttemptStatus.FATAL:
                return result

        return result
