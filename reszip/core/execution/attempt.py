"""Per-attempt result type for the retry state machine."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from reszip.core.retry_config import ErrorCategory


class AttemptStatus(str, Enum):
    """Where an attempt leaves the retry loop.

    - SUCCESS: done, content is set
    - RETRYABLE: back off and try again if attempts remain
    - FATAL: stop now, no retry can help
    """

    SUCCESS = "success"
    RETRYABLE = "retryable"
    FATAL = "fatal"


@dataclass(frozen=True)
class AttemptResult:
    """Outcome of a single fetch attempt."""

    status: AttemptStatus
    attempt: int
    content: Optional[bytes] = None
    error: Optional[str] = None
    category: Optional[ErrorCategory] = None
    http_status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status is AttemptStatus.SUCCESS

    @classmethod
    def success(cls, attempt: int, content: bytes, http_status: Optional[int] = None) -> "AttemptResult":
        return cls(status=AttemptStatus.SUCCESS, attempt=attempt, content=content, http_status=http_status)

    @classmethod
    def failure(
        cls,
        attempt: int,
        error: str,
        category: ErrorCategory,
        retryable: bool,
        http_status: Optional[int] = None,
    ) -> "AttemptResult":
        return cls(
            status=AttemptStatus.RETRYABLE if retryable else AttemptStatus.FATAL,
            attempt=attempt,
            error=error,
            category=category,
            http_status=http_status,
        )
