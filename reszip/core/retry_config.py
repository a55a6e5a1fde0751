"""Retry configuration for document fetching.

Immutable configuration for error retry behavior.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class ErrorCategory(str, Enum):
    """Error categories for classification and retry decisions.

    - TRANSIENT: Temporary errors (timeouts, bad status, HTML instead of PDF, login hiccups)
    - PERMANENT: Errors no retry can fix (malformed URL, unsupported scheme)
    - UNKNOWN: Anything else
    """

    TRANSIENT = "transient"
    PERMANENT = "permanent"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    Backoff before attempt N (N > 1) is
    ``min(initial_delay * backoff_factor ** (N - 1), max_delay)``.
    """

    max_attempts: int = 3
    initial_delay: float = 1.0  # seconds
    backoff_factor: float = 2.0  # exponential backoff multiplier
    max_delay: float = 5.0  # cap at 5 seconds
    retry_on: List[ErrorCategory] = field(
        default_factory=lambda: [ErrorCategory.TRANSIENT, ErrorCategory.UNKNOWN]
    )

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    def backoff_for(self, attempt: int) -> float:
        """Seconds to wait before the given 1-based attempt."""
        if attempt <= 1:
            return 0.0
        return min(self.initial_delay * (self.backoff_factor ** (attempt - 1)), self.max_delay)
