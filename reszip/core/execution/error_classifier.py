"""Error classifier for document fetching.

Classifies errors into categories for intelligent retry decisions.
"""

import asyncio

import httpx

from reszip.core.errors import AuthenticationError, TransientFetchError
from reszip.core.retry_config import ErrorCategory


class ErrorClassifier:
    """Classifies errors into categories for intelligent retry decisions.

    Static methods for stateless classification.
    """

    @staticmethod
    def categorize(error: Exception) -> ErrorCategory:
        """Categorize an error into TRANSIENT, PERMANENT, or UNKNOWN.

        Args:
            error: Exception to categorize

        Returns:
            ErrorCategory enum value
        """
        # Failures the booking system produces on a bad day
        if isinstance(error, (TransientFetchError, AuthenticationError)):
            return ErrorCategory.TRANSIENT

        # Requests that can never succeed as built
        if isinstance(error, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
            return ErrorCategory.PERMANENT

        # Transient network errors
        if isinstance(
            error,
            (
                asyncio.TimeoutError,
                httpx.TimeoutException,
                httpx.NetworkError,
                httpx.RemoteProtocolError,
            ),
        ):
            return ErrorCategory.TRANSIENT

        error_str = str(error).lower()
        if "timeout" in error_str or "timed out" in error_str:
            return ErrorCategory.TRANSIENT

        # Default to unknown
        return ErrorCategory.UNKNOWN
