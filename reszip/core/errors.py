"""Exception taxonomy for the reservation export service."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from reszip.core.batch.models import ReservationRef


class ReszipError(Exception):
    """Base class for all service errors."""


class AuthenticationError(ReszipError):
    """Login to the booking system yielded no session cookies."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransientFetchError(ReszipError):
    """A single fetch attempt failed in a way worth retrying.

    Raised for non-success HTTP statuses and for payloads that are not PDFs.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FetchError(ReszipError):
    """All attempts for one reservation were exhausted."""

    def __init__(self, ref: "ReservationRef", attempts: int, last_error: str):
        super().__init__(f"Failed after {attempts} attempts: {last_error}")
        self.ref = ref
        self.attempts = attempts
        self.last_error = last_error


class ArchiveError(ReszipError):
    """Encoding the output archive failed."""


class ValidationError(ReszipError):
    """The incoming request body is malformed."""
