"""Document fetcher for reservation PDFs.

Fetches one reservation printout from the booking system using the shared
login session, with retry/backoff and recovery from mid-batch session expiry.
"""

from typing import Optional

import httpx

from reszip.core.batch.models import ReservationRef
from reszip.core.errors import FetchError, TransientFetchError
from reszip.core.execution.attempt import AttemptResult
from reszip.core.execution.error_handler import ErrorHandler, Sleep
from reszip.core.logging import logger
from reszip.core.retry_config import RetryConfig
from reszip.core.session import SessionManager

PRINT_PATH = "/res/print.cfm"
PDF_SIGNATURE = b"%PDF"
LOGIN_REDIRECT_MARKER = "forward="


def is_pdf(content: bytes) -> bool:
    """Check for the PDF magic bytes at the start of the payload."""
    return content[:4] == PDF_SIGNATURE


def is_login_redirect(response: httpx.Response) -> bool:
    """True when the booking system bounced us to its login page."""
    if not response.is_redirect:
        return False
    location = response.headers.get("location", "")
    return LOGIN_REDIRECT_MARKER in location


class DocumentFetcher:
    """Fetches reservation PDFs one at a time.

    Usage:
        fetcher = DocumentFetcher(client=client, session_manager=sessions, base_url=url)
        content = await fetcher.fetch_document(ReservationRef("H1", "99"))
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        session_manager: SessionManager,
        base_url: str,
        retry_config: Optional[RetryConfig] = None,
        sleep: Optional[Sleep] = None,
    ):
        """Initialize the fetcher.

        Args:
            client: Shared HTTP client (TLS verification is decided by its owner)
            session_manager: Source of the login session
            base_url: Booking system base URL
            retry_config: Attempt ceiling and backoff settings
            sleep: Backoff sleep, injectable for tests
        """
        self.client = client
        self.session_manager = session_manager
        self.base_url = base_url.rstrip("/")
        self.retry_config = retry_config or RetryConfig()
        self.error_handler = ErrorHandler(self.retry_config, sleep=sleep)

    def document_url(self, ref: ReservationRef) -> str:
        # The bare "download" flag asks for the attachment rendering
        query = httpx.QueryParams({"htl_code": ref.hotel_code, "res_id": ref.reservation_id})
        return f"{self.base_url}{PRINT_PATH}?{query}&download"

    async def _get(self, url: str, cookie_header: str) -> httpx.Response:
        return await self.client.get(
            url,
            headers={"Cookie": cookie_header},
            follow_redirects=False,
        )

    async def attempt(self, ref: ReservationRef, attempt: int) -> AttemptResult:
        """Make one attempt at fetching the document.

        A login-redirect is handled inside the attempt: the session is
        refreshed and the request reissued once without spending another
        attempt.

        Raises:
            TransientFetchError: Non-success status or non-PDF payload
            AuthenticationError: Login needed and failed
        """
        url = self.document_url(ref)
        cookie_header = await self.session_manager.get_valid_session()
        response = await self._get(url, cookie_header)

        if is_login_redirect(response):
            logger.info(
                "session_expired_detected",
                hotel_code=ref.hotel_code,
                reservation_id=ref.reservation_id,
                attempt=attempt,
            )
            self.session_manager.invalidate(cookie_header)
            cookie_header = await self.session_manager.get_valid_session()
            response = await self._get(url, cookie_header)

        if not response.is_success:
            raise TransientFetchError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        content = response.content
        if not is_pdf(content):
            raise TransientFetchError(
                "Response is not a valid PDF (likely HTML error page)",
                status_code=response.status_code,
            )

        return AttemptResult.success(attempt, content, http_status=response.status_code)

    async def fetch_document(self, ref: ReservationRef) -> bytes:
        """Fetch one reservation PDF, retrying transient failures.

        Args:
            ref: Reservation to fetch

        Returns:
            PDF bytes

        Raises:
            FetchError: If every attempt failed (or one failed fatally)
        """
        context = {"hotel_code": ref.hotel_code, "reservation_id": ref.reservation_id}

        async def run_attempt(attempt: int) -> AttemptResult:
            return await self.attempt(ref, attempt)

        result = await self.error_handler.execute_with_retry(run_attempt, context=context)

        if result.ok:
            logger.info(
                "pdf_fetch_succeeded",
                attempt=result.attempt,
                size_bytes=len(result.content),
                **context,
            )
            return result.content

        logger.error(
            "pdf_fetch_exhausted",
            attempts=result.attempt,
            error=result.error,
            **context,
        )
        raise FetchError(ref, result.attempt, result.error or "unknown error")
