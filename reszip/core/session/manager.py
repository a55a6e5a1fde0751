"""Session manager for the booking system.

Owns the single cached login session. Fetchers ask it for a cookie header
and tell it when the booking system has bounced them to the login page.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import httpx

from reszip.core.errors import AuthenticationError
from reszip.core.logging import logger
from reszip.core.session.models import Session, cookie_header_from_set_cookie

LOGIN_PATH = "/login/login"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionManager:
    """Caches one login session and refreshes it on demand.

    Logins are single-flight: callers arriving while a login is in progress
    wait on the same lock and reuse its result instead of logging in again.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        username: str,
        password: str,
        company_code: str,
        session_ttl: timedelta = timedelta(minutes=30),
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize the session manager.

        Args:
            client: Shared HTTP client for the booking system
            base_url: Booking system base URL (no trailing slash)
            username: Login username
            password: Login password
            company_code: Company code sent as cmp_code
            session_ttl: How long a fresh session is trusted
            clock: Source of "now" as an aware UTC datetime
        """
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.password = password
        self.company_code = company_code
        self.session_ttl = session_ttl
        self.clock = clock

        self._session: Optional[Session] = None
        self._login_lock = asyncio.Lock()
        self.login_count = 0

    @property
    def session(self) -> Optional[Session]:
        return self._session

    def is_authenticated(self) -> bool:
        return self._session is not None and self._session.is_valid(self.clock())

    async def get_valid_session(self) -> str:
        """Return a usable cookie header, logging in if needed.

        Returns:
            Cookie header value for the booking system

        Raises:
            AuthenticationError: If a required login fails
        """
        session = self._session
        if session is not None and session.is_valid(self.clock()):
            return session.cookie_header

        async with self._login_lock:
            # Another caller may have logged in while we waited
            session = self._session
            if session is not None and session.is_valid(self.clock()):
                return session.cookie_header
            return await self.login()

    async def login(self) -> str:
        """Log in to the booking system and cache the new session.

        Redirects are not followed: the success redirect carries the
        session cookies.

        Returns:
            Cookie header value of the new session

        Raises:
            AuthenticationError: If no cookies come back or the request fails
        """
        url = f"{self.base_url}{LOGIN_PATH}"
        logger.info("session_login_started", username=self.username, base_url=self.base_url)

        try:
            response = await self.client.post(
                url,
                data={
                    "cmp_code": self.company_code,
                    "username": self.username,
                    "password": self.password,
                    "remember_me": "on",
                },
                follow_redirects=False,
            )
        except httpx.HTTPError as e:
            logger.error("session_login_failed", error=str(e))
            raise AuthenticationError(f"Login request failed: {e}") from e

        set_cookies = response.headers.get_list("set-cookie")
        logger.info(
            "session_login_response",
            status_code=response.status_code,
            cookies=len(set_cookies),
        )

        cookie_header = cookie_header_from_set_cookie(set_cookies)
        if not cookie_header:
            logger.error("session_login_failed", status_code=response.status_code, error="no cookies")
            raise AuthenticationError(
                "Login failed - no cookies received", status_code=response.status_code
            )

        # The Session object is the only session state; keep the jar empty
        self.client.cookies.clear()

        self._session = Session(
            cookie_header=cookie_header,
            expires_at=self.clock() + self.session_ttl,
        )
        self.login_count += 1
        logger.info("session_login_succeeded", expires_at=self._session.expires_at.isoformat())
        return cookie_header

    def invalidate(self, cookie_header: Optional[str] = None) -> None:
        """Drop the cached session so the next request logs in again.

        Args:
            cookie_header: If given, only drop the session when it still
                carries this header. A newer session is left alone.
        """
        current = self._session
        if current is None:
            return
        if cookie_header is not None and current.cookie_header != cookie_header:
            logger.debug("session_invalidate_skipped", reason="already_refreshed")
            return
        self._session = None
        logger.info("session_invalidated")
