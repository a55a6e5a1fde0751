"""Unit tests for SessionManager."""

import asyncio
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs

import httpx
import pytest

from reszip.core.errors import AuthenticationError
from reszip.core.session import Session, SessionManager, cookie_header_from_set_cookie


def make_manager(booking, **kwargs) -> SessionManager:
    client = httpx.AsyncClient(transport=booking.transport())
    return SessionManager(
        client=client,
        base_url="https://pms.test/",
        username="frontdesk",
        password="secret",
        company_code="ACME",
        **kwargs,
    )


class TestCookieHeader:
    """Test Set-Cookie reduction."""

    def test_strips_attributes_and_joins(self):
        header = cookie_header_from_set_cookie(
            ["CFID=1; Path=/; HttpOnly", "CFTOKEN=abc; Secure", "  JSESSIONID=x  "]
        )
        assert header == "CFID=1; CFTOKEN=abc; JSESSIONID=x"

    def test_empty_when_no_cookies(self):
        assert cookie_header_from_set_cookie([]) == ""


class TestSessionModel:
    """Test Session validity window."""

    def test_valid_until_expiry(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        session = Session(cookie_header="CFID=1", expires_at=now + timedelta(minutes=30))

        assert session.is_valid(now)
        assert session.is_valid(now + timedelta(minutes=29, seconds=59))
        assert not session.is_valid(now + timedelta(minutes=30))

    def test_repr_hides_cookie_values(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        session = Session(cookie_header="CFID=supersecret; CFTOKEN=abc", expires_at=now)

        assert "supersecret" not in repr(session)
        assert session.to_dict()["cookies"] == 2


class TestLogin:
    """Test login against the booking system."""

    @pytest.mark.asyncio
    async def test_login_posts_form_and_caches_cookies(self, booking):
        manager = make_manager(booking)

        header = await manager.login()

        assert header == "CFID=tok1; CFTOKEN=abc"
        assert manager.session.cookie_header == header
        assert booking.login_calls == 1

        form = parse_qs(booking.login_forms[0])
        assert form == {
            "cmp_code": ["ACME"],
            "username": ["frontdesk"],
            "password": ["secret"],
            "remember_me": ["on"],
        }

    @pytest.mark.asyncio
    async def test_login_sets_thirty_minute_expiry(self, booking):
        now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
        manager = make_manager(booking, clock=lambda: now)

        await manager.login()

        assert manager.session.expires_at == now + timedelta(minutes=30)

    @pytest.mark.asyncio
    async def test_login_without_cookies_raises(self, booking):
        booking.issue_cookies = False
        manager = make_manager(booking)

        with pytest.raises(AuthenticationError, match="no cookies"):
            await manager.login()

        assert manager.session is None

    @pytest.mark.asyncio
    async def test_login_transport_error_raises_authentication_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        manager = SessionManager(client, "https://pms.test", "u", "p", "C")

        with pytest.raises(AuthenticationError, match="Login request failed"):
            await manager.login()


class TestGetValidSession:
    """Test cache validity and refresh."""

    @pytest.mark.asyncio
    async def test_reuses_cached_session(self, booking):
        manager = make_manager(booking)

        first = await manager.get_valid_session()
        second = await manager.get_valid_session()

        assert first == second
        assert booking.login_calls == 1

    @pytest.mark.asyncio
    async def test_expired_session_triggers_login(self, booking):
        now = [datetime(2026, 1, 1, tzinfo=timezone.utc)]
        manager = make_manager(booking, clock=lambda: now[0])

        await manager.get_valid_session()
        now[0] += timedelta(minutes=31)
        header = await manager.get_valid_session()

        assert header.startswith("CFID=tok2")
        assert booking.login_calls == 2

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_login(self, booking):
        async def slow_handler(request):
            await asyncio.sleep(0.01)
            return booking.handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(slow_handler))
        manager = SessionManager(client, "https://pms.test", "u", "p", "C")

        headers = await asyncio.gather(*[manager.get_valid_session() for _ in range(10)])

        assert len(set(headers)) == 1
        assert booking.login_calls == 1
        assert manager.login_count == 1


class TestInvalidate:
    """Test session invalidation."""

    @pytest.mark.asyncio
    async def test_invalidate_forces_fresh_login(self, booking):
        manager = make_manager(booking)
        await manager.get_valid_session()

        manager.invalidate()
        assert manager.session is None

        await manager.get_valid_session()
        assert booking.login_calls == 2

    @pytest.mark.asyncio
    async def test_stale_invalidate_keeps_newer_session(self, booking):
        manager = make_manager(booking)
        stale = await manager.get_valid_session()
        manager.invalidate(stale)
        fresh = await manager.get_valid_session()

        # A second fetcher reporting the old session must not drop the new one
        manager.invalidate(stale)

        assert manager.session is not None
        assert manager.session.cookie_header == fresh
        assert booking.login_calls == 2
