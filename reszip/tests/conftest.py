"""Shared fixtures: an in-memory stand-in for the Lucee booking system."""

from typing import Dict, List, Optional, Tuple, Union

import httpx
import pytest

from reszip.config import Settings

BASE_URL = "https://pms.test"

Behavior = Union[str, int]


def pdf_bytes(label: str) -> bytes:
    return b"%PDF-1.4\n% " + label.encode() + b"\n%%EOF\n"


class FakeBookingSystem:
    """Simulates login and the reservation print endpoint.

    Per-reservation behaviors (keyed by res_id):
        "pdf"  - serve a PDF
        "html" - serve an HTML error page with status 200
        "redirect" - 302 to a page that is not the login form
        int    - respond with that HTTP status
    A list of behaviors is consumed one per request; the last one repeats.
    """

    def __init__(self, documents: Optional[Dict[str, Union[Behavior, List[Behavior]]]] = None):
        self.documents = documents or {}
        self.login_calls = 0
        self.login_forms: List[str] = []
        self.fetch_calls: List[Tuple[str, str, str]] = []
        self.valid_tokens = set()
        self.issue_cookies = True
        self.expire_after: Optional[int] = None
        self._served = 0

    @property
    def network_calls(self) -> int:
        return self.login_calls + len(self.fetch_calls)

    def _behavior(self, res_id: str) -> Behavior:
        behavior = self.documents.get(res_id, "pdf")
        if isinstance(behavior, list):
            return behavior.pop(0) if len(behavior) > 1 else behavior[0]
        return behavior

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/login/login":
            self.login_calls += 1
            self.login_forms.append(request.content.decode())
            if not self.issue_cookies:
                return httpx.Response(200, text="<html>Invalid credentials</html>")
            token = f"tok{self.login_calls}"
            self.valid_tokens = {token}
            return httpx.Response(
                302,
                headers=[
                    ("location", "/dashboard"),
                    ("set-cookie", f"CFID={token}; Path=/; HttpOnly"),
                    ("set-cookie", "CFTOKEN=abc; Path=/; Secure"),
                ],
            )

        if request.url.path == "/res/print.cfm":
            htl_code = request.url.params.get("htl_code", "")
            res_id = request.url.params.get("res_id", "")
            cookie = request.headers.get("cookie", "")
            self.fetch_calls.append((htl_code, res_id, cookie))

            token = ""
            for part in cookie.split("; "):
                if part.startswith("CFID="):
                    token = part[len("CFID="):]
            if token not in self.valid_tokens:
                return httpx.Response(302, headers={"location": "/login?forward=%2Fres%2Fprint.cfm"})

            behavior = self._behavior(res_id)
            if isinstance(behavior, int):
                return httpx.Response(behavior, text="error")
            if behavior == "redirect":
                return httpx.Response(302, headers={"location": "/elsewhere"})
            if behavior == "html":
                return httpx.Response(
                    200,
                    headers={"content-type": "application/pdf"},
                    text="<html><body>Error generating report</body></html>",
                )

            self._served += 1
            if self.expire_after is not None and self._served >= self.expire_after:
                # Session dies right after this response
                self.valid_tokens = set()
                self.expire_after = None
            return httpx.Response(
                200,
                headers={"content-type": "application/pdf"},
                content=pdf_bytes(f"{htl_code}-{res_id}"),
            )

        return httpx.Response(404, text="not found")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class SleepRecorder:
    """Awaitable sleep that records delays instead of waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def booking() -> FakeBookingSystem:
    return FakeBookingSystem()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        base_url=BASE_URL,
        username="frontdesk",
        password="secret",
        company_code="ACME",
        batch_size=20,
        batch_delay=0.2,
    )
