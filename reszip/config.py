"""Configuration management for the reservation export service.

Centralizes all environment variable access for better testability and maintainability.
"""

import os
from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional

DEFAULT_BASE_URL = "https://hotel.webhotelier.localhost"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration loaded from environment variables."""

    # Legacy booking system (Lucee)
    @staticmethod
    def base_url() -> str:
        """Get the booking system base URL from environment."""
        return (os.environ.get("LUCEE_URL") or DEFAULT_BASE_URL).rstrip("/")

    @staticmethod
    def username() -> str:
        """Get the login username from environment."""
        return os.environ.get("PDF_USERNAME", "")

    @staticmethod
    def password() -> str:
        """Get the login password from environment."""
        return os.environ.get("PDF_PASSWORD", "")

    @staticmethod
    def company_code() -> str:
        """Get the company code sent as cmp_code on login."""
        return os.environ.get("PDF_COMPANY_CODE", "")

    @staticmethod
    def verify_ssl() -> bool:
        """Whether to verify the booking system's TLS certificate.

        Off by default: the booking host serves a private certificate.
        """
        return _env_bool("PDF_VERIFY_SSL", False)

    # Batch tuning
    @staticmethod
    def batch_size() -> int:
        """Get the number of concurrent fetches per group."""
        return _env_int("PDF_BATCH_SIZE", 20)

    @staticmethod
    def batch_delay_ms() -> int:
        """Get the pause between groups in milliseconds."""
        return _env_int("PDF_BATCH_DELAY_MS", 200)

    @staticmethod
    def batch_mode() -> str:
        """Get the batch execution mode ('async' or 'sequential')."""
        return os.environ.get("PDF_BATCH_MODE", "async").strip().lower() or "async"

    @staticmethod
    def max_attempts() -> int:
        """Get the number of attempts per reservation."""
        return _env_int("PDF_MAX_ATTEMPTS", 3)

    @staticmethod
    def request_timeout() -> int:
        """Get the upstream HTTP timeout in seconds."""
        return _env_int("PDF_REQUEST_TIMEOUT", 30)

    @staticmethod
    def session_ttl_minutes() -> int:
        """Get how long a login session is trusted."""
        return _env_int("PDF_SESSION_TTL_MINUTES", 30)


@dataclass(frozen=True)
class Settings:
    """Resolved settings handed to the app factory.

    Tests build this directly; production code uses ``Settings.from_env()``.
    """

    base_url: str = DEFAULT_BASE_URL
    username: str = ""
    password: str = ""
    company_code: str = ""
    verify_ssl: bool = False
    batch_size: int = 20
    batch_delay: float = 0.2  # seconds
    batch_mode: str = "async"
    max_attempts: int = 3
    retry_initial_delay: float = 1.0  # seconds
    retry_max_delay: float = 5.0  # seconds
    request_timeout: float = 30.0  # seconds
    session_ttl: timedelta = timedelta(minutes=30)

    @classmethod
    def from_env(cls, overrides: Optional[dict] = None) -> "Settings":
        """Build settings from environment variables via Config."""
        values = dict(
            base_url=Config.base_url(),
            username=Config.username(),
            password=Config.password(),
            company_code=Config.company_code(),
            verify_ssl=Config.verify_ssl(),
            batch_size=Config.batch_size(),
            batch_delay=Config.batch_delay_ms() / 1000.0,
            batch_mode=Config.batch_mode(),
            max_attempts=Config.max_attempts(),
            request_timeout=float(Config.request_timeout()),
            session_ttl=timedelta(minutes=Config.session_ttl_minutes()),
        )
        values.update(overrides or {})
        return cls(**values)

    def get_missing_config(self) -> List[str]:
        """Get the environment names of login credentials left empty."""
        missing = []
        if not self.username:
            missing.append("PDF_USERNAME")
        if not self.password:
            missing.append("PDF_PASSWORD")
        if not self.company_code:
            missing.append("PDF_COMPANY_CODE")
        return missing
