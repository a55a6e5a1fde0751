"""Session model for the booking system login.

A Session is replaced as a unit and never edited in place.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Session:
    """Cached authentication state for the booking system.

    Attributes:
        cookie_header: Value for the Cookie request header ("a=1; b=2")
        expires_at: UTC instant after which the session must not be used
    """

    cookie_header: str
    expires_at: datetime

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """True while ``now`` is strictly before the expiry instant."""
        now = now or datetime.now(timezone.utc)
        return bool(self.cookie_header) and now < self.expires_at

    @property
    def cookie_count(self) -> int:
        return len([part for part in self.cookie_header.split("; ") if part])

    def to_dict(self) -> Dict[str, Any]:
        """Diagnostic view without cookie values."""
        return {
            "cookies": self.cookie_count,
            "expires_at": self.expires_at.isoformat(),
        }

    def __repr__(self) -> str:
        return f"Session(cookies={self.cookie_count}, expires_at='{self.expires_at.isoformat()}')"


def cookie_header_from_set_cookie(set_cookie_values: List[str]) -> str:
    """Reduce raw Set-Cookie values to a Cookie header.

    Keeps the leading ``name=value`` pair of each value and drops attributes
    such as Path, HttpOnly or Expires.

    Examples:
        >>> cookie_header_from_set_cookie(["CFID=1; path=/", "CFTOKEN=abc; HttpOnly"])
        'CFID=1; CFTOKEN=abc'
    """
    pairs = []
    for raw in set_cookie_values:
        pair = raw.split(";", 1)[0].strip()
        if pair:
            pairs.append(pair)
    return "; ".join(pairs)
