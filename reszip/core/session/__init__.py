"""Session module for the booking system login.

Components:
- Session: Immutable cookie header + expiry
- SessionManager: Login, cache validity, invalidation
"""

from reszip.core.session.manager import SessionManager
from reszip.core.session.models import Session, cookie_header_from_set_cookie

__all__ = ["Session", "SessionManager", "cookie_header_from_set_cookie"]
