"""System routes for the reservation export API."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from reszip.api.dependencies import get_session_manager, get_settings
from reszip.config import Settings
from reszip.core.session import SessionManager

router = APIRouter(tags=["System"])


@router.get("/health")
async def health(
    settings: Settings = Depends(get_settings),
    sessions: SessionManager = Depends(get_session_manager),
) -> Dict[str, Any]:
    """Report configuration completeness and login session state."""
    missing = settings.get_missing_config()
    session = sessions.session
    return {
        "status": "healthy" if not missing else "degraded",
        "missing_config": missing,
        "session": {
            "authenticated": sessions.is_authenticated(),
            "expires_at": session.expires_at.isoformat() if session else None,
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
