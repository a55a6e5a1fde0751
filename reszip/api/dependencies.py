"""FastAPI dependencies for the reservation export API.

Dependency injection functions for route handlers.
"""

from fastapi import Request

from reszip.config import Settings
from reszip.core.archive import ArchiveBuilder
from reszip.core.batch import BatchProcessor
from reszip.core.session import SessionManager


def get_batch_processor(request: Request) -> BatchProcessor:
    """Get the BatchProcessor built during app startup."""
    return request.app.state.batch_processor


def get_archive_builder(request: Request) -> ArchiveBuilder:
    """Get the ArchiveBuilder from app state."""
    return request.app.state.archive_builder


def get_session_manager(request: Request) -> SessionManager:
    """Get the process-wide SessionManager from app state."""
    return request.app.state.session_manager


def get_settings(request: Request) -> Settings:
    """Get the Settings the app was created with."""
    return request.app.state.settings
