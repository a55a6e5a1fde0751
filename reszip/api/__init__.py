"""FastAPI surface for the reservation export service."""

from reszip.api.app import create_app

__all__ = ["create_app"]
