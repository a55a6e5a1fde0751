"""API models for the reservation export service."""

from reszip.api.models.requests import (
    CreateZipRequest,
    ReservationIdItem,
    parse_create_zip_request,
)

__all__ = [
    "CreateZipRequest",
    "ReservationIdItem",
    "parse_create_zip_request",
]
