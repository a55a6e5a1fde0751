"""Routes for the reservation export API."""

from reszip.api.routes import reservations, system

__all__ = ["reservations", "system"]
