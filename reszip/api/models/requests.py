"""Request models for the reservation export API."""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from reszip.core.batch.models import ReservationRef
from reszip.core.errors import ValidationError


class ReservationIdItem(BaseModel):
    """One reservation as sent by the client."""

    htl_code: str = Field(..., min_length=1, description="Hotel code")
    res_id: str = Field(..., min_length=1, description="Reservation id")

    @field_validator("htl_code", "res_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Any:
        """Accept numeric ids and trim whitespace.

        Zero counts as missing, like an empty string.
        """
        if isinstance(v, bool):
            return v
        if isinstance(v, int):
            v = str(v) if v else ""
        if isinstance(v, str):
            v = v.strip()
        return v

    def to_ref(self) -> ReservationRef:
        return ReservationRef(hotel_code=self.htl_code, reservation_id=self.res_id)


class CreateZipRequest(BaseModel):
    """Request for /api/create-zip - bundle reservation PDFs into one ZIP."""

    reservationIds: List[ReservationIdItem] = Field(
        ..., description="Reservations to export, in order"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "reservationIds": [
                        {"htl_code": "H1", "res_id": "99"},
                        {"htl_code": "H1", "res_id": "100"},
                    ]
                }
            ]
        }
    }

    def to_refs(self) -> List[ReservationRef]:
        return [item.to_ref() for item in self.reservationIds]


def _describe(error: dict) -> str:
    loc = error.get("loc", ())
    if len(loc) <= 1:
        return "Invalid or missing reservationIds"
    path = "reservationIds"
    for part in loc[1:]:
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return f"Invalid reservation object structure: {path} {error.get('msg', 'is invalid').lower()}"


def parse_create_zip_request(body: Any) -> CreateZipRequest:
    """Validate a decoded JSON body.

    Raises:
        ValidationError: With a message describing the first violation
    """
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return CreateZipRequest.model_validate(body)
    except PydanticValidationError as e:
        errors = e.errors()
        raise ValidationError(_describe(errors[0]) if errors else "Invalid request body") from e
