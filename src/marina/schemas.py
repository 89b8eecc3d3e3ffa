"""
Request payload schemas.

Incoming JSON uses camelCase keys; the schemas expose snake_case attributes
and every ``validate_*`` helper raises ``common.errors.ValidationError`` with
field-level details on failure.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from common.errors import ValidationError
from .models import CatwayType


# catway numbers are stored as signed 64-bit integers
CATWAY_NUMBER_MIN = -(2**63)
CATWAY_NUMBER_MAX = 2**63 - 1
CatwayNumber = Annotated[int, Field(ge=CATWAY_NUMBER_MIN, le=CATWAY_NUMBER_MAX)]


def catway_number_in_range(catway_number: int) -> bool:
    return CATWAY_NUMBER_MIN <= catway_number <= CATWAY_NUMBER_MAX


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ReservationPayload(_Payload):
    catway_number: CatwayNumber = Field(..., alias="catwayNumber")
    client_name: str = Field(..., alias="clientName", min_length=3, max_length=50)
    boat_name: str = Field(..., alias="boatName", min_length=3, max_length=50)
    check_in: date = Field(..., alias="checkIn")
    check_out: date = Field(..., alias="checkOut")

    @field_validator("check_out")
    @classmethod
    def _check_out_not_before_check_in(cls, value: date, info: ValidationInfo) -> date:
        # check_in is missing from info.data when it failed on its own
        check_in = info.data.get("check_in")
        if check_in is not None and value < check_in:
            raise ValueError("checkOut must be on or after checkIn")
        return value


class CatwayPayload(_Payload):
    catway_number: CatwayNumber = Field(..., alias="catwayNumber")
    type: CatwayType
    catway_state: str = Field(..., alias="catwayState", min_length=1)


class CatwayUpdatePayload(_Payload):
    catway_number: Optional[CatwayNumber] = Field(None, alias="catwayNumber")
    type: Optional[CatwayType] = None
    catway_state: Optional[str] = Field(None, alias="catwayState", min_length=1)


class SignupPayload(_Payload):
    username: str = Field(..., min_length=1, max_length=80)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginPayload(_Payload):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# turn pydantic errors into a JSON friendly list
def _details(exc: pydantic.ValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]


def _validate(schema: type[BaseModel], payload: Any, message: str):
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(message, _details(e)) from e


def validate_reservation(payload: Any) -> ReservationPayload:
    return _validate(ReservationPayload, payload, "Validation error")


def validate_catway(payload: Any) -> CatwayPayload:
    return _validate(CatwayPayload, payload, "Invalid catway")


def validate_catway_update(payload: Any) -> dict:
    """Return only the catway fields that were sent, in snake_case."""
    parsed = _validate(CatwayUpdatePayload, payload, "Invalid catway")
    return parsed.model_dump(mode="json", exclude_none=True)


def validate_signup(payload: Any) -> SignupPayload:
    return _validate(SignupPayload, payload,
                     "Username, email and password are required")


def validate_login(payload: Any) -> LoginPayload:
    return _validate(LoginPayload, payload, "Username and password are required")
