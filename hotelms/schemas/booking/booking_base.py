# --- File: hotelms/schemas/booking/booking_base.py ---
"""
Booking request schemas.

Date ordering and guest limits are business rules enforced by the
booking service; these schemas only check shape and basic bounds.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import Field, model_validator

from hotelms.models.base import BookingStatus, PaymentStatus
from hotelms.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = ["BookingCreate", "BookingUpdate", "BookingStatusUpdate", "BookingFilters"]


class BookingCreate(BaseCreateSchema):
    """
    Payload for creating a booking.

    Either ``guests`` or the ``adults``/``children`` breakdown may be sent.
    Missing values are derived from the others; the price is always
    computed by the server.
    """

    room_id: str = Field(..., min_length=1, description="Room to book")
    check_in_date: date = Field(..., description="First night of the stay")
    check_out_date: date = Field(..., description="Departure date (exclusive)")
    guests: int = Field(default=1, description="Total number of guests")
    adults: int = Field(default=1, ge=0)
    children: int = Field(default=0, ge=0)
    special_requests: Optional[str] = Field(default=None, max_length=1000)

    @model_validator(mode="before")
    @classmethod
    def derive_guest_breakdown(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        children = data.get("children") or 0
        if data.get("guests") is None:
            adults = data.get("adults")
            data["guests"] = (adults if adults is not None else 1) + children
        elif data.get("adults") is None:
            data["adults"] = max(int(data["guests"]) - int(children), 0)
        return data

    @model_validator(mode="after")
    def check_breakdown_matches(self) -> "BookingCreate":
        if self.adults + self.children != self.guests:
            raise ValueError("adults + children must equal guests")
        return self


class BookingUpdate(BaseUpdateSchema):
    """
    Staff edit of an existing stay.

    Fields left out keep their current value. The room and the owner of a
    booking cannot be changed.
    """

    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    guests: Optional[int] = None
    adults: Optional[int] = Field(default=None, ge=0)
    children: Optional[int] = Field(default=None, ge=0)
    special_requests: Optional[str] = Field(default=None, max_length=1000)


class BookingStatusUpdate(BaseSchema):
    status: Optional[BookingStatus] = Field(default=None, description="New booking status")
    payment_status: Optional[PaymentStatus] = None

    @model_validator(mode="after")
    def require_change(self) -> "BookingStatusUpdate":
        if self.status is None and self.payment_status is None:
            raise ValueError("status or payment_status is required")
        return self


class BookingFilters(BaseSchema):
    """Staff listing filters."""

    status: Optional[BookingStatus] = None
    room_id: Optional[str] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None
