# --- File: hotelms/schemas/booking/booking_response.py ---
"""
Booking response schemas.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from hotelms.models.base import BookingStatus, PaymentStatus
from hotelms.schemas.auth.auth_schemas import UserSummary
from hotelms.schemas.common.base import BaseDBSchema, BaseSchema
from hotelms.schemas.room.room_response import RoomSummary

__all__ = ["BookingResponse", "BookingActionResponse"]


class BookingResponse(BaseDBSchema):
    room_id: str
    user_id: str
    check_in_date: date
    check_out_date: date
    nights: int
    guests: int
    adults: int
    children: int
    total_price: float
    status: BookingStatus
    payment_status: PaymentStatus
    special_requests: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    room: RoomSummary
    user: UserSummary


class BookingActionResponse(BaseSchema):
    message: str
    booking: BookingResponse
