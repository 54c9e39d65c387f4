from hotelms.schemas.booking.booking_base import (
    BookingCreate,
    BookingFilters,
    BookingStatusUpdate,
    BookingUpdate,
)
from hotelms.schemas.booking.booking_response import BookingActionResponse, BookingResponse

__all__ = [
    "BookingCreate",
    "BookingUpdate",
    "BookingStatusUpdate",
    "BookingFilters",
    "BookingResponse",
    "BookingActionResponse",
]
