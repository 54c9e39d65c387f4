from hotelms.services.booking.availability_service import (
    AvailabilityService,
    intervals_overlap,
    validate_date_range,
)
from hotelms.services.booking.booking_service import (
    ALLOWED_TRANSITIONS,
    BookingService,
    calculate_stay_price,
    can_transition,
)

__all__ = [
    "AvailabilityService",
    "BookingService",
    "ALLOWED_TRANSITIONS",
    "calculate_stay_price",
    "can_transition",
    "intervals_overlap",
    "validate_date_range",
]
