"""
Date-range availability of rooms.

Stays are half-open intervals ``[check_in, check_out)``: a booking that
checks out on the day another checks in does not conflict with it.
"""

from datetime import date
from typing import List, Optional

from hotelms.models.booking import Booking
from hotelms.repositories.booking import BookingRepository
from hotelms.services.common.errors import ValidationError


def intervals_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Whether half-open intervals ``[start_a, end_a)`` and ``[start_b, end_b)`` intersect."""
    return start_a < end_b and end_a > start_b


def validate_date_range(check_in: date, check_out: date) -> None:
    """
    Raises:
        ValidationError: If the range is empty or reversed
    """
    if check_in is None or check_out is None:
        raise ValidationError("Check-in and check-out dates are required", field="check_in_date")
    if check_out <= check_in:
        raise ValidationError(
            "Check-out date must be after check-in date",
            field="check_out_date",
            details={"check_in_date": str(check_in), "check_out_date": str(check_out)},
        )


class AvailabilityService:
    """Answers whether a room is free for a date range."""

    def __init__(self, booking_repository: BookingRepository):
        self.bookings = booking_repository

    def find_conflicts(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Booking]:
        """Active bookings of the room that overlap the requested stay."""
        validate_date_range(check_in, check_out)
        return self.bookings.find_overlapping(room_id, check_in, check_out, exclude_booking_id)

    def is_room_available(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        """
        True when no active booking of ``room_id`` overlaps
        ``[check_in, check_out)``.

        Args:
            exclude_booking_id: Booking to ignore when re-checking an existing booking

        Raises:
            ValidationError: If ``check_out`` is not after ``check_in``
        """
        validate_date_range(check_in, check_out)
        return not self.bookings.has_overlap(room_id, check_in, check_out, exclude_booking_id)
