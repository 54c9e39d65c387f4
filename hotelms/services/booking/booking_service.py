"""
Booking lifecycle: create, cancel, status transitions, delete and queries.

Lifecycle::

    pending -> confirmed -> completed
    pending, confirmed -> cancelled

``cancelled`` and ``completed`` are terminal.
"""

import math
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from functools import wraps
from typing import Callable, Dict, List, Optional, Set, Tuple

from sqlalchemy.orm import Session

from hotelms.config.settings import Settings, get_settings
from hotelms.core.logging import get_audit_logger, get_logger
from hotelms.models.base import (
    ACTIVE_BOOKING_STATUSES,
    TERMINAL_BOOKING_STATUSES,
    BookingStatus,
    PaymentStatus,
    RoomStatus,
)
from hotelms.models.booking import Booking
from hotelms.models.room import Room
from hotelms.models.user import GuestProfile, User
from hotelms.repositories.booking import BookingRepository
from hotelms.repositories.room import RoomRepository
from hotelms.repositories.user import GuestProfileRepository, UserRepository
from hotelms.schemas.booking import BookingCreate, BookingFilters, BookingUpdate
from hotelms.services.base import BaseService
from hotelms.services.booking.availability_service import (
    AvailabilityService,
    validate_date_range,
)
from hotelms.services.common.errors import ConflictError, NotFoundError, ValidationError
from hotelms.services.common.permissions import Action, Principal, require
from hotelms.utils.date_utils import now_utc, today_utc

logger = get_logger(__name__)
audit = get_audit_logger()

ALLOWED_TRANSITIONS: Dict[BookingStatus, Set[BookingStatus]] = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.CANCELLED: set(),
    BookingStatus.COMPLETED: set(),
}


def track_performance(operation_name: str):
    """Decorator to log operation duration."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = now_utc()
            try:
                return func(*args, **kwargs)
            finally:
                duration = (now_utc() - start_time).total_seconds()
                logger.debug(
                    f"Operation '{operation_name}' finished in {duration:.3f}s",
                    extra={"operation": operation_name, "duration_seconds": duration},
                )
        return wrapper
    return decorator


def calculate_stay_price(check_in: date, check_out: date, price_per_night: Decimal) -> Tuple[int, Decimal]:
    """
    Number of nights and total price for a stay.

    Nights are whole days rounded up, so a partial day is charged as a night.
    """
    nights = math.ceil((check_out - check_in) / timedelta(days=1))
    total = (Decimal(nights) * Decimal(price_per_night)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return nights, total


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


class BookingService(BaseService[Booking, BookingRepository]):
    """
    Booking operations.

    Responsibilities:
    - Validation of booking requests
    - Conflict-free creation under concurrent requests
    - Status transitions and the room's coarse availability flag
    - Owner / staff / admin authorization
    """

    def __init__(
        self,
        db_session: Session,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        super().__init__(BookingRepository(db_session), db_session)
        self.settings = settings or get_settings()
        self._clock = clock or today_utc
        self.rooms = RoomRepository(db_session)
        self.users = UserRepository(db_session)
        self.guests = GuestProfileRepository(db_session)
        self.availability = AvailabilityService(self.repository)

    def _today(self) -> date:
        return self._clock()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def _validate_stay(
        self,
        check_in: date,
        check_out: date,
        guests: int,
        adults: int,
        check_past: bool = True,
    ) -> None:
        validate_date_range(check_in, check_out)

        max_guests = self.settings.BOOKING_MAX_GUESTS
        if not 1 <= guests <= max_guests:
            raise ValidationError(
                f"Number of guests must be between 1 and {max_guests}",
                field="guests",
                details={"guests": guests},
            )
        if adults < 1:
            raise ValidationError("At least one adult is required", field="adults")

        nights = (check_out - check_in).days
        if nights > self.settings.BOOKING_MAX_NIGHTS:
            raise ValidationError(
                f"Stay cannot exceed {self.settings.BOOKING_MAX_NIGHTS} nights",
                field="check_out_date",
                details={"nights": nights},
            )

        if check_past and not self.settings.BOOKING_ALLOW_PAST_DATES and check_in < self._today():
            raise ValidationError("Check-in date cannot be in the past", field="check_in_date")

    def _occupies_today(self, booking: Booking) -> bool:
        return booking.covers(self._today())

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @track_performance("create_booking")
    def create_booking(self, principal: Principal, request: BookingCreate) -> Booking:
        """
        Create a booking for ``principal``.

        The room row is locked before the overlap check so two requests for
        the same room cannot both pass the check.

        Raises:
            ValidationError: Bad date range, guest count or stay length
            NotFoundError: Unknown room or user
            ConflictError: Room unavailable or dates overlap an active booking
        """
        self._validate_stay(request.check_in_date, request.check_out_date, request.guests, request.adults)

        with self.transaction():
            room = self.rooms.get_for_update(request.room_id)
            if room is None:
                raise NotFoundError("Room", request.room_id)

            if not room.is_available:
                raise ConflictError("Room is currently not available", conflicting_field="room_id")
            if room.status == RoomStatus.MAINTENANCE:
                raise ConflictError("Room is under maintenance", conflicting_field="room_id")
            if request.guests > room.capacity:
                raise ValidationError(
                    f"Room {room.room_number} holds at most {room.capacity} guests",
                    field="guests",
                )

            conflicts = self.availability.find_conflicts(
                room.id, request.check_in_date, request.check_out_date
            )
            if conflicts:
                raise ConflictError(
                    "Room is not available for the selected dates",
                    conflicting_field="check_in_date",
                    details={"conflicting_bookings": [b.id for b in conflicts]},
                )

            user = self.users.get_by_id(principal.user_id)
            self._ensure_guest_profile(user)

            _, total_price = calculate_stay_price(
                request.check_in_date, request.check_out_date, room.price_per_night
            )
            booking = self.repository.create(
                Booking(
                    room_id=room.id,
                    user_id=user.id,
                    check_in_date=request.check_in_date,
                    check_out_date=request.check_out_date,
                    guests=request.guests,
                    adults=request.adults,
                    children=request.children,
                    total_price=total_price,
                    status=BookingStatus(self.settings.BOOKING_INITIAL_STATUS),
                    payment_status=PaymentStatus.PENDING,
                    special_requests=request.special_requests,
                )
            )
            booking.room = room
            booking.user = user

            if self._occupies_today(booking):
                self.rooms.set_availability(room, False)

        audit.info(
            "booking_created",
            booking_id=booking.id,
            room_id=booking.room_id,
            user_id=booking.user_id,
            check_in=str(booking.check_in_date),
            check_out=str(booking.check_out_date),
            total_price=str(booking.total_price),
        )
        return booking

    def _ensure_guest_profile(self, user: User) -> GuestProfile:
        profile = self.guests.find_by_user_id(user.id)
        if profile is None:
            profile = self.guests.create(
                GuestProfile(user_id=user.id, full_name=user.name, email=user.email)
            )
        return profile

    def _load(self, booking_id: str) -> Booking:
        return self.repository.get_by_id(booking_id)

    def _load_authorized(self, booking_id: str, principal: Principal, action: Action) -> Booking:
        """
        Load a booking and authorize ``action`` on it.

        Callers without a role grant get the same PermissionDenied for an
        unknown id as for someone else's booking.
        """
        booking = self.repository.find_by_id(booking_id)
        if booking is None:
            require(principal, action)
            raise NotFoundError("Booking", booking_id)
        require(principal, action, owner_id=booking.user_id)
        return booking

    @track_performance("cancel_booking")
    def cancel_booking(self, booking_id: str, principal: Principal) -> Booking:
        """
        Cancel a booking on behalf of its owner or staff.

        Cancelling is not idempotent: an already-cancelled booking is
        rejected. The room's availability flag is reset unconditionally.

        Raises:
            NotFoundError: Unknown booking (staff/admin callers)
            PermissionDenied: Caller is neither owner nor staff/admin
            ConflictError: Booking already cancelled or completed
        """
        with self.transaction():
            booking = self._load_authorized(booking_id, principal, Action.BOOKING_CANCEL)

            if booking.status == BookingStatus.CANCELLED:
                raise ConflictError("Booking is already cancelled", conflicting_field="status")
            if booking.status == BookingStatus.COMPLETED:
                raise ConflictError("Cannot cancel a booking after check-out", conflicting_field="status")

            booking.status = BookingStatus.CANCELLED
            booking.cancelled_at = now_utc()
            self.rooms.set_availability(booking.room, True)

        audit.info("booking_cancelled", booking_id=booking.id, cancelled_by=principal.user_id)
        return booking

    @track_performance("update_booking")
    def update_booking(self, booking_id: str, data: BookingUpdate, principal: Principal) -> Booking:
        """
        Change the dates, guest counts or requests of an active booking
        (staff/admin only).

        The new stay goes through the same checks as a new booking, ignoring
        the booking itself when looking for overlaps. The price is
        recomputed and the room's availability flag follows the new dates.

        Raises:
            PermissionDenied: Caller is not staff/admin
            NotFoundError: Unknown booking
            ConflictError: Booking is cancelled/completed or the new dates overlap
            ValidationError: Bad date range, guest count or stay length
        """
        require(principal, Action.BOOKING_UPDATE)
        changes = data.model_dump(exclude_unset=True)

        with self.transaction():
            booking = self._load(booking_id)
            if booking.status not in ACTIVE_BOOKING_STATUSES:
                raise ConflictError(
                    f"Cannot modify a {booking.status.value} booking",
                    conflicting_field="status",
                )

            room = self.rooms.get_for_update(booking.room_id)
            was_occupying = self._occupies_today(booking)

            check_in = changes.get("check_in_date") or booking.check_in_date
            check_out = changes.get("check_out_date") or booking.check_out_date
            adults, children, guests = self._merge_guest_counts(booking, changes)

            self._validate_stay(
                check_in, check_out, guests, adults,
                check_past=check_in != booking.check_in_date,
            )
            if guests > room.capacity:
                raise ValidationError(
                    f"Room {room.room_number} holds at most {room.capacity} guests",
                    field="guests",
                )

            conflicts = self.availability.find_conflicts(
                room.id, check_in, check_out, exclude_booking_id=booking.id
            )
            if conflicts:
                raise ConflictError(
                    "Room is not available for the selected dates",
                    conflicting_field="check_in_date",
                    details={"conflicting_bookings": [b.id for b in conflicts]},
                )

            _, total_price = calculate_stay_price(check_in, check_out, room.price_per_night)
            update = {
                "check_in_date": check_in,
                "check_out_date": check_out,
                "guests": guests,
                "adults": adults,
                "children": children,
                "total_price": total_price,
            }
            if "special_requests" in changes:
                update["special_requests"] = changes["special_requests"]
            booking = self.repository.update(booking, update)

            if self._occupies_today(booking):
                self.rooms.set_availability(room, False)
            elif was_occupying:
                self.rooms.set_availability(room, True)

        audit.info(
            "booking_updated",
            booking_id=booking.id,
            fields=sorted(changes),
            check_in=str(booking.check_in_date),
            check_out=str(booking.check_out_date),
            total_price=str(booking.total_price),
            updated_by=principal.user_id,
        )
        return booking

    @staticmethod
    def _merge_guest_counts(booking: Booking, changes: dict) -> Tuple[int, int, int]:
        """``(adults, children, guests)`` after applying a partial update."""
        children = changes.get("children")
        children = booking.children if children is None else children
        adults = changes.get("adults")
        guests = changes.get("guests")

        if adults is None and guests is None:
            adults = booking.adults
        elif adults is None:
            adults = guests - children
        if guests is None:
            guests = adults + children
        if adults + children != guests:
            raise ValidationError("adults + children must equal guests", field="guests")
        return adults, children, guests

    @track_performance("update_booking_status")
    def update_booking_status(
        self,
        booking_id: str,
        new_status: Optional[BookingStatus],
        principal: Principal,
        payment_status: Optional[PaymentStatus] = None,
    ) -> Booking:
        """
        Move a booking through its lifecycle (staff/admin only).

        Entering cancelled/completed from an active state frees the room;
        entering confirmed marks the room unavailable when the stay covers
        today.

        Raises:
            PermissionDenied: Caller is not staff/admin
            ValidationError: Unknown status value
            NotFoundError: Unknown booking
            ConflictError: Transition not allowed from the current state
        """
        require(principal, Action.BOOKING_UPDATE_STATUS)

        try:
            target = BookingStatus(new_status) if new_status is not None else None
            payment = PaymentStatus(payment_status) if payment_status is not None else None
        except ValueError as e:
            raise ValidationError(str(e), field="status") from e

        with self.transaction():
            booking = self._load(booking_id)
            previous = booking.status

            if target is not None and target != previous:
                if not can_transition(previous, target):
                    raise ConflictError(
                        f"Cannot change booking status from '{previous.value}' to '{target.value}'",
                        conflicting_field="status",
                    )
                booking.status = target

                if target in TERMINAL_BOOKING_STATUSES and previous in ACTIVE_BOOKING_STATUSES:
                    if target == BookingStatus.CANCELLED:
                        booking.cancelled_at = now_utc()
                    self.rooms.set_availability(booking.room, True)
                elif target == BookingStatus.CONFIRMED and self._occupies_today(booking):
                    self.rooms.set_availability(booking.room, False)

            if payment is not None:
                booking.payment_status = payment

            self.db.flush()

        audit.info(
            "booking_status_updated",
            booking_id=booking.id,
            previous_status=previous.value,
            status=booking.status.value,
            payment_status=booking.payment_status.value,
            updated_by=principal.user_id,
        )
        return booking

    def delete_booking(self, booking_id: str, principal: Principal) -> None:
        """
        Hard delete a booking (admin only) and reset the room's availability.

        Raises:
            PermissionDenied: Caller is not an admin
            NotFoundError: Unknown booking
        """
        require(principal, Action.BOOKING_DELETE)

        with self.transaction():
            booking = self._load(booking_id)
            room: Room = booking.room
            self.repository.delete(booking)
            self.rooms.set_availability(room, True)

        audit.info("booking_deleted", booking_id=booking_id, deleted_by=principal.user_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_booking(self, booking_id: str, principal: Principal) -> Booking:
        return self._load_authorized(booking_id, principal, Action.BOOKING_VIEW)

    def list_my_bookings(self, principal: Principal) -> List[Booking]:
        return self.repository.find_by_user(principal.user_id)

    def list_bookings(self, principal: Principal, filters: Optional[BookingFilters] = None) -> List[Booking]:
        """All bookings matching ``filters`` (staff/admin only)."""
        require(principal, Action.BOOKING_LIST_ALL)
        filters = filters or BookingFilters()
        if filters.from_date and filters.to_date and filters.to_date < filters.from_date:
            raise ValidationError("to_date must not be before from_date", field="to_date")
        return self.repository.search(
            status=filters.status,
            room_id=filters.room_id,
            from_date=filters.from_date,
            to_date=filters.to_date,
        )
