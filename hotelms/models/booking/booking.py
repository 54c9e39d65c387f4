"""
Booking model for room reservations.

A booking occupies its room for the half-open date range
``[check_in_date, check_out_date)`` while its status is active.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotelms.models.base import (
    ACTIVE_BOOKING_STATUSES,
    BaseModel,
    BookingStatus,
    PaymentStatus,
    TimestampMixin,
    enum_column,
)

if TYPE_CHECKING:
    from hotelms.models.room.room import Room
    from hotelms.models.user.user import User

__all__ = ["Booking"]


class Booking(TimestampMixin, BaseModel):
    """
    Room reservation owned by the user who created it.

    Attributes:
        room_id: Booked room, immutable after creation
        user_id: Owning user, immutable after creation
        check_in_date: First night of the stay
        check_out_date: Departure date, strictly after check-in
        guests: Total guest count (adults + children)
        total_price: nights x room price at booking time
        status: Lifecycle status
        payment_status: Payment state
        cancelled_at: When the booking was cancelled
    """

    __tablename__ = "bookings"

    room_id: Mapped[str] = mapped_column(
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_out_date: Mapped[date] = mapped_column(Date, nullable=False)

    guests: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        enum_column(BookingStatus, "booking_status"),
        nullable=False,
        default=BookingStatus.CONFIRMED,
        index=True,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        enum_column(PaymentStatus, "payment_status"),
        nullable=False,
        default=PaymentStatus.PENDING,
    )

    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    room: Mapped["Room"] = relationship("Room", back_populates="bookings", lazy="joined")
    user: Mapped["User"] = relationship("User", back_populates="bookings", lazy="joined")

    __table_args__ = (
        CheckConstraint("check_out_date > check_in_date", name="ck_booking_date_range"),
        CheckConstraint("guests >= 1 AND guests <= 10", name="ck_booking_guest_count"),
        CheckConstraint("total_price >= 0", name="ck_booking_price_non_negative"),
        Index("ix_bookings_room_dates", "room_id", "check_in_date", "check_out_date"),
    )

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_BOOKING_STATUSES

    def covers(self, day: date) -> bool:
        """True when ``day`` is one of the booked nights."""
        return self.check_in_date <= day < self.check_out_date

    def __repr__(self) -> str:
        return (
            f"<Booking {self.id} room={self.room_id} "
            f"{self.check_in_date}..{self.check_out_date} {self.status.value if self.status else '?'}>"
        )
