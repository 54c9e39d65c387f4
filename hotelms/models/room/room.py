"""
Room inventory model.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Boolean, CheckConstraint, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotelms.models.base import BaseModel, RoomStatus, RoomType, TimestampMixin, enum_column

if TYPE_CHECKING:
    from hotelms.models.booking.booking import Booking

__all__ = ["Room"]


class Room(TimestampMixin, BaseModel):
    """
    A bookable hotel room.

    Attributes:
        room_number: Globally unique room number
        room_type: Room category
        capacity: Maximum number of guests
        price_per_night: Nightly rate used to price new bookings
        floor: Floor the room is on
        amenities: Distinct amenity names
        images: Ordered image references
        status: Housekeeping status
        is_available: Coarse flag, false while a guest occupies the room today
    """

    __tablename__ = "rooms"

    room_number: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
    )
    room_type: Mapped[RoomType] = mapped_column(
        enum_column(RoomType, "room_type"),
        nullable=False,
    )
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    floor: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    amenities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    images: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[RoomStatus] = mapped_column(
        enum_column(RoomStatus, "room_status"),
        nullable=False,
        default=RoomStatus.READY,
    )
    is_available: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
    )

    bookings: Mapped[List["Booking"]] = relationship(
        "Booking",
        back_populates="room",
        passive_deletes="all",
    )

    __table_args__ = (
        CheckConstraint("capacity >= 1", name="ck_room_capacity_positive"),
        CheckConstraint("price_per_night >= 0", name="ck_room_price_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Room {self.room_number} ({self.room_type.value if self.room_type else '?'})>"
