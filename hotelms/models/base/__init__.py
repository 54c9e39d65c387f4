"""
Base models package.

Provides the declarative base, mixins and enums for all database models.
"""

from hotelms.models.base.base_model import Base, BaseModel, enum_column
from hotelms.models.base.enums import (
    ACTIVE_BOOKING_STATUSES,
    TERMINAL_BOOKING_STATUSES,
    BookingStatus,
    IdentityType,
    PaymentStatus,
    RoomStatus,
    RoomType,
    UserRole,
)
from hotelms.models.base.mixins import TimestampMixin

__all__ = [
    "Base",
    "BaseModel",
    "enum_column",
    "TimestampMixin",
    "UserRole",
    "RoomType",
    "RoomStatus",
    "BookingStatus",
    "PaymentStatus",
    "IdentityType",
    "ACTIVE_BOOKING_STATUSES",
    "TERMINAL_BOOKING_STATUSES",
]
