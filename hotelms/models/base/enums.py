"""
Database enums shared by models and schemas.

Values are the strings stored in the database and exchanged over the API.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    USER = "user"
    ADMIN = "admin"
    STAFF = "staff"


class RoomType(str, enum.Enum):
    """Room category."""
    SINGLE = "Single"
    DOUBLE = "Double"
    TWIN = "Twin"
    SUITE = "Suite"
    DELUXE = "Deluxe"
    STANDARD = "Standard"


class RoomStatus(str, enum.Enum):
    """Housekeeping status of a room."""
    READY = "Ready"
    OCCUPIED = "Occupied"
    CLEANING = "Cleaning"
    MAINTENANCE = "Maintenance"


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class PaymentStatus(str, enum.Enum):
    """Payment state of a booking."""
    PENDING = "Pending"
    PAID = "Paid"
    REFUNDED = "Refunded"
    FAILED = "Failed"


class IdentityType(str, enum.Enum):
    """Identity document presented by a guest."""
    PASSPORT = "Passport"
    DRIVER_LICENSE = "Driver License"
    NATIONAL_ID = "National ID"
    OTHER = "Other"


# Statuses that hold a room for their date range
ACTIVE_BOOKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})
TERMINAL_BOOKING_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.COMPLETED})
