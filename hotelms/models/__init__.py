"""ORM models. Importing this package registers every table on ``Base.metadata``."""

from hotelms.models.base import Base
from hotelms.models.booking import Booking
from hotelms.models.room import Room
from hotelms.models.user import GuestProfile, User

__all__ = [
    "Base",
    "Booking",
    "GuestProfile",
    "Room",
    "User",
]
