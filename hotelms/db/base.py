"""SQLAlchemy Base with every model registered on its metadata."""
from hotelms.models import Base, Booking, GuestProfile, Room, User  # noqa: F401

__all__ = ["Base"]
