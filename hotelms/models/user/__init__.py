from hotelms.models.user.guest_profile import GuestProfile
from hotelms.models.user.user import User

__all__ = ["User", "GuestProfile"]
