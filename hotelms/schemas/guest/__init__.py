from hotelms.schemas.guest.guest_schemas import (
    Address,
    GuestAdminUpdate,
    GuestProfileResponse,
    GuestProfileUpdate,
)

__all__ = ["Address", "GuestProfileUpdate", "GuestAdminUpdate", "GuestProfileResponse"]
