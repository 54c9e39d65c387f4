from hotelms.services.guest.guest_service import GuestService, merge_address

__all__ = ["GuestService", "merge_address"]
