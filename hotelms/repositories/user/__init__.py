from hotelms.repositories.user.user_repository import GuestProfileRepository, UserRepository

__all__ = ["UserRepository", "GuestProfileRepository"]
