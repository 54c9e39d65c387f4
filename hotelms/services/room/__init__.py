from hotelms.services.room.room_service import RoomService

__all__ = ["RoomService"]
