from hotelms.schemas.room.room_base import (
    RoomAvailabilityUpdate,
    RoomCreate,
    RoomFilters,
    RoomStatusUpdate,
    RoomUpdate,
)
from hotelms.schemas.room.room_response import (
    RoomAvailabilityResponse,
    RoomResponse,
    RoomSummary,
)

__all__ = [
    "RoomCreate",
    "RoomUpdate",
    "RoomAvailabilityUpdate",
    "RoomStatusUpdate",
    "RoomFilters",
    "RoomResponse",
    "RoomSummary",
    "RoomAvailabilityResponse",
]
