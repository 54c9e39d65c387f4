# --- File: hotelms/schemas/room/room_response.py ---
"""
Room response schemas.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import Field

from hotelms.models.base import RoomStatus, RoomType
from hotelms.schemas.common.base import BaseDBSchema, BaseSchema

__all__ = ["RoomResponse", "RoomSummary", "RoomAvailabilityResponse"]


class RoomSummary(BaseSchema):
    """Compact room view embedded in booking responses."""

    id: str
    room_number: str
    room_type: RoomType
    price_per_night: float


class RoomResponse(BaseDBSchema):
    room_number: str
    room_type: RoomType
    capacity: int
    price_per_night: float
    floor: Optional[int] = None
    description: Optional[str] = None
    amenities: List[str] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    status: RoomStatus
    is_available: bool


class RoomAvailabilityResponse(BaseSchema):
    """Date-range availability of one room."""

    room_id: str
    check_in_date: date
    check_out_date: date
    available: bool
