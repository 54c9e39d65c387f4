# --- File: hotelms/schemas/room/room_base.py ---
"""
Room request schemas: creation, partial update, availability and status.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import Field, field_validator

from hotelms.models.base import RoomStatus, RoomType
from hotelms.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "RoomCreate",
    "RoomUpdate",
    "RoomAvailabilityUpdate",
    "RoomStatusUpdate",
    "RoomFilters",
]

Price = Annotated[
    Decimal,
    Field(ge=0, max_digits=10, decimal_places=2, description="Price per night"),
]


def _normalise_room_number(v: str) -> str:
    v = " ".join(v.strip().upper().split())
    if not v:
        raise ValueError("Room number cannot be empty")
    return v


def _dedupe(values: List[str]) -> List[str]:
    """Strip, drop blanks and keep the first occurrence of each value."""
    seen = []
    for value in values:
        value = value.strip()
        if value and value not in seen:
            seen.append(value)
    return seen


class RoomCreate(BaseCreateSchema):
    """Payload for creating a room."""

    room_number: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Room number, unique across the hotel",
        examples=["101", "R101"],
    )
    room_type: RoomType = Field(..., description="Room category")
    capacity: int = Field(..., ge=1, le=10, description="Maximum number of guests")
    price_per_night: Price
    floor: Optional[int] = Field(default=None, ge=0, le=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    amenities: List[str] = Field(
        default_factory=list,
        examples=[["WiFi", "TV", "Mini Bar"]],
    )
    images: List[str] = Field(
        default_factory=list,
        max_length=20,
        description="Ordered image references",
    )
    status: RoomStatus = RoomStatus.READY
    is_available: bool = True

    @field_validator("room_number")
    @classmethod
    def validate_room_number(cls, v: str) -> str:
        return _normalise_room_number(v)

    @field_validator("amenities")
    @classmethod
    def validate_amenities(cls, v: List[str]) -> List[str]:
        return _dedupe(v)


class RoomUpdate(BaseUpdateSchema):
    """Partial room update. Only fields present in the request are applied."""

    room_number: Optional[str] = Field(default=None, min_length=1, max_length=20)
    room_type: Optional[RoomType] = None
    capacity: Optional[int] = Field(default=None, ge=1, le=10)
    price_per_night: Optional[Price] = None
    floor: Optional[int] = Field(default=None, ge=0, le=200)
    description: Optional[str] = Field(default=None, max_length=2000)
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = Field(default=None, max_length=20)
    status: Optional[RoomStatus] = None
    is_available: Optional[bool] = None

    @field_validator("room_number")
    @classmethod
    def validate_room_number(cls, v: Optional[str]) -> Optional[str]:
        return _normalise_room_number(v) if v is not None else v

    @field_validator("amenities")
    @classmethod
    def validate_amenities(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _dedupe(v) if v is not None else v


class RoomAvailabilityUpdate(BaseSchema):
    is_available: bool


class RoomStatusUpdate(BaseSchema):
    status: RoomStatus


class RoomFilters(BaseSchema):
    """Admin listing filters."""

    room_type: Optional[RoomType] = None
    status: Optional[RoomStatus] = None
    is_available: Optional[bool] = None
