"""
Room endpoints. Listing and detail are public; mutations are admin only.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from hotelms.api import deps
from hotelms.models.base import RoomStatus, RoomType
from hotelms.schemas.common import MessageResponse
from hotelms.schemas.room import (
    RoomAvailabilityResponse,
    RoomAvailabilityUpdate,
    RoomCreate,
    RoomFilters,
    RoomResponse,
    RoomStatusUpdate,
    RoomUpdate,
)
from hotelms.services.common.permissions import Principal
from hotelms.services.room import RoomService

router = APIRouter(prefix="/rooms", tags=["Room Management"])


@router.get("", response_model=List[RoomResponse])
def list_available_rooms(room_service: RoomService = Depends(deps.get_room_service)):
    return room_service.list_available_rooms()


@router.get("/admin/all", response_model=List[RoomResponse])
def list_all_rooms(
    room_type: Optional[RoomType] = Query(default=None),
    room_status: Optional[RoomStatus] = Query(default=None, alias="status"),
    is_available: Optional[bool] = Query(default=None),
    principal: Principal = Depends(deps.get_current_principal),
    room_service: RoomService = Depends(deps.get_room_service),
):
    filters = RoomFilters(room_type=room_type, status=room_status, is_available=is_available)
    return room_service.list_rooms(principal, filters)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: str, room_service: RoomService = Depends(deps.get_room_service)):
    return room_service.get_room(room_id)


@router.get("/{room_id}/availability", response_model=RoomAvailabilityResponse)
def check_room_availability(
    room_id: str,
    check_in: date = Query(..., description="First night of the stay"),
    check_out: date = Query(..., description="Departure date"),
    room_service: RoomService = Depends(deps.get_room_service),
):
    available = room_service.check_availability(room_id, check_in, check_out)
    return RoomAvailabilityResponse(
        room_id=room_id,
        check_in_date=check_in,
        check_out_date=check_out,
        available=available,
    )


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreate,
    principal: Principal = Depends(deps.get_current_principal),
    room_service: RoomService = Depends(deps.get_room_service),
):
    return room_service.create_room(principal, payload)


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: str,
    payload: RoomUpdate,
    principal: Principal = Depends(deps.get_current_principal),
    room_service: RoomService = Depends(deps.get_room_service),
):
    return room_service.update_room(principal, room_id, payload)


@router.patch("/{room_id}/availability", response_model=RoomResponse)
def set_room_availability(
    room_id: str,
    payload: RoomAvailabilityUpdate,
    principal: Principal = Depends(deps.get_current_principal),
    room_service: RoomService = Depends(deps.get_room_service),
):
    return room_service.set_room_availability(principal, room_id, payload.is_available)


@router.patch("/{room_id}/status", response_model=RoomResponse)
def set_room_status(
    room_id: str,
    payload: RoomStatusUpdate,
    principal: Principal = Depends(deps.get_current_principal),
    room_service: RoomService = Depends(deps.get_room_service),
):
    return room_service.set_room_status(principal, room_id, payload.status)


@router.delete("/{room_id}", response_model=MessageResponse)
def delete_room(
    room_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    room_service: RoomService = Depends(deps.get_room_service),
):
    room_service.delete_room(principal, room_id)
    return MessageResponse(message="Room deleted successfully")
