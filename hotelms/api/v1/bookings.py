"""
Booking endpoints.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from hotelms.api import deps
from hotelms.models.base import BookingStatus
from hotelms.schemas.booking import (
    BookingActionResponse,
    BookingCreate,
    BookingFilters,
    BookingResponse,
    BookingStatusUpdate,
    BookingUpdate,
)
from hotelms.schemas.common import MessageResponse
from hotelms.services.booking import BookingService
from hotelms.services.common.permissions import Principal

router = APIRouter(prefix="/bookings", tags=["Booking Management"])


@router.get("/my-bookings", response_model=List[BookingResponse])
def list_my_bookings(
    principal: Principal = Depends(deps.get_current_principal),
    booking_service: BookingService = Depends(deps.get_booking_service),
):
    return booking_service.list_my_bookings(principal)


@router.get("/admin/all", response_model=List[BookingResponse])
def list_all_bookings(
    booking_status: Optional[BookingStatus] = Query(default=None, alias="status"),
    room_id: Optional[str] = Query(default=None),
    from_date: Optional[date] = Query(default=None),
    to_date: Optional[date] = Query(default=None),
    principal: Principal = Depends(deps.get_current_principal),
    booking_service: BookingService = Depends(deps.get_booking_service),
):
    filters = BookingFilters(
        status=booking_status,
        room_id=room_id,
        from_date=from_date,
        to_date=to_date,
    )
    return booking_service.list_bookings(principal, filters)


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    principal: Principal = Depends(deps.get_current_principal),
    booking_service: BookingService = Depends(deps.get_booking_service),
):
    return booking_service.create_booking(principal, payload)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    booking_service: BookingService = Depends(deps.get_booking_service),
):
    return booking_service.get_booking(booking_id, principal)


@router.put("/{booking_id}", response_model=BookingActionResponse)
def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    principal: Principal = Depends(deps.get_current_principal),
    booking_service: BookingService = Depends(deps.get_booking_service),
):
    booking = booking_service.update_booking(booking_id, payload, principal)
    return BookingActionResponse(
        message="Booking updated successfully",
        booking=BookingResponse.model_validate(booking),
    )


@router.patch("/{booking_id}/cancel", response_model=BookingActionResponse)
def cancel_booking(
    booking_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    booking_service: BookingService = Depends(deps.get_booking_service),
):
    booking = booking_service.cancel_booking(booking_id, principal)
    return BookingActionResponse(
        message="Booking cancelled successfully",
        booking=BookingResponse.model_validate(booking),
    )


@router.patch("/{booking_id}/status", response_model=BookingActionResponse)
def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    principal: Principal = Depends(deps.get_current_principal),
    booking_service: BookingService = Depends(deps.get_booking_service),
):
    booking = booking_service.update_booking_status(
        booking_id,
        payload.status,
        principal,
        payment_status=payload.payment_status,
    )
    return BookingActionResponse(
        message="Booking updated successfully",
        booking=BookingResponse.model_validate(booking),
    )


@router.delete("/{booking_id}", response_model=MessageResponse)
def delete_booking(
    booking_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    booking_service: BookingService = Depends(deps.get_booking_service),
):
    booking_service.delete_booking(booking_id, principal)
    return MessageResponse(message="Booking deleted successfully")
