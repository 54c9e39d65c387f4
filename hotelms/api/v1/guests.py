"""
Guest profile endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends

from hotelms.api import deps
from hotelms.schemas.common import MessageResponse
from hotelms.schemas.guest import GuestAdminUpdate, GuestProfileResponse, GuestProfileUpdate
from hotelms.services.common.permissions import Principal
from hotelms.services.guest import GuestService

router = APIRouter(prefix="/guests", tags=["Guest Management"])


@router.get("/profile", response_model=GuestProfileResponse)
def get_my_profile(
    principal: Principal = Depends(deps.get_current_principal),
    guest_service: GuestService = Depends(deps.get_guest_service),
):
    return guest_service.get_my_profile(principal)


@router.post("/profile", response_model=GuestProfileResponse)
def save_my_profile(
    payload: GuestProfileUpdate,
    principal: Principal = Depends(deps.get_current_principal),
    guest_service: GuestService = Depends(deps.get_guest_service),
):
    return guest_service.upsert_my_profile(principal, payload)


@router.get("", response_model=List[GuestProfileResponse])
def list_guests(
    principal: Principal = Depends(deps.get_current_principal),
    guest_service: GuestService = Depends(deps.get_guest_service),
):
    return guest_service.list_guests(principal)


@router.get("/{guest_id}", response_model=GuestProfileResponse)
def get_guest(
    guest_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    guest_service: GuestService = Depends(deps.get_guest_service),
):
    return guest_service.get_guest(principal, guest_id)


@router.put("/{guest_id}", response_model=GuestProfileResponse)
def update_guest(
    guest_id: str,
    payload: GuestAdminUpdate,
    principal: Principal = Depends(deps.get_current_principal),
    guest_service: GuestService = Depends(deps.get_guest_service),
):
    return guest_service.update_guest(principal, guest_id, payload)


@router.delete("/{guest_id}", response_model=MessageResponse)
def delete_guest(
    guest_id: str,
    principal: Principal = Depends(deps.get_current_principal),
    guest_service: GuestService = Depends(deps.get_guest_service),
):
    guest_service.delete_guest(principal, guest_id)
    return MessageResponse(message="Guest deleted successfully")
