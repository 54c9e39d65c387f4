# --- File: hotelms/schemas/guest/guest_schemas.py ---
"""
Guest profile schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field

from hotelms.models.base import IdentityType
from hotelms.schemas.auth.auth_schemas import UserResponse
from hotelms.schemas.common.base import BaseDBSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "Address",
    "GuestProfileUpdate",
    "GuestAdminUpdate",
    "GuestProfileResponse",
]


class Address(BaseSchema):
    """Postal address; every part is optional so updates can merge."""

    street: Optional[str] = Field(default=None, max_length=200)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    zip_code: Optional[str] = Field(default=None, max_length=20)
    country: Optional[str] = Field(default=None, max_length=100)


class GuestProfileUpdate(BaseUpdateSchema):
    """Fields a guest may set on their own profile."""

    full_name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[Address] = None
    identity_type: Optional[IdentityType] = None
    identity_number: Optional[str] = Field(default=None, max_length=50)
    preferences: Optional[str] = Field(default=None, max_length=2000)


class GuestAdminUpdate(GuestProfileUpdate):
    """Staff-side update; adds contact email and the staff-only fields."""

    email: Optional[EmailStr] = None
    vip: Optional[bool] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class GuestProfileResponse(BaseDBSchema):
    user_id: str
    full_name: str
    email: str
    phone: Optional[str] = None
    address: Address = Field(default_factory=Address)
    identity_type: Optional[IdentityType] = None
    identity_number: Optional[str] = None
    preferences: Optional[str] = None
    vip: bool = False
    notes: Optional[str] = None
    user: Optional[UserResponse] = None
