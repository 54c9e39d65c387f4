# --- File: hotelms/schemas/auth/auth_schemas.py ---
"""
Registration, login and account schemas.
"""

from __future__ import annotations

from pydantic import EmailStr, Field

from hotelms.models.base import UserRole
from hotelms.schemas.common.base import BaseSchema

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserSummary",
    "UserResponse",
    "TokenResponse",
    "RegisterResponse",
]


class RegisterRequest(BaseSchema):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseSchema):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserSummary(BaseSchema):
    id: str
    name: str
    email: str


class UserResponse(UserSummary):
    role: UserRole


class TokenResponse(BaseSchema):
    message: str = "Login successful"
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class RegisterResponse(BaseSchema):
    message: str = "User registered successfully"
    user: UserResponse
