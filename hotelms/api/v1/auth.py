"""
Authentication endpoints: register, login and profile.
"""

from fastapi import APIRouter, Depends, status

from hotelms.api import deps
from hotelms.core.logging import get_logger
from hotelms.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
)
from hotelms.services.auth import AuthService
from hotelms.services.common.permissions import Principal

router = APIRouter(prefix="/auth", tags=["Authentication"])

logger = get_logger(__name__)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    auth_service: AuthService = Depends(deps.get_auth_service),
):
    user = auth_service.register(payload)
    return RegisterResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(deps.get_auth_service),
):
    user, token = auth_service.authenticate(payload)
    return TokenResponse(
        access_token=token,
        expires_in=auth_service.jwt_manager.expires_in_seconds,
        user=UserResponse.model_validate(user),
    )


@router.get("/profile", response_model=UserResponse)
def get_profile(
    principal: Principal = Depends(deps.get_current_principal),
    auth_service: AuthService = Depends(deps.get_auth_service),
):
    return auth_service.get_profile(principal)
