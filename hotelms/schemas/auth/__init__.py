from hotelms.schemas.auth.auth_schemas import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
    UserSummary,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserSummary",
    "UserResponse",
    "TokenResponse",
    "RegisterResponse",
]
