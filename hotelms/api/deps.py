# hotelms/api/deps.py
"""
FastAPI dependencies: database session, settings, authentication and
service factories.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from hotelms.api import deps

    router = APIRouter()

    @router.get("/me")
    def read_me(principal: Principal = Depends(deps.get_current_principal)):
        return principal
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from hotelms.config.settings import Settings, get_settings
from hotelms.core.logging import user_id as user_id_var
from hotelms.core.security import PasswordHasher, build_jwt_manager
from hotelms.db.session import get_db
from hotelms.services.auth import AuthService
from hotelms.services.booking import BookingService
from hotelms.services.common.errors import AuthenticationError
from hotelms.services.common.permissions import Principal
from hotelms.services.dashboard import DashboardService
from hotelms.services.guest import GuestService
from hotelms.services.room import RoomService

__all__ = [
    "get_db",
    "get_app_settings",
    "get_current_principal",
    "get_auth_service",
    "get_room_service",
    "get_booking_service",
    "get_guest_service",
    "get_dashboard_service",
]

bearer_scheme = HTTPBearer(auto_error=False)


# --- Settings & database ---------------------------------------------------------

def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()


# --- Services --------------------------------------------------------------------

def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(
        db,
        password_hasher=PasswordHasher(rounds=settings.PASSWORD_BCRYPT_ROUNDS),
        jwt_manager=build_jwt_manager(settings),
    )


def get_room_service(db: Session = Depends(get_db)) -> RoomService:
    return RoomService(db)


def get_booking_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> BookingService:
    return BookingService(db, settings=settings)


def get_guest_service(db: Session = Depends(get_db)) -> GuestService:
    return GuestService(db)


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)


# --- Authentication --------------------------------------------------------------

def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> Principal:
    """
    Resolve the bearer token into the calling principal.

    Raises:
        AuthenticationError: Missing, invalid or expired token
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    principal = auth_service.principal_from_token(credentials.credentials)
    user_id_var.set(principal.user_id)
    return principal
