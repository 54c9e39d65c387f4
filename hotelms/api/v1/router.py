"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hotel management system
"""
from fastapi import APIRouter, Request

from hotelms.api.v1 import auth, bookings, dashboard, guests, rooms
from hotelms.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(auth.router)
router.include_router(rooms.router)
router.include_router(bookings.router)
router.include_router(guests.router)
router.include_router(dashboard.router)


@router.get("/health", tags=["Health"])
def health_check(request: Request):
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.API_VERSION,
        "environment": settings.ENVIRONMENT,
    }
