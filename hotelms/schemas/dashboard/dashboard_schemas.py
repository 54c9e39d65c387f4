# --- File: hotelms/schemas/dashboard/dashboard_schemas.py ---
"""
Admin dashboard statistics.
"""

from __future__ import annotations

from datetime import date

from pydantic import Field

from hotelms.schemas.common.base import BaseSchema

__all__ = ["DashboardStats"]


class DashboardStats(BaseSchema):
    as_of: date
    total_rooms: int = Field(..., ge=0)
    available_rooms: int = Field(..., ge=0)
    occupancy_rate: float = Field(..., ge=0, le=100, description="Percent of rooms not available")
    total_bookings: int = Field(..., ge=0)
    pending_bookings: int = Field(..., ge=0)
    confirmed_bookings: int = Field(..., ge=0)
    today_check_ins: int = Field(..., ge=0)
    today_check_outs: int = Field(..., ge=0)
    monthly_revenue: float = Field(..., ge=0, description="Non-cancelled bookings created this month")
