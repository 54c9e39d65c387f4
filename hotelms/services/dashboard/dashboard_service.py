"""
Admin dashboard statistics.
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy.orm import Session

from hotelms.models.base import BookingStatus
from hotelms.models.room import Room
from hotelms.repositories.booking import BookingRepository
from hotelms.repositories.room import RoomRepository
from hotelms.schemas.dashboard import DashboardStats
from hotelms.services.base import BaseService
from hotelms.services.common.permissions import Action, Principal, require
from hotelms.utils.date_utils import today_utc


def month_bounds(day: date):
    """``[first day of month, first day of next month)`` as naive UTC datetimes."""
    start = datetime(day.year, day.month, 1)
    if day.month == 12:
        end = datetime(day.year + 1, 1, 1)
    else:
        end = datetime(day.year, day.month + 1, 1)
    return start, end


class DashboardService(BaseService[Room, RoomRepository]):
    """Read-only aggregates for the admin dashboard."""

    def __init__(self, db_session: Session):
        super().__init__(RoomRepository(db_session), db_session)
        self.bookings = BookingRepository(db_session)

    def get_admin_stats(self, principal: Principal, today: Optional[date] = None) -> DashboardStats:
        require(principal, Action.DASHBOARD_VIEW)
        today = today or today_utc()

        total_rooms = self.repository.count()
        available_rooms = self.repository.count_available()
        occupancy = 0.0
        if total_rooms:
            occupancy = round((total_rooms - available_rooms) / total_rooms * 100, 2)

        start, end = month_bounds(today)
        return DashboardStats(
            as_of=today,
            total_rooms=total_rooms,
            available_rooms=available_rooms,
            occupancy_rate=occupancy,
            total_bookings=self.bookings.count(),
            pending_bookings=self.bookings.count_by_status(BookingStatus.PENDING),
            confirmed_bookings=self.bookings.count_by_status(BookingStatus.CONFIRMED),
            today_check_ins=self.bookings.count_check_ins_on(today),
            today_check_outs=self.bookings.count_check_outs_on(today),
            monthly_revenue=float(self.bookings.revenue_created_between(start, end)),
        )
