"""
Booking repository: overlap queries, listings and dashboard aggregates.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from hotelms.models.base import ACTIVE_BOOKING_STATUSES, BookingStatus
from hotelms.models.booking import Booking
from hotelms.repositories.base.base_repository import BaseRepository


class BookingRepository(BaseRepository[Booking]):
    """Data access for bookings."""

    resource_name = "Booking"

    def __init__(self, db: Session):
        super().__init__(Booking, db)

    def _overlap_query(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
        exclude_booking_id: Optional[str] = None,
    ):
        # [a, b) and [check_in, check_out) overlap iff check_in < b and check_out > a
        stmt = select(Booking).where(
            Booking.room_id == str(room_id),
            Booking.status.in_(list(ACTIVE_BOOKING_STATUSES)),
            Booking.check_in_date < check_out,
            Booking.check_out_date > check_in,
        )
        if exclude_booking_id is not None:
            stmt = stmt.where(Booking.id != str(exclude_booking_id))
        return stmt

    def find_overlapping(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
        exclude_booking_id: Optional[str] = None,
    ) -> List[Booking]:
        """
        Active bookings of ``room_id`` whose stay overlaps
        ``[check_in, check_out)``.

        Args:
            exclude_booking_id: Booking to ignore (for re-checking an existing booking)
        """
        stmt = self._overlap_query(room_id, check_in, check_out, exclude_booking_id)
        stmt = stmt.order_by(Booking.check_in_date)
        return list(self.db.scalars(stmt).unique())

    def has_overlap(
        self,
        room_id: str,
        check_in: date,
        check_out: date,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        stmt = self._overlap_query(room_id, check_in, check_out, exclude_booking_id)
        exists_stmt = select(stmt.with_only_columns(Booking.id).limit(1).exists())
        return bool(self.db.scalar(exists_stmt))

    def find_by_user(self, user_id: str) -> List[Booking]:
        """Bookings owned by ``user_id``, newest first."""
        stmt = (
            select(Booking)
            .where(Booking.user_id == str(user_id))
            .order_by(Booking.created_at.desc(), Booking.check_in_date.desc())
        )
        return list(self.db.scalars(stmt).unique())

    def search(
        self,
        status: Optional[BookingStatus] = None,
        room_id: Optional[str] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[Booking]:
        """
        Filtered listing for staff.

        With both dates, returns bookings touching ``[from_date, to_date]``;
        with only ``from_date``, bookings checking in on or after it; with only
        ``to_date``, bookings checking out on or before it.
        """
        stmt = select(Booking)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        if room_id is not None:
            stmt = stmt.where(Booking.room_id == str(room_id))

        if from_date and to_date:
            stmt = stmt.where(
                Booking.check_in_date <= to_date,
                Booking.check_out_date >= from_date,
            )
        elif from_date:
            stmt = stmt.where(Booking.check_in_date >= from_date)
        elif to_date:
            stmt = stmt.where(Booking.check_out_date <= to_date)

        stmt = stmt.order_by(Booking.created_at.desc(), Booking.check_in_date.desc())
        return list(self.db.scalars(stmt).unique())

    def count_blocking_for_room(self, room_id: str) -> int:
        """Bookings that prevent the room from being deleted (any non-cancelled)."""
        stmt = select(func.count(Booking.id)).where(
            Booking.room_id == str(room_id),
            Booking.status != BookingStatus.CANCELLED,
        )
        return self.db.scalar(stmt) or 0

    def delete_cancelled_for_room(self, room_id: str) -> int:
        stmt = delete(Booking).where(
            Booking.room_id == str(room_id),
            Booking.status == BookingStatus.CANCELLED,
        )
        result = self.db.execute(stmt, execution_options={"synchronize_session": "fetch"})
        return result.rowcount or 0

    # ==================== Aggregates ====================

    def count_by_status(self, status: BookingStatus) -> int:
        stmt = select(func.count(Booking.id)).where(Booking.status == status)
        return self.db.scalar(stmt) or 0

    def count_check_ins_on(self, day: date) -> int:
        stmt = select(func.count(Booking.id)).where(
            Booking.check_in_date == day,
            Booking.status != BookingStatus.CANCELLED,
        )
        return self.db.scalar(stmt) or 0

    def count_check_outs_on(self, day: date) -> int:
        stmt = select(func.count(Booking.id)).where(
            Booking.check_out_date == day,
            Booking.status != BookingStatus.CANCELLED,
        )
        return self.db.scalar(stmt) or 0

    def revenue_created_between(self, start: datetime, end: datetime) -> Decimal:
        """Sum of non-cancelled booking totals created in ``[start, end)``."""
        stmt = select(func.coalesce(func.sum(Booking.total_price), 0)).where(
            Booking.created_at >= start,
            Booking.created_at < end,
            Booking.status != BookingStatus.CANCELLED,
        )
        return Decimal(str(self.db.scalar(stmt) or 0))
