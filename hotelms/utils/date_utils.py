# hotelms/utils/date_utils.py
"""
Date and time helpers.

All "UTC" helpers use timezone-aware datetimes with ``timezone.utc`` so the
booking "today" rule agrees with stored timestamps.
"""

from datetime import date, datetime, timezone

UTC = timezone.utc


def now_utc() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(UTC)


def today_utc() -> date:
    """Return today's date in UTC."""
    return now_utc().date()
