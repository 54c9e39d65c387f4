from hotelms.utils.date_utils import now_utc, today_utc

__all__ = ["now_utc", "today_utc"]
