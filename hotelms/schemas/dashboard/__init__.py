from hotelms.schemas.dashboard.dashboard_schemas import DashboardStats

__all__ = ["DashboardStats"]
