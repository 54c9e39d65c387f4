from hotelms.services.dashboard.dashboard_service import DashboardService

__all__ = ["DashboardService"]
