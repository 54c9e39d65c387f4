"""
Admin dashboard endpoint.
"""

from fastapi import APIRouter, Depends

from hotelms.api import deps
from hotelms.schemas.dashboard import DashboardStats
from hotelms.services.common.permissions import Principal
from hotelms.services.dashboard import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    principal: Principal = Depends(deps.get_current_principal),
    dashboard_service: DashboardService = Depends(deps.get_dashboard_service),
):
    return dashboard_service.get_admin_stats(principal)
