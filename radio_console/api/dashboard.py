"""Routes Tableau de bord / Dashboard API routes."""

from fastapi import APIRouter, Depends

from radio_console.api.deps import get_dashboard_service
from radio_console.schemas.dashboard import DashboardStats
from radio_console.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/", response_model=DashboardStats)
async def dashboard(service: DashboardService = Depends(get_dashboard_service)):
    """Compteurs et dernières activités / Counters and latest activity."""
    return await service.stats()
