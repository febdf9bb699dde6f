"""Dashboard API endpoints."""
from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.schemas.dashboard import DashboardStats
from app.services.employees import get_dashboard_stats
from app.services.record_store import SqlRecordStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardStats)
def get_dashboard(store: SqlRecordStore = Depends(get_store)):
    """Employee counts per status for the overview page."""
    return DashboardStats(**get_dashboard_stats(store))
