from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from effitrack.core.schemas import ApiResponse
from effitrack.database import get_db
from effitrack.schemas.dashboard import DashboardStats
from effitrack.services.aggregation_service import safe_dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=ApiResponse[DashboardStats])
def get_dashboard_stats(db: Session = Depends(get_db)):
    """
    Dashboard counters. A failed read still answers 200 with zero-valued
    stats and `success: false` so the page can show a notice instead of breaking.
    """
    stats, error = safe_dashboard_stats(db)
    if error:
        return ApiResponse[DashboardStats].fail(error, code="STATS_UNAVAILABLE", data=stats)
    return ApiResponse[DashboardStats].ok(stats)
