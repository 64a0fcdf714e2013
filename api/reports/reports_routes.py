from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.role_middleware import admin_required
from api.reports.reports_schema import DashboardStats
from api.reports.reports_controller import get_stats, get_report

# Mounted under /api like every other router
router = APIRouter(prefix="/reports", tags=["Reports"], dependencies=[Depends(admin_required)])

# Administrative surface served from the site root
root_router = APIRouter(tags=["Reports"], dependencies=[Depends(admin_required)])


@router.get("/stats", response_model=DashboardStats)
@root_router.get("/stats", response_model=DashboardStats)
def stats(db: Session = Depends(get_db)):
    return get_stats(db)


@router.get("/{report_type}")
@root_router.get("/reports/{report_type}")
def report(
    report_type: str,
    format: str = Query("json", pattern="^(json|csv)$"),
    db: Session = Depends(get_db),
):
    """events | volunteers; ?format=csv downloads the export."""
    return get_report(db, report_type, format=format)
