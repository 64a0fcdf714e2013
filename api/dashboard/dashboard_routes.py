from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from api.dashboard.dashboard_controller import assemble_dashboard
from api.dashboard.dashboard_schema import DashboardResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Home screen for the signed-in volunteer"
)
def dashboard(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    """
    Returns:
      - event and volunteer totals
      - the caller's participation count
      - the next three upcoming events with counts
      - the three latest notifications
    """
    return assemble_dashboard(db=db, user_id=current_user["id"])
