from sqlalchemy.orm import Session

from api.dashboard.dashboard_service import (
    get_total_events,
    get_upcoming_count,
    get_total_volunteers,
    get_my_participations,
    get_upcoming_events,
    get_recent_notifications,
)
from api.dashboard.dashboard_schema import DashboardResponse
from api.notifications.notifications_schema import NotificationRead
from utils.datetime_utils import utcnow


def assemble_dashboard(db: Session, user_id: int) -> DashboardResponse:
    now = utcnow()
    return DashboardResponse(
        total_events=get_total_events(db),
        upcoming_events_count=get_upcoming_count(db, now),
        total_volunteers=get_total_volunteers(db),
        my_participations=get_my_participations(db, user_id),
        upcoming_events=get_upcoming_events(db, user_id, now),
        recent_notifications=[
            NotificationRead.model_validate(n) for n in get_recent_notifications(db, user_id)
        ],
    )
