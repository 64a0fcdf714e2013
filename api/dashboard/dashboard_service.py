from datetime import datetime
from typing import List

from sqlalchemy.orm import Session

from api.user.user_model import User, UserRole
from api.events.events_model import Event
from api.events.events_schema import EventRead
from api.events.events_service import EventService, ACTIVE_STATUSES
from api.events.participation_model import Participation
from api.notifications.notifications_model import Notification

DASHBOARD_EVENTS_LIMIT = 3
DASHBOARD_NOTIFICATIONS_LIMIT = 3


# ─── Counters ─────────────────────────────────────────────────────────────────

def get_total_events(db: Session) -> int:
    return db.query(Event).count()


def get_upcoming_count(db: Session, now: datetime) -> int:
    return EventService(db).count_upcoming(now)


def get_total_volunteers(db: Session) -> int:
    return db.query(User).filter(User.role == UserRole.volunteer).count()


def get_my_participations(db: Session, user_id: int) -> int:
    """Joined or attended rows; cancelled ones are not counted."""
    return (
        db.query(Participation)
          .filter(
              Participation.volunteer_id == user_id,
              Participation.status.in_(ACTIVE_STATUSES),
          )
          .count()
    )


# ─── Lists ────────────────────────────────────────────────────────────────────

def get_upcoming_events(db: Session, user_id: int, now: datetime) -> List[EventRead]:
    service = EventService(db)
    events = service.list_upcoming(now, limit=DASHBOARD_EVENTS_LIMIT)
    return service.to_read(events, viewer_id=user_id)


def get_recent_notifications(db: Session, user_id: int) -> List[Notification]:
    return (
        db.query(Notification)
          .filter(Notification.user_id == user_id)
          .order_by(Notification.created_at.desc(), Notification.id.desc())
          .limit(DASHBOARD_NOTIFICATIONS_LIMIT)
          .all()
    )
