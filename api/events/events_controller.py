import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from api.events.events_schema import EventCreate, EventRead, EventUpdate
from api.events.events_service import EventService, ACTIVE_STATUSES
from api.events.participation_model import Participation
from api.notifications.notifications_service import event_deleted
from helpers.errors import InvalidInput
from utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)

EVENT_FILTERS = ("all", "upcoming", "joined")


def list_events(
    db: Session,
    current_user: dict,
    filter: str = "all",
    q: Optional[str] = None,
) -> List[EventRead]:
    if filter not in EVENT_FILTERS:
        raise InvalidInput(f"filter must be one of {', '.join(EVENT_FILTERS)}")

    service = EventService(db)
    if filter == "upcoming":
        events = service.list_upcoming(utcnow(), search=q)
    elif filter == "joined":
        events = service.list_joined_by(current_user["id"], search=q)
    else:
        events = service.list_all(search=q)
    return service.to_read(events, viewer_id=current_user["id"])


def get_event(db: Session, event_id: int, current_user: dict) -> EventRead:
    service = EventService(db)
    return service.to_read([service.get(event_id)], viewer_id=current_user["id"])[0]


def create_event(db: Session, data: EventCreate, current_user: dict) -> EventRead:
    service = EventService(db)
    event = service.create(data, current_user)
    return service.to_read([event], viewer_id=current_user["id"])[0]


def update_event(db: Session, event_id: int, data: EventUpdate, current_user: dict) -> EventRead:
    patch = data.model_dump(exclude_unset=True)
    for field in ("title", "description", "date", "location"):
        if field in patch and patch[field] is None:
            raise InvalidInput(f"{field} cannot be null")

    service = EventService(db)
    event = service.update(event_id, patch, current_user)
    return service.to_read([event], viewer_id=current_user["id"])[0]


def delete_event(db: Session, event_id: int, current_user: dict) -> None:
    service = EventService(db)
    event = service.get(event_id)
    title = event.title
    volunteer_ids = [
        volunteer_id
        for (volunteer_id,) in db.query(Participation.volunteer_id)
        .filter(Participation.event_id == event_id, Participation.status.in_(ACTIVE_STATUSES))
        .all()
    ]

    service.delete(event_id, current_user)

    # Fire off listeners once the delete is committed
    event_deleted.send(
        None,
        db=db,
        event_id=event_id,
        title=title,
        volunteer_ids=[v for v in volunteer_ids if v != current_user["id"]],
    )
