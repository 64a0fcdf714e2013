import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from api.events.events_model import Event
from api.events.events_schema import EventCreate, EventRead
from api.events.participation_model import Participation, ParticipationStatus
from helpers.errors import Forbidden, NotFound

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (ParticipationStatus.joined, ParticipationStatus.attended)


def is_admin(actor: dict) -> bool:
    return actor.get("role") == "admin"


class EventService:
    def __init__(self, db: Session):
        self.db = db

    # ─── Writes ────────────────────────────────────────────────────────────────
    def create(self, data: EventCreate, actor: dict) -> Event:
        if not is_admin(actor):
            raise Forbidden("Only admins can create events")

        event = Event(
            title       = data.title,
            description = data.description,
            date        = data.date,
            location    = data.location,
            created_by  = actor["id"],
        )
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)
        logger.info("event %s created by account %s", event.id, actor["id"])
        return event

    def update(self, event_id: int, patch: dict, actor: dict) -> Event:
        event = self.get(event_id)
        self._ensure_can_modify(event, actor)

        for field, value in patch.items():
            setattr(event, field, value)

        self.db.commit()
        self.db.refresh(event)
        logger.info("event %s updated by account %s", event.id, actor["id"])
        return event

    def delete(self, event_id: int, actor: dict) -> None:
        """Irreversible; participation rows go with the event."""
        event = self.get(event_id)
        self._ensure_can_modify(event, actor)

        self.db.delete(event)
        self.db.commit()
        logger.info("event %s deleted by account %s", event_id, actor["id"])

    def _ensure_can_modify(self, event: Event, actor: dict) -> None:
        if event.created_by != actor["id"] and not is_admin(actor):
            raise Forbidden("Only the event creator or an admin may change this event")

    # ─── Reads ─────────────────────────────────────────────────────────────────
    def get(self, event_id: int) -> Event:
        event = self.db.get(Event, event_id)
        if not event:
            raise NotFound(f"Event {event_id} not found")
        return event

    def _base_query(self, search: Optional[str] = None):
        query = self.db.query(Event).options(joinedload(Event.creator))
        if search:
            term = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(Event.title).like(term),
                    func.lower(Event.description).like(term),
                    func.lower(Event.location).like(term),
                )
            )
        return query

    def list_all(self, search: Optional[str] = None) -> List[Event]:
        return self._base_query(search).order_by(Event.date.asc(), Event.id.asc()).all()

    def list_upcoming(self, now: datetime, search: Optional[str] = None, limit: Optional[int] = None) -> List[Event]:
        query = (
            self._base_query(search)
            .filter(Event.date >= now)
            .order_by(Event.date.asc(), Event.id.asc())
        )
        if limit:
            query = query.limit(limit)
        return query.all()

    def count_upcoming(self, now: datetime) -> int:
        return self.db.query(Event).filter(Event.date >= now).count()

    def list_joined_by(self, volunteer_id: int, search: Optional[str] = None) -> List[Event]:
        return (
            self._base_query(search)
            .join(Participation, Participation.event_id == Event.id)
            .filter(
                Participation.volunteer_id == volunteer_id,
                Participation.status.in_(ACTIVE_STATUSES),
            )
            .order_by(Event.date.asc(), Event.id.asc())
            .all()
        )

    # ─── Decoration ────────────────────────────────────────────────────────────
    def counts_by_event(self, event_ids: Iterable[int]) -> Dict[int, Tuple[int, int]]:
        """(participant_count, attended_count) per event id; cancelled rows excluded."""
        ids = list(event_ids)
        counts = {event_id: (0, 0) for event_id in ids}
        if not ids:
            return counts

        rows = (
            self.db.query(Participation.event_id, Participation.status, func.count(Participation.id))
            .filter(Participation.event_id.in_(ids))
            .group_by(Participation.event_id, Participation.status)
            .all()
        )
        for event_id, status, cnt in rows:
            participants, attended = counts[event_id]
            if status != ParticipationStatus.cancelled:
                participants += cnt
            if status == ParticipationStatus.attended:
                attended += cnt
            counts[event_id] = (participants, attended)
        return counts

    def joined_event_ids(self, volunteer_id: int, event_ids: Iterable[int]) -> set:
        ids = list(event_ids)
        if not ids:
            return set()
        rows = (
            self.db.query(Participation.event_id)
            .filter(
                Participation.volunteer_id == volunteer_id,
                Participation.event_id.in_(ids),
                Participation.status.in_(ACTIVE_STATUSES),
            )
            .all()
        )
        return {event_id for (event_id,) in rows}

    def to_read(self, events: List[Event], viewer_id: Optional[int] = None) -> List[EventRead]:
        ids = [e.id for e in events]
        counts = self.counts_by_event(ids)
        joined = self.joined_event_ids(viewer_id, ids) if viewer_id else set()

        out: List[EventRead] = []
        for event in events:
            participants, attended = counts.get(event.id, (0, 0))
            read = EventRead.model_validate(event)
            read.participant_count = participants
            read.attended_count = attended
            read.created_by_name = event.creator.display_name if event.creator else "Unknown"
            read.is_joined = event.id in joined
            out.append(read)
        return out
