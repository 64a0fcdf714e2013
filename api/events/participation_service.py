import logging
from typing import List, Optional, Tuple

from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from api.user.user_model import User
from api.events.events_model import Event
from api.events.events_service import is_admin
from api.events.participation_model import Participation, ParticipationStatus
from helpers.errors import AlreadyJoined, Forbidden, InvalidInput, NotFound

logger = logging.getLogger(__name__)


class ParticipationService:
    def __init__(self, db: Session):
        self.db = db

    def _find(self, event_id: int, volunteer_id: int) -> Optional[Participation]:
        return (
            self.db.query(Participation)
            .filter_by(event_id=event_id, volunteer_id=volunteer_id)
            .first()
        )

    def join(self, event_id: int, volunteer_id: int, actor: dict) -> Participation:
        """
        Volunteers join themselves; admins may join on a volunteer's behalf.
        The (event, volunteer) unique index decides races between concurrent joins.
        """
        if actor["id"] != volunteer_id and not is_admin(actor):
            raise Forbidden("Volunteers can only join events for themselves")

        if not self.db.get(Event, event_id):
            raise NotFound(f"Event {event_id} not found")
        if not self.db.get(User, volunteer_id):
            raise NotFound(f"Account {volunteer_id} not found")

        existing = self._find(event_id, volunteer_id)
        if existing and existing.status != ParticipationStatus.cancelled:
            raise AlreadyJoined()

        if existing:
            # the unique index still holds the cancelled row, so rejoining revives it
            existing.status = ParticipationStatus.joined
            existing.hours = 0
            participation = existing
        else:
            participation = Participation(
                event_id=event_id,
                volunteer_id=volunteer_id,
                status=ParticipationStatus.joined,
                hours=0,
            )
            self.db.add(participation)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # a foreign key failure means the event or account went away after the checks above
            if not self.db.query(Event.id).filter(Event.id == event_id).first():
                raise NotFound(f"Event {event_id} not found")
            if not self.db.query(User.id).filter(User.id == volunteer_id).first():
                raise NotFound(f"Account {volunteer_id} not found")
            logger.info("duplicate join rejected for event %s volunteer %s", event_id, volunteer_id)
            raise AlreadyJoined()

        self.db.refresh(participation)
        logger.info("volunteer %s joined event %s", volunteer_id, event_id)
        return participation

    def leave(self, event_id: int, volunteer_id: int, actor: dict) -> None:
        """Leaving hard-deletes the row; history is not kept."""
        if actor["id"] != volunteer_id:
            raise Forbidden("Only the volunteer can leave an event")

        participation = self._find(event_id, volunteer_id)
        if not participation:
            raise NotFound("Participation not found")

        self.db.delete(participation)
        self.db.commit()
        logger.info("volunteer %s left event %s", volunteer_id, event_id)

    def record_attendance(
        self,
        event_id: int,
        volunteer_id: int,
        hours: Optional[int],
        actor: dict,
    ) -> Participation:
        if not is_admin(actor):
            raise Forbidden("Only admins can record attendance")
        if hours is not None and (isinstance(hours, bool) or not isinstance(hours, int) or hours < 0):
            raise InvalidInput("hours must be a non-negative integer")

        participation = self._find(event_id, volunteer_id)
        if not participation or participation.status == ParticipationStatus.cancelled:
            raise NotFound("No joined participation for this volunteer and event")

        participation.status = ParticipationStatus.attended
        if hours is not None:
            participation.hours = hours

        self.db.commit()
        self.db.refresh(participation)
        logger.info(
            "attendance recorded for volunteer %s on event %s (%s hours) by %s",
            volunteer_id, event_id, participation.hours, actor["id"],
        )
        return participation

    def count_for(self, event_id: int) -> Tuple[int, int]:
        """(participant_count, attended_count); an unknown event counts as empty."""
        participants, attended = (
            self.db.query(
                func.coalesce(
                    func.sum(case((Participation.status != ParticipationStatus.cancelled, 1), else_=0)), 0
                ),
                func.coalesce(
                    func.sum(case((Participation.status == ParticipationStatus.attended, 1), else_=0)), 0
                ),
            )
            .filter(Participation.event_id == event_id)
            .one()
        )
        return int(participants), int(attended)

    def list_participants(self, event_id: int) -> List[Participation]:
        if not self.db.get(Event, event_id):
            raise NotFound(f"Event {event_id} not found")
        return (
            self.db.query(Participation)
            .options(joinedload(Participation.volunteer))
            .filter(Participation.event_id == event_id)
            .order_by(Participation.created_at.asc(), Participation.id.asc())
            .all()
        )

    def list_for_volunteer(self, volunteer_id: int) -> List[Participation]:
        return (
            self.db.query(Participation)
            .filter(Participation.volunteer_id == volunteer_id)
            .order_by(Participation.created_at.desc())
            .all()
        )
