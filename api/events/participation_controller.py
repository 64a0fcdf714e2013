from typing import List

from sqlalchemy.orm import Session

from api.events.participation_schema import (
    ParticipationCounts,
    ParticipationRead,
)
from api.events.participation_service import ParticipationService
from api.notifications.notifications_service import event_joined, attendance_recorded


def _to_read(participation) -> ParticipationRead:
    read = ParticipationRead.model_validate(participation)
    if participation.volunteer is not None:
        read.volunteer_name = participation.volunteer.display_name
    return read


class EventJoinController:
    def __init__(self, db: Session):
        self.service = ParticipationService(db)
        self.db = db

    def join(self, event_id: int, volunteer_id: int, current_user: dict) -> ParticipationRead:
        participation = self.service.join(event_id, volunteer_id, current_user)
        # Fire off listeners after the join is committed
        event_joined.send(self, db=self.db, participation=participation)
        return _to_read(participation)

    def leave(self, event_id: int, current_user: dict) -> None:
        self.service.leave(event_id, current_user["id"], current_user)

    def record_attendance(
        self, event_id: int, volunteer_id: int, hours, current_user: dict
    ) -> ParticipationRead:
        participation = self.service.record_attendance(event_id, volunteer_id, hours, current_user)
        attendance_recorded.send(self, db=self.db, participation=participation)
        return _to_read(participation)

    def participants(self, event_id: int) -> List[ParticipationRead]:
        return [_to_read(p) for p in self.service.list_participants(event_id)]

    def counts(self, event_id: int) -> ParticipationCounts:
        participants, attended = self.service.count_for(event_id)
        return ParticipationCounts(
            event_id=event_id,
            participant_count=participants,
            attended_count=attended,
        )
