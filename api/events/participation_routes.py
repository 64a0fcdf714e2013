from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from middlewares.role_middleware import admin_required
from api.events.participation_schema import (
    AttendanceUpdate,
    ParticipationCounts,
    ParticipationCreate,
    ParticipationRead,
)
from api.events.participation_controller import EventJoinController

router = APIRouter(prefix="/events", tags=["Participation"])


# ─── Volunteer self-service ────────────────────────────────────────────────────
@router.post(
    "/{event_id}/join",
    response_model=ParticipationRead,
    status_code=status.HTTP_201_CREATED,
)
def join_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return EventJoinController(db).join(event_id, current_user["id"], current_user)


@router.delete("/{event_id}/join", status_code=status.HTTP_204_NO_CONTENT)
def leave_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    EventJoinController(db).leave(event_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Admin bookkeeping ─────────────────────────────────────────────────────────
@router.post(
    "/{event_id}/participants",
    response_model=ParticipationRead,
    status_code=status.HTTP_201_CREATED,
)
def add_participant(
    event_id: int,
    data: ParticipationCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(admin_required),
):
    return EventJoinController(db).join(event_id, data.volunteer_id, current_user)


@router.put(
    "/{event_id}/participants/{volunteer_id}/attendance",
    response_model=ParticipationRead,
)
def record_attendance(
    event_id: int,
    volunteer_id: int,
    data: AttendanceUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return EventJoinController(db).record_attendance(event_id, volunteer_id, data.hours, current_user)


# ─── Views ─────────────────────────────────────────────────────────────────────
@router.get("/{event_id}/participants", response_model=List[ParticipationRead])
def participants(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return EventJoinController(db).participants(event_id)


@router.get("/{event_id}/counts", response_model=ParticipationCounts)
def counts(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return EventJoinController(db).counts(event_id)
