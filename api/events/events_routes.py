from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from middlewares.role_middleware import admin_required
from api.events.events_schema import EventCreate, EventRead, EventUpdate
from api.events.events_controller import (
    list_events,
    get_event,
    create_event,
    update_event,
    delete_event,
)

router = APIRouter(prefix="/events", tags=["Events"])


# ─── Catalog ───────────────────────────────────────────────────────────────────
@router.get("", response_model=List[EventRead])
def events(
    filter: str = Query("all", description="all | upcoming | joined"),
    q: Optional[str] = Query(None, description="Search title, description and location"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return list_events(db, current_user, filter=filter, q=q)


@router.get("/joined", response_model=List[EventRead])
def joined_events(
    q: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    """Events the caller has joined or attended."""
    return list_events(db, current_user, filter="joined", q=q)


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def new_event(
    data: EventCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(admin_required),
):
    return create_event(db, data, current_user)


# ─── Single event ──────────────────────────────────────────────────────────────
@router.get("/{event_id}", response_model=EventRead)
def event_detail(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_event(db, event_id, current_user)


@router.put("/{event_id}", response_model=EventRead)
def edit_event(
    event_id: int,
    data: EventUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return update_event(db, event_id, data, current_user)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_event(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    delete_event(db, event_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
