# api/reports/reports_schema.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from api.user.user_model import UserRole
from api.events.participation_model import ParticipationStatus
from utils.datetime_utils import as_utc


# ─── Input records (what the aggregation functions read) ──────────────────────
class AccountRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: Optional[str] = None
    role: UserRole


class EventRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    date: datetime
    location: str
    created_at: datetime

    @field_validator("date", "created_at")
    @classmethod
    def read_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class ParticipationRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_id: int
    volunteer_id: int
    status: ParticipationStatus
    hours: int = 0
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def read_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


# ─── Report rows ───────────────────────────────────────────────────────────────
class EventReportRow(BaseModel):
    id: int
    title: str
    date: datetime
    location: str
    participant_count: int
    attended_count: int
    attendance_rate: float


class VolunteerReportRow(BaseModel):
    id: int
    name: str
    email: str
    total_events: int
    total_hours: int
    last_activity: Optional[datetime] = None


class RecentEvent(BaseModel):
    id: int
    title: str
    date: datetime
    location: str
    created_at: datetime
    participant_count: int


class DashboardStats(BaseModel):
    total_volunteers: int
    total_events: int
    total_participations: int
    active_volunteers: int
    recent_events: List[RecentEvent]


class EventReportResponse(BaseModel):
    events: List[EventReportRow]


class VolunteerReportResponse(BaseModel):
    volunteers: List[VolunteerReportRow]


class Snapshot(BaseModel):
    accounts: List[AccountRecord]
    events: List[EventRecord]
    participations: List[ParticipationRecord]
