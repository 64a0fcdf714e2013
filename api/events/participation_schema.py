from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from api.events.participation_model import ParticipationStatus
from utils.datetime_utils import as_utc


# Admin bookkeeping: join on a volunteer's behalf
class ParticipationCreate(BaseModel):
    volunteer_id: int

    model_config = ConfigDict(extra="forbid")


# Attendance payload; hours left out keeps the logged value.
# Negative hours are rejected by the service, not here, so the caller gets InvalidInput.
class AttendanceUpdate(BaseModel):
    hours: Optional[int] = None

    model_config = ConfigDict(extra="forbid")


class ParticipationRead(BaseModel):
    id: int
    event_id: int
    volunteer_id: int
    status: ParticipationStatus
    hours: int
    created_at: datetime
    updated_at: datetime
    volunteer_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def read_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class ParticipationCounts(BaseModel):
    event_id: int
    participant_count: int = Field(..., ge=0)
    attended_count: int = Field(..., ge=0)
